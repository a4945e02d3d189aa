"""SANE (Simple Array of Numbers Encoding) codec for NumPy arrays.

    import sane_array
    data = sane_array.encode(np.arange(6, dtype=np.int32).reshape(2, 3))
    arr = sane_array.decode(data, np.int32, ndim=2)
    value = sane_array.decode_dyn(data)       # SaneArray(I32, shape=(2, 3))

Streams of records:
    with open("arrays.sane", "wb") as f:
        sane_array.write_sane_many(f, [a, b])
    with open("arrays.sane", "rb") as f:
        values = sane_array.read_sane_many_dyn(f)
"""

__version__ = "0.1.0"

from .config import CodecConfig
from .data import DataType, SaneArray, data_type_code, parse_data_type
from .errors import (
    DimensionTooLarge,
    EndOfStream,
    InvalidCode,
    NotSaneFormat,
    ParseError,
    PayloadTooLarge,
    RankTooLarge,
    SaneError,
    ShapeMismatch,
    SizeOverflow,
    TruncatedHeader,
    TruncatedPayload,
    UnsupportedDataType,
    WriteError,
    WrongDataType,
)
from .header import Header, read_header, write_header
from .record import decode, decode_dyn, encode, read_sane, read_sane_dyn, write_sane
from .stream import (
    decode_many,
    decode_many_dyn,
    encode_many,
    iter_headers,
    iter_sane,
    read_sane_many,
    read_sane_many_dyn,
    write_sane_many,
)

__all__ = [
    "CodecConfig",
    "DataType",
    "SaneArray",
    "Header",
    "data_type_code",
    "parse_data_type",
    "read_header",
    "write_header",
    "encode",
    "decode",
    "decode_dyn",
    "write_sane",
    "read_sane",
    "read_sane_dyn",
    "encode_many",
    "decode_many",
    "decode_many_dyn",
    "write_sane_many",
    "read_sane_many",
    "read_sane_many_dyn",
    "iter_sane",
    "iter_headers",
    "SaneError",
    "ParseError",
    "WriteError",
    "EndOfStream",
    "NotSaneFormat",
    "InvalidCode",
    "TruncatedHeader",
    "TruncatedPayload",
    "SizeOverflow",
    "ShapeMismatch",
    "WrongDataType",
    "RankTooLarge",
    "DimensionTooLarge",
    "PayloadTooLarge",
    "UnsupportedDataType",
]
