"""Read and write single SANE records (one header + payload each)."""

import io
import math
from typing import BinaryIO, Optional

import numpy as np

from .config import DEFAULT_CONFIG, CodecConfig
from .data import DataType, SaneArray
from .errors import ShapeMismatch, TruncatedPayload, WrongDataType
from .header import Header, read_exact
from .payload import get_transcoder


def _prepare(array):
    if isinstance(array, SaneArray):
        array = array.array
    array = np.asarray(array)
    data_type = DataType.from_dtype(array.dtype)
    return array, data_type


def write_sane(fp: BinaryIO, array, config: Optional[CodecConfig] = None) -> int:
    """Write *array* as one SANE record to a writeable file-like object *fp*.

    Elements are written in row-major order whatever the memory layout of
    *array*. Returns the number of bytes written.
    """
    config = config or DEFAULT_CONFIG
    array, data_type = _prepare(array)
    header = Header(
        shape=array.shape,
        data_type=data_type,
        data_length=array.size * data_type.itemsize,
    )
    header_bytes = header.to_bytes()
    fp.write(header_bytes)
    written = get_transcoder(config.transcoder).encode(fp, array, data_type)
    return len(header_bytes) + written


def encode(array, config: Optional[CodecConfig] = None) -> bytes:
    """Encode *array* to SANE bytes."""
    fp = io.BytesIO()
    write_sane(fp, array, config)
    return fp.getvalue()


def _read_record(fp: BinaryIO, config: CodecConfig):
    header = Header.read(fp)
    if config.strict_length:
        expected = math.prod(header.shape) * header.data_type.itemsize
        if header.data_length != expected:
            raise ShapeMismatch(
                f"Declared payload length {header.data_length} does not match "
                f"shape {header.shape} of {header.data_type.name} ({expected} bytes)"
            )
    payload = read_exact(fp, header.data_length, config.read_chunk_size)
    if len(payload) < header.data_length:
        raise TruncatedPayload(header.data_length, len(payload))
    return header, payload


def _shape_array(header: Header, payload, config: CodecConfig) -> np.ndarray:
    elements = get_transcoder(config.transcoder).decode(payload, header.data_type)
    if elements.size != math.prod(header.shape):
        raise ShapeMismatch(
            f"Shape {header.shape} needs {math.prod(header.shape)} elements, "
            f"payload holds {elements.size}"
        )
    try:
        return elements.reshape(header.shape)
    except ValueError as exc:
        # NumPy cannot represent the shape (too many dimensions, or a
        # zero-size shape whose other dimensions overflow intp).
        raise ShapeMismatch(f"Cannot build array of shape {header.shape}: {exc}") from exc


def read_sane(
    fp: BinaryIO,
    dtype,
    ndim: Optional[int] = None,
    config: Optional[CodecConfig] = None,
) -> np.ndarray:
    """Read one SANE record of a known data type from *fp*.

    Args:
        fp: Readable file-like object positioned at a record boundary.
        dtype: Expected element type (a DataType or anything np.dtype accepts).
        ndim: Expected rank, or None to accept any rank.

    Returns:
        Array of the native dtype for *dtype*, shaped as the header declares.

    Raises:
        EndOfStream: *fp* had no bytes left.
        WrongDataType: The record holds another data type. The whole record
            has been consumed, so *fp* is left at the next record.
        ShapeMismatch: The header rank is not *ndim*, or the payload does not
            fill the declared shape.
        UnsupportedDataType: *dtype* has no SANE data type. This is checked
            before anything is read from *fp*; it is also a TypeError.
    """
    config = config or DEFAULT_CONFIG
    expected = dtype if isinstance(dtype, DataType) else DataType.from_dtype(dtype)
    header, payload = _read_record(fp, config)
    if header.data_type != expected:
        raise WrongDataType(header.data_type, expected)
    if ndim is not None and header.rank != ndim:
        raise ShapeMismatch(
            f"Expected an array of rank {ndim}, record has shape {header.shape}"
        )
    return _shape_array(header, payload, config)


def read_sane_dyn(fp: BinaryIO, config: Optional[CodecConfig] = None) -> SaneArray:
    """Read one SANE record of any data type from *fp*."""
    config = config or DEFAULT_CONFIG
    header, payload = _read_record(fp, config)
    return SaneArray(header.data_type, _shape_array(header, payload, config))


def decode(data: bytes, dtype, ndim: Optional[int] = None,
           config: Optional[CodecConfig] = None) -> np.ndarray:
    """Decode the first SANE record in *data* as an array of *dtype*."""
    return read_sane(io.BytesIO(data), dtype, ndim, config)


def decode_dyn(data: bytes, config: Optional[CodecConfig] = None) -> SaneArray:
    """Decode the first SANE record in *data*, whatever its data type."""
    return read_sane_dyn(io.BytesIO(data), config)
