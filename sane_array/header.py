"""SANE record header.

HEADER (variable length):
    magic: bytes[4] = b'SANE'
    rank: uint32
    dims: uint64[rank]         # reverse of the logical shape order
    data_type: uint8           # see data.DataType
    data_length: uint64        # payload length in bytes

All integers are little-endian. The dimensions are stored innermost first,
so a (2, 3) array is written as dims [3, 2].
"""

import struct
import sys
from dataclasses import dataclass
from typing import BinaryIO, Sequence

from .data import DataType, data_type_code, parse_data_type
from .errors import (
    DimensionTooLarge,
    EndOfStream,
    NotSaneFormat,
    PayloadTooLarge,
    RankTooLarge,
    SizeOverflow,
    TruncatedHeader,
)

MAGIC = b"SANE"

_RANK = struct.Struct("<4sI")
_DIM = struct.Struct("<Q")
_TRAILER = struct.Struct("<BQ")

MAX_U32 = 0xFFFFFFFF
MAX_U64 = 0xFFFFFFFFFFFFFFFF


def read_exact(fp: BinaryIO, n: int, chunk_size: int = 1 << 20) -> bytearray:
    """Read up to *n* bytes from *fp*, stopping early only at end of stream.

    Reads in chunks of at most *chunk_size* bytes so that a large declared
    length is not allocated up front. The caller compares ``len()`` of the
    result with *n* to detect a short read.
    """
    buf = bytearray()
    while len(buf) < n:
        chunk = fp.read(min(chunk_size, n - len(buf)))
        if not chunk:
            break
        buf += chunk
    return buf


def _as_size(field: str, value: int) -> int:
    if value > sys.maxsize:
        raise SizeOverflow(field, value)
    return value


@dataclass
class Header:
    """Parsed SANE record header.

    ``data_length`` is stored independently of ``shape``; it is not checked
    against ``prod(shape) * itemsize`` here.
    """

    shape: tuple
    data_type: DataType
    data_length: int

    @property
    def rank(self) -> int:
        return len(self.shape)

    @property
    def size(self) -> int:
        """Total byte length of the encoded header."""
        return _RANK.size + self.rank * _DIM.size + _TRAILER.size

    def to_bytes(self) -> bytes:
        rank = len(self.shape)
        if rank > MAX_U32:
            raise RankTooLarge(rank)
        parts = [_RANK.pack(MAGIC, rank)]
        for dim in reversed(self.shape):
            dim = int(dim)
            if dim < 0 or dim > MAX_U64:
                raise DimensionTooLarge(dim)
            parts.append(_DIM.pack(dim))
        length = int(self.data_length)
        if length < 0 or length > MAX_U64:
            raise PayloadTooLarge(length)
        parts.append(_TRAILER.pack(data_type_code(self.data_type), length))
        return b"".join(parts)

    @classmethod
    def read(cls, fp: BinaryIO) -> "Header":
        """Read a header from a readable file-like object *fp*.

        Raises EndOfStream if *fp* is exhausted before the first byte.
        """
        magic = read_exact(fp, len(MAGIC))
        if not magic:
            raise EndOfStream()
        if len(magic) < len(MAGIC):
            raise TruncatedHeader(len(MAGIC), len(magic))
        if magic != MAGIC:
            raise NotSaneFormat(bytes(magic))

        rank_bytes = read_exact(fp, 4)
        if len(rank_bytes) < 4:
            raise TruncatedHeader(4, len(rank_bytes))
        rank = _as_size("rank", struct.unpack("<I", rank_bytes)[0])

        dims_bytes = read_exact(fp, rank * _DIM.size)
        if len(dims_bytes) < rank * _DIM.size:
            raise TruncatedHeader(rank * _DIM.size, len(dims_bytes))
        dims = [_as_size("dimension", d) for (d,) in _DIM.iter_unpack(dims_bytes)]
        dims.reverse()

        code = read_exact(fp, 1)
        if not code:
            raise TruncatedHeader(1, 0)
        data_type = parse_data_type(code[0])

        length_bytes = read_exact(fp, _DIM.size)
        if len(length_bytes) < _DIM.size:
            raise TruncatedHeader(_DIM.size, len(length_bytes))
        (data_length,) = _DIM.unpack(length_bytes)

        return cls(
            shape=tuple(dims),
            data_type=data_type,
            data_length=_as_size("data length", data_length),
        )


def write_header(
    fp: BinaryIO, shape: Sequence[int], data_type: DataType, data_length: int
) -> int:
    """Write a record header to *fp*. Returns the number of bytes written."""
    header_bytes = Header(tuple(shape), DataType(data_type), data_length).to_bytes()
    fp.write(header_bytes)
    return len(header_bytes)


def read_header(fp: BinaryIO) -> Header:
    """Read a record header from *fp*."""
    return Header.read(fp)
