"""Sequences of SANE records over a single byte stream.

Format:
    record | record | ... | record

Records are concatenated with no count prefix, separator or trailer. Running
out of bytes exactly at a record boundary ends the stream; running out
anywhere else is an error.
"""

import io
from typing import BinaryIO, Iterable, Iterator, List, Optional, Union

import numpy as np

from .config import DEFAULT_CONFIG, CodecConfig
from .data import SaneArray
from .errors import EndOfStream, TruncatedPayload
from .header import Header, read_exact
from .record import read_sane, read_sane_dyn, write_sane


def write_sane_many(fp: BinaryIO, arrays: Iterable,
                    config: Optional[CodecConfig] = None) -> int:
    """Write each array in *arrays* as a record. Returns total bytes written."""
    total = 0
    for array in arrays:
        total += write_sane(fp, array, config)
    return total


def encode_many(arrays: Iterable, config: Optional[CodecConfig] = None) -> bytes:
    """Encode *arrays* to one SANE byte stream."""
    fp = io.BytesIO()
    write_sane_many(fp, arrays, config)
    return fp.getvalue()


def iter_sane(
    fp: BinaryIO,
    dtype=None,
    ndim: Optional[int] = None,
    config: Optional[CodecConfig] = None,
) -> Iterator[Union[np.ndarray, SaneArray]]:
    """Generator that reads records from *fp* until the stream ends.

    Yields ndarrays of *dtype* when it is given, otherwise SaneArray values.
    Errors other than a clean end of stream propagate to the caller after
    the records already yielded.
    """
    while True:
        try:
            if dtype is None:
                value = read_sane_dyn(fp, config)
            else:
                value = read_sane(fp, dtype, ndim, config)
        except EndOfStream:
            return
        yield value


def read_sane_many(
    fp: BinaryIO,
    dtype,
    ndim: Optional[int] = None,
    config: Optional[CodecConfig] = None,
) -> List[np.ndarray]:
    """Read all remaining records of *dtype* from *fp*.

    Returns an empty list if *fp* is already exhausted. On any error nothing
    is returned; records decoded before the failure are discarded.
    """
    return list(iter_sane(fp, dtype, ndim, config))


def read_sane_many_dyn(fp: BinaryIO,
                       config: Optional[CodecConfig] = None) -> List[SaneArray]:
    """Read all remaining records from *fp*, whatever their data types."""
    return list(iter_sane(fp, None, None, config))


def decode_many(data: bytes, dtype, ndim: Optional[int] = None,
                config: Optional[CodecConfig] = None) -> List[np.ndarray]:
    return read_sane_many(io.BytesIO(data), dtype, ndim, config)


def decode_many_dyn(data: bytes,
                    config: Optional[CodecConfig] = None) -> List[SaneArray]:
    return read_sane_many_dyn(io.BytesIO(data), config)


def iter_headers(fp: BinaryIO, config: Optional[CodecConfig] = None) -> Iterator[Header]:
    """Yield the header of each record in *fp*, skipping over the payloads.

    The payloads are still read (not seeked) so that truncation is detected.
    """
    config = config or DEFAULT_CONFIG
    while True:
        try:
            header = Header.read(fp)
        except EndOfStream:
            return
        remaining = header.data_length
        while remaining:
            chunk = read_exact(fp, min(remaining, config.read_chunk_size))
            if not chunk:
                raise TruncatedPayload(header.data_length, header.data_length - remaining)
            remaining -= len(chunk)
        yield header
