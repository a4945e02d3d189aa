"""Payload transcoding between NumPy arrays and little-endian wire bytes.

Two implementations of the same capability:

  - ZeroCopyTranscoder reinterprets buffers in place. On a little-endian
    host there is no per-element work at all.
  - PortableTranscoder converts each element through its raw bit pattern
    with int.to_bytes / int.from_bytes, independent of host byte order.

Both produce identical bytes for the same array. The host default is chosen
once at import time from sys.byteorder.
"""

import sys
import warnings
from typing import BinaryIO

import numpy as np

from .data import DataType


class Transcoder:
    """Convert between arrays and little-endian payload bytes."""

    name = "base"

    def encode(self, fp: BinaryIO, array: np.ndarray, data_type: DataType) -> int:
        """Write the elements of *array* in row-major order to *fp*.

        Returns the number of bytes written.
        """
        raise NotImplementedError

    def decode(self, data, data_type: DataType) -> np.ndarray:
        """Interpret *data* as a flat sequence of *data_type* elements.

        A trailing remainder shorter than one element is dropped.
        """
        raise NotImplementedError

    def to_bytes(self, array: np.ndarray, data_type: DataType) -> bytes:
        parts = _ByteSink()
        self.encode(parts, array, data_type)
        return parts.getvalue()


class _ByteSink:
    def __init__(self):
        self._parts = []

    def write(self, data):
        self._parts.append(bytes(data))
        return len(data)

    def getvalue(self) -> bytes:
        return b"".join(self._parts)


def _element_count(data, data_type: DataType) -> int:
    n_bytes = len(data)
    count, remainder = divmod(n_bytes, data_type.itemsize)
    if remainder:
        warnings.warn(
            f"Payload of {n_bytes} bytes is not a multiple of the "
            f"{data_type.name} element size; dropping {remainder} trailing bytes"
        )
    return count


class ZeroCopyTranscoder(Transcoder):
    """Reinterpret the element buffer as bytes and back."""

    name = "zero_copy"

    def encode(self, fp, array, data_type):
        # No copy when the array is already C-contiguous little-endian.
        wire = np.ascontiguousarray(array, dtype=data_type.wire_dtype)
        raw = wire.reshape(-1).view(np.uint8)
        fp.write(memoryview(raw))
        return raw.size

    def decode(self, data, data_type):
        count = _element_count(data, data_type)
        if count == 0:
            return np.empty(0, dtype=data_type.dtype)
        values = np.frombuffer(data, dtype=data_type.wire_dtype, count=count)
        if not values.dtype.isnative:
            values = values.astype(data_type.dtype)
        return values


class PortableTranscoder(Transcoder):
    """Convert element by element with explicit little-endian encoding."""

    name = "portable"

    def encode(self, fp, array, data_type):
        size = data_type.itemsize
        elements = np.ascontiguousarray(array, dtype=data_type.dtype).reshape(-1)
        for bits in elements.view(data_type.bits_dtype).tolist():
            fp.write(bits.to_bytes(size, "little"))
        return elements.size * size

    def decode(self, data, data_type):
        size = data_type.itemsize
        count = _element_count(data, data_type)
        bits = [
            int.from_bytes(data[i * size:(i + 1) * size], "little")
            for i in range(count)
        ]
        return np.array(bits, dtype=data_type.bits_dtype).view(data_type.dtype)


ZERO_COPY = ZeroCopyTranscoder()
PORTABLE = PortableTranscoder()

HOST_TRANSCODER = ZERO_COPY if sys.byteorder == "little" else PORTABLE

_BY_NAME = {
    "auto": HOST_TRANSCODER,
    ZERO_COPY.name: ZERO_COPY,
    PORTABLE.name: PORTABLE,
}


def get_transcoder(name: str = "auto") -> Transcoder:
    """Look up a transcoder by config name ('auto', 'zero_copy', 'portable')."""
    try:
        return _BY_NAME[name]
    except KeyError:
        raise ValueError(f"Unknown transcoder: {name!r}") from None
