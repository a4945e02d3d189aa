"""SANE data types and the tagged array value returned by dynamic decode.

Wire codes:
    0=f32, 1=i32, 2=u32, 3=f64, 4=i64, 5=u64, 6=i8, 7=u8

The set is closed: adding a type means changing the wire format.
"""

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from .errors import InvalidCode, UnsupportedDataType


class DataType(IntEnum):
    """Element type of a SANE array. The value is the wire code."""

    F32 = 0
    I32 = 1
    U32 = 2
    F64 = 3
    I64 = 4
    U64 = 5
    I8 = 6
    U8 = 7

    @property
    def dtype(self) -> np.dtype:
        """Native-order NumPy dtype."""
        return _NATIVE_DTYPES[self]

    @property
    def wire_dtype(self) -> np.dtype:
        """Little-endian NumPy dtype, the byte layout used on the wire."""
        return _NATIVE_DTYPES[self].newbyteorder("<")

    @property
    def bits_dtype(self) -> np.dtype:
        """Native unsigned integer dtype of the same width (raw bit pattern)."""
        return _BITS_DTYPES[self.itemsize]

    @property
    def itemsize(self) -> int:
        return _NATIVE_DTYPES[self].itemsize

    @classmethod
    def from_dtype(cls, dtype) -> "DataType":
        """Map a NumPy dtype of any byte order to its SANE data type."""
        dtype = np.dtype(dtype)
        try:
            return _KIND_SIZE_TO_TYPE[(dtype.kind, dtype.itemsize)]
        except KeyError:
            raise UnsupportedDataType(dtype) from None


_NATIVE_DTYPES = {
    DataType.F32: np.dtype(np.float32),
    DataType.I32: np.dtype(np.int32),
    DataType.U32: np.dtype(np.uint32),
    DataType.F64: np.dtype(np.float64),
    DataType.I64: np.dtype(np.int64),
    DataType.U64: np.dtype(np.uint64),
    DataType.I8: np.dtype(np.int8),
    DataType.U8: np.dtype(np.uint8),
}

_BITS_DTYPES = {
    1: np.dtype(np.uint8),
    4: np.dtype(np.uint32),
    8: np.dtype(np.uint64),
}

_KIND_SIZE_TO_TYPE = {
    (dt.kind, dt.itemsize): data_type for data_type, dt in _NATIVE_DTYPES.items()
}


def parse_data_type(code: int) -> DataType:
    """Parse a SANE-encoded type code into the corresponding DataType.

    Raises InvalidCode for any code outside 0..7.
    """
    try:
        return DataType(code)
    except ValueError:
        raise InvalidCode(code) from None


def data_type_code(data_type: DataType) -> int:
    """Get the u8 SANE encoding of a DataType."""
    return int(DataType(data_type))


@dataclass(frozen=True, eq=False)
class SaneArray:
    """An array with dynamic shape and one of the supported data types.

    Returned by dynamic decode, when the element type is only known from the
    record header. ``data_type`` is the tag; ``array`` always has the tag's
    native dtype.
    """

    data_type: DataType
    array: np.ndarray

    def __post_init__(self):
        if DataType.from_dtype(self.array.dtype) != self.data_type:
            raise TypeError(
                f"Array of dtype {self.array.dtype} cannot be tagged {self.data_type.name}"
            )
        if not self.array.dtype.isnative:
            object.__setattr__(self, "array", self.array.astype(self.data_type.dtype))

    @classmethod
    def from_array(cls, array) -> "SaneArray":
        """Tag *array*; non-native byte order is converted to native."""
        array = np.asarray(array)
        return cls(DataType.from_dtype(array.dtype), array)

    @property
    def shape(self) -> tuple:
        return self.array.shape

    def __eq__(self, other):
        if not isinstance(other, SaneArray):
            return NotImplemented
        return (
            self.data_type == other.data_type
            and self.array.shape == other.array.shape
            and np.array_equal(self.array, other.array, equal_nan=self.data_type in _FLOAT_TYPES)
        )

    def __repr__(self):
        return f"SaneArray({self.data_type.name}, shape={self.array.shape})"


_FLOAT_TYPES = (DataType.F32, DataType.F64)
