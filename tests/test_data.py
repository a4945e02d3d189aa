"""Tests for the SANE data type registry and SaneArray."""

import numpy as np
import pytest

from sane_array.data import DataType, SaneArray, data_type_code, parse_data_type
from sane_array.errors import InvalidCode, UnsupportedDataType


class TestTypeCodes:
    def test_code_table(self):
        """Wire codes match the format's fixed table."""
        expected = {
            0: np.float32, 1: np.int32, 2: np.uint32, 3: np.float64,
            4: np.int64, 5: np.uint64, 6: np.int8, 7: np.uint8,
        }
        for code, np_type in expected.items():
            assert parse_data_type(code).dtype == np.dtype(np_type)

    @pytest.mark.parametrize("code", range(8))
    def test_code_roundtrip(self, code):
        assert data_type_code(parse_data_type(code)) == code

    @pytest.mark.parametrize("data_type", list(DataType))
    def test_type_roundtrip(self, data_type):
        assert parse_data_type(data_type_code(data_type)) is data_type

    @pytest.mark.parametrize("code", [8, 9, 42, 255])
    def test_invalid_code(self, code):
        with pytest.raises(InvalidCode) as excinfo:
            parse_data_type(code)
        assert excinfo.value.code == code

    def test_invalid_code_is_value_error(self):
        with pytest.raises(ValueError, match="Invalid data type code: 8"):
            parse_data_type(8)


class TestFromDtype:
    @pytest.mark.parametrize("data_type", list(DataType))
    def test_native(self, data_type):
        assert DataType.from_dtype(data_type.dtype) is data_type

    @pytest.mark.parametrize("data_type", list(DataType))
    def test_byte_order_ignored(self, data_type):
        assert DataType.from_dtype(data_type.dtype.newbyteorder(">")) is data_type
        assert DataType.from_dtype(data_type.wire_dtype) is data_type

    def test_strings_accepted(self):
        assert DataType.from_dtype("<f4") is DataType.F32
        assert DataType.from_dtype(">u8") is DataType.U64

    @pytest.mark.parametrize("dtype", [np.bool_, np.float16, np.int16, np.uint16,
                                       np.complex64, "U3"])
    def test_unsupported(self, dtype):
        with pytest.raises(UnsupportedDataType):
            DataType.from_dtype(dtype)

    def test_sizes(self):
        assert [t.itemsize for t in DataType] == [4, 4, 4, 8, 8, 8, 1, 1]
        for t in DataType:
            assert t.bits_dtype.itemsize == t.itemsize
            assert t.bits_dtype.kind == "u"
            assert t.wire_dtype.str[0] in "<|"


class TestSaneArray:
    def test_from_array(self):
        value = SaneArray.from_array(np.zeros((2, 3), dtype=np.uint32))
        assert value.data_type is DataType.U32
        assert value.shape == (2, 3)

    def test_tag_must_match_dtype(self):
        with pytest.raises(TypeError):
            SaneArray(DataType.F32, np.zeros(3, dtype=np.int32))

    def test_equality(self):
        a = SaneArray.from_array(np.array([1.0, np.nan], dtype=np.float64))
        b = SaneArray.from_array(np.array([1.0, np.nan], dtype=np.float64))
        assert a == b
        assert a != SaneArray.from_array(np.array([1.0, np.nan], dtype=np.float32))
        assert a != SaneArray.from_array(np.array([[1.0, np.nan]], dtype=np.float64))

    def test_repr(self):
        value = SaneArray.from_array(np.zeros((4,), dtype=np.int8))
        assert repr(value) == "SaneArray(I8, shape=(4,))"


class TestSaneArrayByteOrder:
    def test_from_array_big_endian(self):
        value = SaneArray.from_array(np.arange(3, dtype=">i8"))
        assert value.data_type is DataType.I64
        assert value.array.dtype == np.dtype(np.int64)
        assert value.array.dtype.isnative
        np.testing.assert_array_equal(value.array, [0, 1, 2])

    def test_constructor_big_endian(self):
        value = SaneArray(DataType.F32, np.ones(2, dtype=">f4"))
        assert value.array.dtype == DataType.F32.dtype
        np.testing.assert_array_equal(value.array, [1.0, 1.0])
