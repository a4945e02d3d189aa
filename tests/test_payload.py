"""Tests for payload transcoding, on both the zero-copy and portable paths."""

import io
import sys

import numpy as np
import pytest

from sane_array.data import DataType
from sane_array.payload import (
    HOST_TRANSCODER,
    PORTABLE,
    ZERO_COPY,
    get_transcoder,
)

TRANSCODERS = [ZERO_COPY, PORTABLE]


def _random_array(data_type, shape, seed=42):
    rng = np.random.default_rng(seed)
    dtype = data_type.dtype
    if dtype.kind == "f":
        return np.asarray(rng.standard_normal(shape)).astype(dtype)
    info = np.iinfo(dtype)
    return np.asarray(rng.integers(info.min, info.max, size=shape, dtype=dtype, endpoint=True))


class TestTranscoders:
    @pytest.mark.parametrize("transcoder", TRANSCODERS, ids=lambda t: t.name)
    def test_i32_bytes(self, transcoder):
        arr = np.array([[1, 2, 3], [4, 5, 6]], dtype=np.int32)
        expected = b"".join(v.to_bytes(4, "little") for v in range(1, 7))
        assert transcoder.to_bytes(arr, DataType.I32) == expected

    @pytest.mark.parametrize("data_type", list(DataType))
    def test_paths_byte_identical(self, data_type):
        """Both transcoders produce the same bytes for the same array."""
        arr = _random_array(data_type, (3, 4, 5))
        zero_copy = ZERO_COPY.to_bytes(arr, data_type)
        portable = PORTABLE.to_bytes(arr, data_type)
        assert zero_copy == portable
        assert len(zero_copy) == arr.size * data_type.itemsize
        assert zero_copy == arr.astype(data_type.wire_dtype).tobytes()

    @pytest.mark.parametrize("data_type", list(DataType))
    @pytest.mark.parametrize("transcoder", TRANSCODERS, ids=lambda t: t.name)
    def test_decode(self, transcoder, data_type):
        arr = _random_array(data_type, (17,))
        raw = arr.astype(data_type.wire_dtype).tobytes()
        decoded = transcoder.decode(bytearray(raw), data_type)
        assert decoded.dtype == data_type.dtype
        np.testing.assert_array_equal(decoded, arr)

    @pytest.mark.parametrize("transcoder", TRANSCODERS, ids=lambda t: t.name)
    def test_cross_decode(self, transcoder):
        """Bytes from one path decode on the other."""
        other = PORTABLE if transcoder is ZERO_COPY else ZERO_COPY
        arr = _random_array(DataType.I64, (2, 8))
        decoded = other.decode(transcoder.to_bytes(arr, DataType.I64), DataType.I64)
        np.testing.assert_array_equal(decoded, arr.reshape(-1))

    @pytest.mark.parametrize("data_type", [DataType.F32, DataType.F64])
    @pytest.mark.parametrize("transcoder", TRANSCODERS, ids=lambda t: t.name)
    def test_float_bits_preserved(self, transcoder, data_type):
        """NaN payloads, infinities and negative zero survive bit for bit."""
        bits = data_type.bits_dtype
        arr = np.array([np.nan, -np.inf, np.inf, -0.0, 1.5], dtype=data_type.dtype)
        arr.view(bits)[0] |= 1  # non-default NaN payload
        raw = transcoder.to_bytes(arr, data_type)
        decoded = transcoder.decode(raw, data_type)
        np.testing.assert_array_equal(decoded.view(bits), arr.view(bits))

    @pytest.mark.parametrize("transcoder", TRANSCODERS, ids=lambda t: t.name)
    def test_fortran_order_written_row_major(self, transcoder):
        arr = np.asfortranarray(np.arange(12, dtype=np.uint32).reshape(3, 4))
        expected = np.arange(12, dtype="<u4").tobytes()
        assert transcoder.to_bytes(arr, DataType.U32) == expected

    @pytest.mark.parametrize("transcoder", TRANSCODERS, ids=lambda t: t.name)
    def test_big_endian_input(self, transcoder):
        arr = np.arange(5, dtype=">i8")
        assert transcoder.to_bytes(arr, DataType.I64) == np.arange(5, dtype="<i8").tobytes()

    @pytest.mark.parametrize("transcoder", TRANSCODERS, ids=lambda t: t.name)
    def test_non_contiguous_input(self, transcoder):
        arr = np.arange(20, dtype=np.int8).reshape(4, 5)[:, ::2]
        assert transcoder.to_bytes(arr, DataType.I8) == arr.copy().tobytes()

    @pytest.mark.parametrize("transcoder", TRANSCODERS, ids=lambda t: t.name)
    def test_empty(self, transcoder):
        arr = np.zeros((0, 3), dtype=np.float64)
        assert transcoder.to_bytes(arr, DataType.F64) == b""
        decoded = transcoder.decode(b"", DataType.F64)
        assert decoded.shape == (0,)
        assert decoded.dtype == np.float64

    @pytest.mark.parametrize("transcoder", TRANSCODERS, ids=lambda t: t.name)
    def test_remainder_dropped(self, transcoder):
        raw = np.array([7, 8], dtype="<u4").tobytes() + b"\xff\xff"
        with pytest.warns(UserWarning, match="dropping 2 trailing bytes"):
            decoded = transcoder.decode(raw, DataType.U32)
        np.testing.assert_array_equal(decoded, [7, 8])

    @pytest.mark.parametrize("transcoder", TRANSCODERS, ids=lambda t: t.name)
    def test_encode_returns_length(self, transcoder):
        fp = io.BytesIO()
        arr = np.ones((2, 2), dtype=np.float32)
        assert transcoder.encode(fp, arr, DataType.F32) == 16
        assert len(fp.getvalue()) == 16


class TestZeroCopy:
    @pytest.mark.skipif(sys.byteorder != "little", reason="little-endian host only")
    def test_decode_shares_buffer(self):
        buf = bytearray(np.arange(4, dtype="<i4").tobytes())
        decoded = ZERO_COPY.decode(buf, DataType.I32)
        buf[0] = 9
        assert decoded[0] == 9


class TestSelection:
    def test_host_default(self):
        expected = ZERO_COPY if sys.byteorder == "little" else PORTABLE
        assert HOST_TRANSCODER is expected
        assert get_transcoder() is expected
        assert get_transcoder("auto") is expected

    def test_by_name(self):
        assert get_transcoder("zero_copy") is ZERO_COPY
        assert get_transcoder("portable") is PORTABLE

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown transcoder"):
            get_transcoder("simd")
