"""Errors raised while reading and writing SANE records."""


class SaneError(Exception):
    """Base class for all SANE codec errors."""


class EndOfStream(EOFError):
    """The stream ended cleanly at a record boundary.

    This is not a failure: it is how the stream codec learns that the last
    record has been read.
    """

    def __init__(self):
        super().__init__("No more SANE records in stream")


# ---- Read path ----


class ParseError(SaneError, ValueError):
    """A SANE record could not be decoded."""


class NotSaneFormat(ParseError):
    """The record does not start with the ``SANE`` magic."""

    magic: bytes

    def __init__(self, magic: bytes):
        self.magic = magic
        super().__init__(f"Not a SANE array: bad magic {magic!r}")


class InvalidCode(ParseError):
    """The header carries a data type code outside the registry."""

    code: int
    """The unrecognized code, eg. `8`"""

    def __init__(self, code: int):
        self.code = code
        super().__init__(f"Invalid data type code: {code}")


class TruncatedHeader(ParseError):
    """The stream ended inside a record header."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Not enough bytes for header: expected {expected}, got {actual}"
        )


class TruncatedPayload(ParseError):
    """The stream ended before the declared payload length was read."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Not enough bytes for payload: expected {expected}, got {actual}"
        )


class SizeOverflow(ParseError):
    """A declared rank, dimension or length does not fit the platform size."""

    def __init__(self, field: str, value: int):
        self.field = field
        self.value = value
        super().__init__(f"Cannot convert {field} {value} to size")


class ShapeMismatch(ParseError):
    """Declared shape disagrees with the requested rank or the element count."""

    def __init__(self, message: str):
        super().__init__(message)


class WrongDataType(ParseError):
    """A typed read found a record of a different data type."""

    def __init__(self, data_type, expected=None):
        self.data_type = data_type
        self.expected = expected
        msg = f"unexpected data type {data_type.name}"
        if expected is not None:
            msg += f" (expected {expected.name})"
        super().__init__(msg)


# ---- Write path ----


class WriteError(SaneError, ValueError):
    """An array could not be encoded as a SANE record."""


class RankTooLarge(WriteError):
    def __init__(self, rank: int):
        self.rank = rank
        super().__init__(f"Shape length {rank} doesn't fit in 32 bits")


class DimensionTooLarge(WriteError):
    def __init__(self, dim: int):
        self.dim = dim
        super().__init__(f"Dimension size {dim} doesn't fit in 64 bits")


class PayloadTooLarge(WriteError):
    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Length of array data {length} doesn't fit in 64 bits")


class UnsupportedDataType(WriteError, TypeError):
    """The array's dtype has no SANE data type."""

    def __init__(self, dtype):
        self.dtype = dtype
        super().__init__(f"Unsupported NumPy array type {dtype}")
