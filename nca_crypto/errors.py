"""
Errors raised by nca_crypto.

Only local contract violations get their own type. Failures of the
underlying byte source or of the cipher primitives are propagated as
raised, never wrapped.
"""


class NcaCryptoError(Exception):
    """Base class for errors raised by this package."""


class SizeMismatch(NcaCryptoError, ValueError):
    """A key, IV or fixed-size buffer has the wrong length."""

    def __init__(self, name: str, expected: int, actual: int, minimum: bool = False):
        self.name = name
        self.expected = expected
        self.actual = actual
        self.minimum = minimum
        qualifier = "at least " if minimum else ""
        super().__init__(
            f"'{name}' must be {qualifier}0x{expected:X} bytes long, got {actual}"
        )


class OutOfRange(NcaCryptoError, IndexError):
    """A read window does not fit inside the region being read."""

    def __init__(self, offset: int, size: int, limit: int):
        self.offset = offset
        self.size = size
        self.limit = limit
        super().__init__(
            f"read of {size} bytes at offset {offset} exceeds region size {limit}"
        )
