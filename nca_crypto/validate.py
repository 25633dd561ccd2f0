"""
Length checks applied to every key, IV and fixed-size buffer before it
reaches a cipher primitive.

Callers may hand in bytes, bytearray, memoryview or anything else that
exports the buffer protocol; everything is normalised to an immutable
``bytes`` holding exactly the viewed window.
"""
from .errors import SizeMismatch


def as_bytes(buf) -> bytes:
    """Return the bytes covered by ``buf`` (a bytes-like object or view)."""
    if isinstance(buf, bytes):
        return buf
    try:
        view = memoryview(buf)
    except TypeError:
        raise TypeError(f"expected a bytes-like object, got {type(buf).__name__}") from None
    with view:
        return view.tobytes()


def expect_size(name: str, buf, size: int) -> bytes:
    data = as_bytes(buf)
    if len(data) != size:
        raise SizeMismatch(name, size, len(data))
    return data


def expect_min_size(name: str, buf, size: int) -> bytes:
    """Require at least ``size`` bytes and return exactly the first ``size``."""
    data = as_bytes(buf)
    if len(data) < size:
        raise SizeMismatch(name, size, len(data), minimum=True)
    return data[:size]
