"""
Seekable byte sources.

A byte source is anything with a ``size`` attribute and a
``read(offset, size)`` method returning the bytes of that window, either
directly or as an awaitable. ``CtrReader`` has the same shape, so
decrypted regions can be wrapped again.
"""
import asyncio
import inspect
import logging
import os
import threading
from typing import Awaitable, Protocol, Union, runtime_checkable

from .errors import OutOfRange
from .validate import as_bytes

logger = logging.getLogger(__name__)

ReadResult = Union[bytes, bytearray, memoryview, Awaitable[bytes]]


@runtime_checkable
class ByteSource(Protocol):
    size: int

    def read(self, offset: int, size: int) -> ReadResult:
        ...


def check_window(offset: int, size: int, limit: int) -> None:
    """Raise OutOfRange unless ``[offset, offset + size)`` lies in ``[0, limit)``."""
    if offset < 0 or size < 0 or offset + size > limit:
        raise OutOfRange(offset, size, limit)


async def read_from(source: ByteSource, offset: int, size: int) -> bytes:
    """Read from a synchronous or asynchronous source."""
    result = source.read(offset, size)
    if inspect.isawaitable(result):
        result = await result
    return as_bytes(result)


class BytesSource:
    """In-memory source."""

    def __init__(self, data):
        self._data = as_bytes(data)
        self.size = len(self._data)

    def read(self, offset: int, size: int) -> bytes:
        check_window(offset, size, self.size)
        return self._data[offset:offset + size]


class FileSource:
    """Source backed by a file opened for binary reading.

    seek + read on the shared handle is serialised with a lock; the blocking
    part runs in a worker thread so awaiting readers do not stall the loop.
    """

    def __init__(self, path: Union[str, os.PathLike]):
        self.path = os.fspath(path)
        self._file = open(self.path, "rb")
        self._lock = threading.Lock()
        self.size = os.fstat(self._file.fileno()).st_size
        logger.debug("opened %s (%d bytes)", self.path, self.size)

    def _read_locked(self, offset: int, size: int) -> bytes:
        with self._lock:
            self._file.seek(offset)
            return self._file.read(size)

    async def read(self, offset: int, size: int) -> bytes:
        check_window(offset, size, self.size)
        return await asyncio.to_thread(self._read_locked, offset, size)

    def close(self) -> None:
        self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class SliceSource:
    """Window ``[offset, offset + size)`` of another source, re-based at 0."""

    def __init__(self, source: ByteSource, offset: int, size: int):
        check_window(offset, size, source.size)
        self._source = source
        self.offset = offset
        self.size = size

    async def read(self, offset: int, size: int) -> bytes:
        check_window(offset, size, self.size)
        return await read_from(self._source, self.offset + offset, size)
