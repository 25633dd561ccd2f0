"""
Random-access AES-128-CTR decryption of a content region.

The counter for a block is a pure function of the session's counter seed
and the absolute index of the block in the underlying source:

    counter = seed[0:8] || be64((be64(seed[8:16]) + block_index) mod 2**64)

so any window can be decrypted without touching the blocks before it.
A read at an arbitrary offset fetches the block-aligned ciphertext that
covers it, decrypts the whole run starting from the first block's counter
and trims the result to the requested window.
"""
import logging
from typing import AsyncIterator, Optional

from .constants import (
    BLOCK_SIZE,
    COUNTER_MASK,
    COUNTER_NONCE_SIZE,
    DEFAULT_CHUNK_SIZE,
    IV_SIZE,
    KEY_SIZE,
)
from .errors import OutOfRange
from .source import ByteSource, check_window, read_from
from .symmetric import aes_ctr_decrypt
from .validate import expect_size

logger = logging.getLogger(__name__)

ZERO_COUNTER = bytes(IV_SIZE)


def derive_counter(seed, block_index: int) -> bytes:
    """Counter block for ``block_index`` (absolute, in 16-byte blocks)."""
    seed = expect_size("counter", seed, IV_SIZE)
    if block_index < 0:
        raise ValueError(f"block index must be non-negative, got {block_index}")
    low = (int.from_bytes(seed[COUNTER_NONCE_SIZE:], "big") + block_index) & COUNTER_MASK
    return seed[:COUNTER_NONCE_SIZE] + low.to_bytes(IV_SIZE - COUNTER_NONCE_SIZE, "big")


def decrypt_blocks(key: bytes, seed: bytes, block_index: int, ciphertext: bytes) -> bytes:
    """Decrypt ciphertext whose first byte starts block ``block_index``.

    The cipher increments the whole 128-bit counter, so a run is split where
    the low 64 bits wrap to keep the nonce half untouched.
    """
    parts = []
    pos = 0
    while pos < len(ciphertext):
        counter = derive_counter(seed, block_index)
        blocks_to_wrap = COUNTER_MASK + 1 - int.from_bytes(counter[COUNTER_NONCE_SIZE:], "big")
        chunk = ciphertext[pos:pos + blocks_to_wrap * BLOCK_SIZE]
        parts.append(aes_ctr_decrypt(key, counter, chunk))
        pos += len(chunk)
        block_index += blocks_to_wrap
    return b"".join(parts)


class CtrReader:
    """Decrypted view of a CTR-encrypted region of ``source``.

    ``base_offset`` is where the region starts inside ``source``; offsets
    passed to :meth:`read` are relative to it while counters are derived
    from the absolute position. ``size`` defaults to the rest of the source.

    The reader never mutates its fields after construction and keeps no
    scratch buffers, so concurrent reads need no locking. The source is
    borrowed: it is neither written to nor closed.
    """

    def __init__(self, key: bytes, source: ByteSource, counter: bytes = ZERO_COUNTER,
                 base_offset: int = 0, size: Optional[int] = None):
        self._key = expect_size("key", key, KEY_SIZE)
        self._counter = expect_size("counter", counter, IV_SIZE)
        if base_offset < 0:
            raise ValueError(f"base offset must be non-negative, got {base_offset}")
        if size is None:
            size = source.size - base_offset
        check_window(base_offset, size, source.size)

        self._source = source
        self.base_offset = base_offset
        self.size = size

    @property
    def counter(self) -> bytes:
        return self._counter

    def counter_for(self, offset: int) -> bytes:
        """Counter of the block holding region offset ``offset``."""
        return derive_counter(self._counter, (self.base_offset + offset) // BLOCK_SIZE)

    async def _fetch(self, offset: int, size: int) -> bytes:
        try:
            return await read_from(self._source, offset, size)
        except OutOfRange:
            raise
        except (IndexError, EOFError) as exc:
            raise OutOfRange(offset, size, self._source.size) from exc

    async def read(self, offset: int, size: int) -> bytes:
        """Return exactly ``size`` decrypted bytes starting at region ``offset``."""
        check_window(offset, size, self.size)
        if size == 0:
            return b""

        position = self.base_offset + offset
        skew = position % BLOCK_SIZE
        aligned_start = position - skew
        aligned_end = -(-(position + size) // BLOCK_SIZE) * BLOCK_SIZE
        # region may end mid-block at the end of the source
        aligned_end = min(aligned_end, self._source.size)

        ciphertext = await self._fetch(aligned_start, aligned_end - aligned_start)
        if len(ciphertext) < skew + size:
            raise OutOfRange(offset, size, self.size)

        plaintext = decrypt_blocks(self._key, self._counter, aligned_start // BLOCK_SIZE, ciphertext)
        return plaintext[skew:skew + size]

    async def read_all(self) -> bytes:
        return await self.read(0, self.size)

    def window_size(self, offset: int, size: Optional[int] = None) -> int:
        """Size of the window at ``offset``, up to the region end when ``size`` is None.

        Raises OutOfRange if the window does not fit in the region.
        """
        if size is None:
            check_window(offset, 0, self.size)
            size = self.size - offset
        check_window(offset, size, self.size)
        return size

    async def iter_chunks(self, chunk_size: int = DEFAULT_CHUNK_SIZE, offset: int = 0,
                          size: Optional[int] = None) -> AsyncIterator[bytes]:
        """Yield the window ``[offset, offset + size)`` in ``chunk_size`` pieces."""
        if chunk_size <= 0:
            raise ValueError(f"chunk size must be positive, got {chunk_size}")
        size = self.window_size(offset, size)

        end = offset + size
        while offset < end:
            n = min(chunk_size, end - offset)
            yield await self.read(offset, n)
            offset += n


def create_ctr(key, source: ByteSource, counter=ZERO_COUNTER, base_offset: int = 0,
               size: Optional[int] = None) -> CtrReader:
    """Open a CTR session over ``source`` (0x10-byte key and counter seed)."""
    reader = CtrReader(key, source, counter=counter, base_offset=base_offset, size=size)
    logger.debug("opened CTR session over %d bytes", reader.size)
    return reader
