"""
NCA header decryption.

The 0xC00-byte header is AES-128-XTS encrypted in 0x200-byte sectors with
the big-endian sector index as tweak. The first 0x400 bytes (signatures and
the main header) are always sectors 0 and 1. How the four section headers
that follow were encrypted depends on the format revision, which is only
known once the magic at 0x200 has been decrypted:

  NCA3: sectors 2..5, continuing the numbering
  NCA2: every section header on its own, as sector 0
"""
import logging

from .constants import (
    HEADER_KEY_SIZE,
    HEADER_MAGIC_OFFSET,
    HEADER_PREFIX_SIZE,
    HEADER_SECTOR_SIZE,
    HEADER_SIZE,
    NCA2_MAGIC,
    NCA3_MAGIC,
)
from .symmetric import aes_xts_decrypt_area, aes_xts_encrypt_area
from .validate import expect_min_size, expect_size

logger = logging.getLogger(__name__)

_PREFIX_SECTORS = HEADER_PREFIX_SIZE // HEADER_SECTOR_SIZE


def header_magic(header: bytes) -> bytes:
    """Return the 4-byte format magic of a decrypted header."""
    return bytes(header[HEADER_MAGIC_OFFSET:HEADER_MAGIC_OFFSET + 4])


def _section_headers(key: bytes, data: bytes, magic: bytes, encrypt: bool) -> bytes:
    xts_area = aes_xts_encrypt_area if encrypt else aes_xts_decrypt_area
    if magic == NCA2_MAGIC:
        return b"".join(
            xts_area(key, data[start:start + HEADER_SECTOR_SIZE], HEADER_SECTOR_SIZE, 0)
            for start in range(0, len(data), HEADER_SECTOR_SIZE)
        )
    if magic != NCA3_MAGIC:
        logger.warning("unrecognised NCA magic %r, treating section headers as NCA3", magic)
    return xts_area(key, data, HEADER_SECTOR_SIZE, _PREFIX_SECTORS)


def decrypt_header(key, header) -> bytes:
    """Decrypt the first 0xC00 bytes of ``header`` with the 0x20-byte header key.

    An unknown magic (usually a wrong key) is not an error; the result is
    simply garbage, which callers detect with :func:`header_magic`.
    """
    key = expect_size("key", key, HEADER_KEY_SIZE)
    header = expect_min_size("header", header, HEADER_SIZE)

    prefix = aes_xts_decrypt_area(key, header[:HEADER_PREFIX_SIZE], HEADER_SECTOR_SIZE, 0)
    magic = header_magic(prefix)
    logger.debug("NCA header magic %r", magic)
    return prefix + _section_headers(key, header[HEADER_PREFIX_SIZE:], magic, encrypt=False)


def encrypt_header(key, header) -> bytes:
    """Inverse of :func:`decrypt_header`; the layout follows the plaintext magic."""
    key = expect_size("key", key, HEADER_KEY_SIZE)
    header = expect_min_size("header", header, HEADER_SIZE)

    prefix = aes_xts_encrypt_area(key, header[:HEADER_PREFIX_SIZE], HEADER_SECTOR_SIZE, 0)
    magic = header_magic(header)
    return prefix + _section_headers(key, header[HEADER_PREFIX_SIZE:], magic, encrypt=True)
