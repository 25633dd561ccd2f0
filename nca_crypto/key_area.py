"""
Key area decryption.

The key area is a run of 0x10-byte entries, each AES-128-ECB encrypted
with the key area key. Entries are unrelated to each other (no chaining)
but their position matters: callers index the result by key slot.
"""
from typing import Iterable, List

from .constants import KEY_AREA_ELEMENT_COUNT, KEY_AREA_ELEMENT_SIZE, KEY_SIZE
from .symmetric import aes_ecb_decrypt, aes_ecb_encrypt
from .validate import expect_size


def _elements(area: Iterable) -> List[bytes]:
    return [
        expect_size(f"area[{i}]", chunk, KEY_AREA_ELEMENT_SIZE)
        for i, chunk in enumerate(area)
    ]


def split_key_area(buf, count: int = KEY_AREA_ELEMENT_COUNT) -> List[bytes]:
    """Split a raw key area (``count`` * 0x10 bytes) into its entries."""
    data = expect_size("key_area", buf, count * KEY_AREA_ELEMENT_SIZE)
    return [
        data[start:start + KEY_AREA_ELEMENT_SIZE]
        for start in range(0, len(data), KEY_AREA_ELEMENT_SIZE)
    ]


def decrypt_key_area(key, area: Iterable) -> List[bytes]:
    """Decrypt every entry of ``area``, preserving order.

    All entries are checked before anything is decrypted.
    """
    key = expect_size("key", key, KEY_SIZE)
    return [aes_ecb_decrypt(key, chunk) for chunk in _elements(area)]


def encrypt_key_area(key, area: Iterable) -> List[bytes]:
    key = expect_size("key", key, KEY_SIZE)
    return [aes_ecb_encrypt(key, chunk) for chunk in _elements(area)]
