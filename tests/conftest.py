"""Shared fixtures and reference helpers.

Reference ciphertext is built straight from ``cryptography`` so the tests do
not depend on the package's own encrypt helpers.
"""

import asyncio

import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

EXAMPLE_KEY = bytes.fromhex("AC31F3DA4BD7C4A56116789B748CDF1F")
HEADER_KEY = bytes.fromhex(
    "AEAAB1CA08ADF9BEF12991F369E3C567"
    "D6881E4E4A6A47A51F6E4877062D542D"
)


def reference_counter(seed: bytes, block_index: int) -> bytes:
    """IV byte 15-j holds byte j of (seed_low + block_index), high half kept."""
    low = (int.from_bytes(seed[8:], "big") + block_index) % (1 << 64)
    return seed[:8] + low.to_bytes(8, "big")


def reference_ctr(key: bytes, seed: bytes, data: bytes, first_block: int = 0) -> bytes:
    """XOR ``data`` with an ECB keystream, one counter per 16-byte block."""
    ecb = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
    out = bytearray()
    for i in range(0, len(data), 16):
        block = data[i:i + 16]
        pad = ecb.update(reference_counter(seed, first_block + i // 16))
        out += bytes(a ^ b for a, b in zip(block, pad))
    return bytes(out)


def reference_xts(key: bytes, data: bytes, first_sector: int, encrypt: bool) -> bytes:
    out = bytearray()
    for i in range(0, len(data), 0x200):
        tweak = (first_sector + i // 0x200).to_bytes(16, "big")
        cipher = Cipher(algorithms.AES(key), modes.XTS(tweak))
        ctx = cipher.encryptor() if encrypt else cipher.decryptor()
        out += ctx.update(data[i:i + 0x200]) + ctx.finalize()
    return bytes(out)


class RecordingSource:
    """Synchronous in-memory source that remembers every request."""

    def __init__(self, data: bytes):
        self.data = data
        self.size = len(data)
        self.requests = []

    def read(self, offset, size):
        self.requests.append((offset, size))
        if offset < 0 or offset + size > len(self.data):
            raise IndexError(f"{offset}+{size} past {len(self.data)}")
        return memoryview(self.data)[offset:offset + size]


class AsyncSource:
    """Coroutine source that yields to the loop a varying number of times."""

    def __init__(self, data: bytes):
        self.data = data
        self.size = len(data)
        self.calls = 0

    async def read(self, offset, size):
        self.calls += 1
        for _ in range((offset // 16) % 5):
            await asyncio.sleep(0)
        return self.data[offset:offset + size]


@pytest.fixture
def example_key():
    return EXAMPLE_KEY


@pytest.fixture
def header_key():
    return HEADER_KEY


@pytest.fixture
def plaintext():
    """A little over 4 KiB of patterned data, deliberately not block aligned."""
    return bytes((i * 7 + (i >> 8)) & 0xFF for i in range(4096 + 11))
