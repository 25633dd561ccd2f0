"""
AES building blocks used by the container decryptors.

ECB: key area entries, one 16-byte block each
CBC: XCI gamecard info, 0x70 bytes under a single IV
CTR: content sections, counter derived from the block index
XTS: NCA header, 0x200-byte sectors tweaked with the sector index

XTS caveat: the tweak is passed during cipher creation, so every sector
gets its own Cipher object.
"""
from typing import Callable

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.backends import default_backend

from .constants import BLOCK_SIZE, IV_SIZE

TweakFn = Callable[[int], bytes]


def nintendo_tweak(sector_index: int) -> bytes:
    """Tweak = sector index as a 16-byte big-endian integer."""
    return sector_index.to_bytes(IV_SIZE, byteorder="big")


# ----------------------------
# ECB
# ----------------------------
def aes_ecb_decrypt(key: bytes, ciphertext: bytes) -> bytes:
    cipher = Cipher(algorithms.AES(key), modes.ECB(), backend=default_backend())
    decryptor = cipher.decryptor()
    return decryptor.update(ciphertext) + decryptor.finalize()


def aes_ecb_encrypt(key: bytes, plaintext: bytes) -> bytes:
    cipher = Cipher(algorithms.AES(key), modes.ECB(), backend=default_backend())
    encryptor = cipher.encryptor()
    return encryptor.update(plaintext) + encryptor.finalize()


# ----------------------------
# CBC
# ----------------------------
def aes_cbc_decrypt(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    cipher = Cipher(algorithms.AES(key), modes.CBC(iv), backend=default_backend())
    decryptor = cipher.decryptor()
    return decryptor.update(ciphertext) + decryptor.finalize()


def aes_cbc_encrypt(key: bytes, iv: bytes, plaintext: bytes) -> bytes:
    cipher = Cipher(algorithms.AES(key), modes.CBC(iv), backend=default_backend())
    encryptor = cipher.encryptor()
    return encryptor.update(plaintext) + encryptor.finalize()


# ----------------------------
# CTR
# ----------------------------
def aes_ctr_decrypt(key: bytes, counter: bytes, ciphertext: bytes) -> bytes:
    """Decrypt a run of blocks starting at ``counter``.

    The full 128-bit counter is incremented once per block; callers that
    must keep the high half fixed split the run before it wraps.
    """
    cipher = Cipher(algorithms.AES(key), modes.CTR(counter), backend=default_backend())
    decryptor = cipher.decryptor()
    return decryptor.update(ciphertext) + decryptor.finalize()


def aes_ctr_encrypt(key: bytes, counter: bytes, plaintext: bytes) -> bytes:
    cipher = Cipher(algorithms.AES(key), modes.CTR(counter), backend=default_backend())
    encryptor = cipher.encryptor()
    return encryptor.update(plaintext) + encryptor.finalize()


# ----------------------------
# XTS
# ----------------------------
def _xts_area(key: bytes, data: bytes, sector_size: int, first_sector: int,
              tweak_fn: TweakFn, encrypt: bool) -> bytes:
    if sector_size < BLOCK_SIZE or sector_size % BLOCK_SIZE:
        raise ValueError(f"sector size must be a positive multiple of {BLOCK_SIZE}, got {sector_size}")

    out = bytearray()
    for i, start in enumerate(range(0, len(data), sector_size)):
        tweak = tweak_fn(first_sector + i)
        cipher = Cipher(algorithms.AES(key), modes.XTS(tweak), backend=default_backend())
        ctx = cipher.encryptor() if encrypt else cipher.decryptor()
        out += ctx.update(data[start:start + sector_size]) + ctx.finalize()
    return bytes(out)


def aes_xts_decrypt_area(key: bytes, ciphertext: bytes, sector_size: int,
                         first_sector: int = 0, tweak_fn: TweakFn = nintendo_tweak) -> bytes:
    """Decrypt consecutive sectors, the first one being ``first_sector``."""
    return _xts_area(key, ciphertext, sector_size, first_sector, tweak_fn, encrypt=False)


def aes_xts_encrypt_area(key: bytes, plaintext: bytes, sector_size: int,
                         first_sector: int = 0, tweak_fn: TweakFn = nintendo_tweak) -> bytes:
    return _xts_area(key, plaintext, sector_size, first_sector, tweak_fn, encrypt=True)
