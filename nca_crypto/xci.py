"""
XCI (gamecard image) encrypted header.

The 0x70-byte gamecard info block is decrypted as one unit with
AES-128-CBC under its own IV. The result occupies the same window as the
input.
"""
from .constants import IV_SIZE, KEY_SIZE, XCI_HEADER_SIZE
from .symmetric import aes_cbc_decrypt, aes_cbc_encrypt
from .validate import expect_size


def decrypt_xci_header(key, iv, contents) -> bytes:
    key = expect_size("key", key, KEY_SIZE)
    iv = expect_size("iv", iv, IV_SIZE)
    contents = expect_size("contents", contents, XCI_HEADER_SIZE)
    return aes_cbc_decrypt(key, iv, contents)


def encrypt_xci_header(key, iv, contents) -> bytes:
    key = expect_size("key", key, KEY_SIZE)
    iv = expect_size("iv", iv, IV_SIZE)
    contents = expect_size("contents", contents, XCI_HEADER_SIZE)
    return aes_cbc_encrypt(key, iv, contents)
