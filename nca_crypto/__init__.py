"""
nca_crypto: random-access decryption of NCA / XCI container regions.

    from nca_crypto import create_ctr, BytesSource

    reader = create_ctr(key, BytesSource(encrypted), counter=seed, base_offset=0x4000)
    chunk = await reader.read(0x1234, 0x100)
"""
from .ctr import CtrReader, create_ctr, decrypt_blocks, derive_counter
from .errors import NcaCryptoError, OutOfRange, SizeMismatch
from .header import decrypt_header, encrypt_header, header_magic
from .key_area import decrypt_key_area, encrypt_key_area, split_key_area
from .source import ByteSource, BytesSource, FileSource, SliceSource
from .xci import decrypt_xci_header, encrypt_xci_header

__version__ = "0.1.0"

__all__ = [
    "ByteSource",
    "BytesSource",
    "CtrReader",
    "FileSource",
    "NcaCryptoError",
    "OutOfRange",
    "SizeMismatch",
    "SliceSource",
    "create_ctr",
    "decrypt_blocks",
    "decrypt_header",
    "decrypt_key_area",
    "decrypt_xci_header",
    "derive_counter",
    "encrypt_header",
    "encrypt_key_area",
    "encrypt_xci_header",
    "header_magic",
    "split_key_area",
]
