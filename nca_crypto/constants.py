"""
Fixed sizes and layout constants of the NCA / XCI containers.

All sizes in bytes.
"""

BLOCK_SIZE = 16                  # AES block size

KEY_SIZE = 0x10                  # AES-128 key (key area key, content key, XCI key)
HEADER_KEY_SIZE = 0x20           # AES-128-XTS header key, two 0x10 halves
IV_SIZE = 0x10                   # CTR counter seed, CBC IV, XTS tweak

HEADER_SIZE = 0xC00              # encrypted NCA header region
HEADER_SECTOR_SIZE = 0x200       # XTS sector size used for the header
HEADER_MAGIC_OFFSET = 0x200      # magic lives at the start of the second sector
HEADER_PREFIX_SIZE = 0x400       # always decrypted as sectors 0 and 1

NCA3_MAGIC = b"NCA3"
NCA2_MAGIC = b"NCA2"

KEY_AREA_ELEMENT_SIZE = 0x10
KEY_AREA_ELEMENT_COUNT = 4

XCI_HEADER_SIZE = 0x70           # encrypted gamecard info region

# CTR counter: high half is the fixed nonce, low half a big-endian block index
COUNTER_NONCE_SIZE = 8
COUNTER_MASK = (1 << 64) - 1

DEFAULT_CHUNK_SIZE = 0x100000    # streaming window used by iter_chunks / CLI
