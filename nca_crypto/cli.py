"""
Command line harness.

    nca-crypto ctr --key AC31F3DA4BD7C4A56116789B748CDF1F section.bin section.dec
    nca-crypto ctr --key ... --counter ... --base-offset 0x4000 --size 0x1000 game.nca out.bin
    nca-crypto header --key <32-byte hex> game.nca header.dec
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .constants import DEFAULT_CHUNK_SIZE, HEADER_SIZE, IV_SIZE
from .ctr import create_ctr
from .errors import NcaCryptoError
from .header import decrypt_header, header_magic
from .source import FileSource

logger = logging.getLogger(__name__)


def _hex_bytes(value: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex string: {value!r}") from None


def _int(value: str) -> int:
    """Accept decimal or 0x-prefixed offsets and sizes."""
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None


async def _decrypt_ctr_file(args) -> int:
    written = 0
    with FileSource(args.input) as source:
        reader = create_ctr(args.key, source, counter=args.counter, base_offset=args.base_offset)
        size = reader.window_size(args.offset, args.size)
        with open(args.output, "wb") as out:
            async for chunk in reader.iter_chunks(args.chunk_size, offset=args.offset, size=size):
                out.write(chunk)
                written += len(chunk)
                logger.debug("wrote %d bytes", written)
    return written


def cmd_ctr(args) -> int:
    written = asyncio.run(_decrypt_ctr_file(args))
    print(f"Decrypted {written:,} bytes -> {args.output}")
    return 0


def cmd_header(args) -> int:
    with open(args.input, "rb") as f:
        raw = f.read(HEADER_SIZE)
    header = decrypt_header(args.key, raw)
    with open(args.output, "wb") as out:
        out.write(header)
    print(f"Decrypted header ({header_magic(header)!r}) -> {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nca-crypto", description="Decrypt NCA container regions.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="cmd", required=True)

    ctr = sub.add_parser("ctr", help="Decrypt an AES-CTR region of a file.")
    ctr.add_argument("--key", type=_hex_bytes, required=True, help="16-byte content key (hex).")
    ctr.add_argument("--counter", type=_hex_bytes, default=bytes(IV_SIZE),
                     help="16-byte counter seed (hex), default all zero.")
    ctr.add_argument("--base-offset", type=_int, default=0,
                     help="Start of the encrypted region inside the input file.")
    ctr.add_argument("--offset", type=_int, default=0, help="Start of the output window within the region.")
    ctr.add_argument("--size", type=_int, default=None, help="Window size, default up to the region end.")
    ctr.add_argument("--chunk-size", type=_int, default=DEFAULT_CHUNK_SIZE, help=argparse.SUPPRESS)
    ctr.add_argument("input")
    ctr.add_argument("output")
    ctr.set_defaults(func=cmd_ctr)

    header = sub.add_parser("header", help="Decrypt the 0xC00-byte NCA header.")
    header.add_argument("--key", type=_hex_bytes, required=True, help="32-byte header key (hex).")
    header.add_argument("input")
    header.add_argument("output")
    header.set_defaults(func=cmd_header)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (NcaCryptoError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
