"""Command-line front end: convert integers between decimal and another radix."""
import argparse
import logging
import sys
from typing import List, Optional

from .constants import DEFAULT_BASE, MAX_CHARS, U128_BITS
from .results import ConversionError
from .services.widths import WidthService

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="radix128",
        description="Convert integers of up to 128 bits between decimal and any radix from 2 to 36.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log conversion details.")
    parser.add_argument("--quiet", action="store_true", help="Only log errors.")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--base", type=int, default=DEFAULT_BASE, help="Radix of the text form (default: 10).")
    common.add_argument("--bits", type=int, default=U128_BITS, help="Declared integer width (default: 128).")
    common.add_argument("--unsigned", action="store_true", help="Treat the integer as unsigned.")

    commands = parser.add_subparsers(dest="command", required=True)
    encode = commands.add_parser("encode", parents=[common], help="Print a decimal VALUE in --base.")
    encode.add_argument("value", help="Decimal integer to convert.")
    decode = commands.add_parser("decode", parents=[common], help="Print TEXT written in --base as decimal.")
    decode.add_argument("text", help="Digits to parse.")
    return parser


def _convert(service: WidthService, text: str, source_base: int, target_base: int, args: argparse.Namespace) -> str:
    signed = not args.unsigned
    parsed = service.from_chars(text, bits=args.bits, signed=signed, base=source_base)
    if not parsed.ok:
        raise ConversionError(parsed.status, parsed.ptr, text)
    if parsed.ptr != len(text):
        logger.warning("Ignoring trailing input after position %d: %r", parsed.ptr, text[parsed.ptr:])

    buffer = bytearray(MAX_CHARS)
    written = service.to_chars(buffer, 0, len(buffer), parsed.value, bits=args.bits, signed=signed, base=target_base)
    if not written.ok:
        raise ConversionError(written.status, written.ptr)
    return buffer[:written.ptr].decode("ascii")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.ERROR if args.quiet else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s (radix128): %(message)s", stream=sys.stderr)

    service = WidthService()
    try:
        if args.command == "encode":
            logger.debug("Encoding %s into base %d.", args.value, args.base)
            output = _convert(service, args.value, DEFAULT_BASE, args.base, args)
        else:
            logger.debug("Decoding %s from base %d.", args.text, args.base)
            output = _convert(service, args.text, args.base, DEFAULT_BASE, args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
