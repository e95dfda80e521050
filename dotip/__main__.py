"""
CLI interface for dotip.

Usage:
    python -m dotip                         print the sample values
    python -m dotip --int int32 2130706433  127.0.0.1
    python -m dotip --list 10,0,0,1         10.0.0.1
    python -m dotip --help
"""

import argparse
import logging
import sys

from .ip import format_ip, print_ip
from .numeric import FIXED_INT_TYPES, Int8, Int16, Int32, Int64
from .options import get_options

SAMPLES = (
    Int8(-1),
    Int16(0),
    Int32(2130706433),
    Int64(8875824491850138409),
    "Hello, World!",
    [1, 2, 3, 4],
    (1, 2, 3, 4),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print values as dot-separated fields, IPv4 style", prog="python -m dotip"
    )
    parser.add_argument("values", nargs="*", help="Values to format (default: print the samples)")

    kind = parser.add_mutually_exclusive_group()
    kind.add_argument(
        "--int",
        dest="int_type",
        choices=sorted(FIXED_INT_TYPES),
        help="Parse values as integers of this fixed-width type (0x, 0o, 0b prefixes accepted)",
    )
    kind.add_argument("--list", action="store_true", help="Split each value on commas into a list")
    kind.add_argument("--tuple", action="store_true", help="Split each value on commas into a tuple")

    parser.add_argument("--sep", default=None, help="Field separator (default: '.')")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log dispatch decisions to stderr")
    return parser


def parse_value(text: str, args: argparse.Namespace):
    if args.int_type:
        return FIXED_INT_TYPES[args.int_type](int(text, 0))
    if args.list:
        return text.split(",") if text else []
    if args.tuple:
        return tuple(text.split(","))
    return text


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    options = get_options()
    if args.sep is not None:
        options = options.merge(sep=args.sep)

    if not args.values:
        for sample in SAMPLES:
            print_ip(sample, options=options)
        return 0

    try:
        # Format everything before printing anything
        lines = [format_ip(parse_value(text, args), options=options) for text in args.values]
    except (TypeError, ValueError) as e:
        parser.error(str(e))

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
