"""
Command-line tool to parse, deduplicate and rank BOM line lists.

Usage:
    bomparse --file bom.txt --number 5
    printf '2\\nZ1,Z3;40001;Keystone\\n' | bomparse
    bomparse --check 'AXXX-1000:Panasonic:D1,D8,D9'

When reading from standard input, the first non-blank line is the number of
entries to output.
"""

import argparse
import logging
import sys
from typing import Iterator, List, Optional, Tuple

from .adapters.stream_adapter import StreamAdapter
from .adapters.text_adapter import TextAdapter
from .config import Settings, load_settings
from .parser import BomParser, dump_json

logger = logging.getLogger(__name__)


class CliError(Exception):
    """Fatal error; the message is printed on stderr and the exit code is 1."""


def build_arg_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bomparse",
        description="Parse, deduplicate and rank BOM line items",
    )
    parser.add_argument("-s", "--spaces", type=int, default=settings.spaces,
                        help=f"The number of spaces when pretty-printing JSON output (default: {settings.spaces})")
    parser.add_argument("-f", "--file", type=str, default="-",
                        help='The file to read the input from; "-" for stdin (default: -)')
    parser.add_argument("-n", "--number", type=int,
                        help="Number of BOM line items to display when reading from a file")
    parser.add_argument("-c", "--check", type=str,
                        help="Checks if the specified string can be parsed; useful for testing")
    parser.add_argument("-o", "--output", type=str,
                        help="Also export the result to this file (.json, .csv or .xlsx)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log entity creation and summary information")
    return parser


def _validate_args(args: argparse.Namespace) -> None:
    if args.file != "-" and args.number is None:
        raise CliError("must specify --number/-n when reading from a file!")
    if args.file == "-" and args.number is not None:
        raise CliError("must not specify --number/-n when reading from stdin!")
    if args.number is not None and args.number < 0:
        raise CliError(f"--number/-n must not be negative; got {args.number}")


def _read_limit(lines: Iterator[str]) -> Tuple[Optional[int], Iterator[str]]:
    """Consume the leading count line from a stdin stream."""
    for line in lines:
        if not line.strip():
            continue
        # Fractional or exponent counts are truncated: "2.5" -> 2, "1e1" -> 10
        try:
            value = float(line.strip())
            limit = int(value) if value >= 0 else -1
        except (ValueError, OverflowError):
            limit = -1
        if limit < 0:
            raise CliError(f'Expected a positive number N; got "{line}" instead!')
        return limit, lines
    # Empty input: nothing to rank
    return 0, lines


def _run_check(parser: BomParser, args: argparse.Namespace) -> None:
    if not args.check:
        raise CliError("must specify a string to check!")

    entry = parser.parse_line(args.check)
    if entry is None:
        raise CliError("failed to parse!")

    print(dump_json(entry.to_dict(), args.spaces))


def _report_unparseable(line: str) -> None:
    print(f'error parsing "{line}"', file=sys.stderr)


def _run(parser: BomParser, args: argparse.Namespace) -> None:
    lines = iter(parser.read_lines(args.file))
    limit = args.number
    if args.file == "-":
        limit, lines = _read_limit(lines)

    result = parser.parse_lines(lines, limit=limit, on_unparseable=_report_unparseable)
    print(parser.to_json(result.entries, indent=args.spaces))

    if args.output:
        parser.export(result.entries, args.output, indent=args.spaces)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = load_settings()
    except ValueError as e:
        print(e, file=sys.stderr)
        return 1

    args = build_arg_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else settings.log_level,
        format="%(message)s",
        stream=sys.stderr,
    )

    parser = BomParser()
    parser.register_adapter(StreamAdapter())
    parser.register_adapter(TextAdapter(encoding=settings.encoding))

    try:
        _validate_args(args)
        if args.check is not None:
            _run_check(parser, args)
        else:
            _run(parser, args)
    except CliError as e:
        print(e, file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        logger.debug("Run aborted", exc_info=True)
        print(e, file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
