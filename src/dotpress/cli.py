"""Command-line entry point.

Usage:
    dotpress [INPUT] [-o OUTPUT] [--format {html,json}] [--lenient] [-v | -q]

INPUT defaults to ``input.txt``; OUTPUT defaults to INPUT with the format's
suffix and must not name the input file itself. Exit status is 0 on
success, 1 for a malformed directive, 2 when the input cannot be read or
the output cannot be written.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from dotpress import __version__
from dotpress.config import FormatConfig, format_config_context
from dotpress.errors import ParseError, RenderError, SourceError
from dotpress.interpreter import Interpreter
from dotpress.io import read_lines, write_document
from dotpress.renderers.html import HtmlRenderer
from dotpress.renderers.protocol import DocumentRenderer
from dotpress.serialization import JsonRenderer
from dotpress.utils.logger import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_IO_ERROR = 2

DEFAULT_INPUT = "input.txt"

# Output format name -> (renderer factory, file suffix)
FORMATS: dict[str, tuple[Callable[[], DocumentRenderer], str]] = {
    "html": (HtmlRenderer, ".html"),
    "json": (JsonRenderer, ".json"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotpress",
        description="Format a text file with dot-command directives.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=DEFAULT_INPUT,
        help=f"Input text file (default: {DEFAULT_INPUT})",
    )
    parser.add_argument("-o", "--output", help="Output file (default: INPUT with format suffix)")
    parser.add_argument(
        "-f",
        "--format",
        choices=sorted(FORMATS),
        default="html",
        help="Output format (default: html)",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip malformed directive lines instead of stopping",
    )
    parser.add_argument(
        "--fill-padding",
        type=int,
        default=None,
        metavar="UNITS",
        help="Indent units used by .fill (default: 10)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.WARNING
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the formatter; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)

    options: dict[str, object] = {"strict": not args.lenient}
    if args.fill_padding is not None:
        options["fill_padding_units"] = args.fill_padding
    try:
        config = FormatConfig.from_dict(options)
    except ValueError as e:
        parser.error(str(e))

    factory, suffix = FORMATS[args.format]
    source = Path(args.input)
    output = Path(args.output) if args.output else source.with_suffix(suffix)
    if output.resolve() == source.resolve():
        print(
            f"dotpress: error: {output}: output would overwrite the input; choose one with -o",
            file=sys.stderr,
        )
        return EXIT_IO_ERROR

    try:
        lines = read_lines(source)
        with format_config_context(config):
            doc = Interpreter(str(source)).run(lines)
        write_document(doc, factory(), output)
    except (ParseError, RenderError) as e:
        logger.debug("Formatting failed", exc_info=True)
        print(f"dotpress: error: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR
    except SourceError as e:
        logger.debug("I/O failed", exc_info=True)
        print(f"dotpress: error: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    if doc.diagnostics:
        print(f"dotpress: {len(doc.diagnostics)} line(s) skipped", file=sys.stderr)
    print(f"Document successfully compiled at {output}")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
