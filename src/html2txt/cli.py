"""
Convert HTML documents into word-wrapped plain text.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from soupsieve import SelectorSyntaxError

from .conversion import HtmlToTextConverter, read_html
from .models import Options


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _split_option(token: str) -> Tuple[str, str]:
    if "=" not in token:
        raise argparse.ArgumentTypeError("Expected SELECTOR=FORMAT format.")
    key, value = token.rsplit("=", 1)
    key = key.strip()
    value = value.strip()
    if not key:
        raise argparse.ArgumentTypeError("Selector cannot be empty.")
    if not value:
        raise argparse.ArgumentTypeError("Format name cannot be empty.")
    return key, value


def build_options(args: argparse.Namespace) -> Options:
    options = Options(wordwrap=args.width, preserve_newlines=args.preserve_newlines)
    options.long_word_split.wrap_characters = args.wrap_characters
    options.long_word_split.force_wrap_on_limit = args.force_wrap
    if args.base_element:
        options.base_elements.selectors = list(args.base_element)
    for selector, format_name in args.format:
        options.set_format(selector, format_name)

    limits = options.limits
    if args.max_input_length is not None:
        limits.max_input_length = args.max_input_length
    limits.max_depth = args.max_depth
    limits.max_child_nodes = args.max_child_nodes
    if args.ellipsis is not None:
        limits.ellipsis = args.ellipsis
    return options


def read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return read_html(Path(source))


def write_output(path: Optional[Path], text: str, crlf: bool = False) -> None:
    newline = "\r\n" if crlf else "\n"
    content = newline.join(text.split("\n")) + newline
    if path is None:
        sys.stdout.write(content)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert HTML files to word-wrapped plain text.")
    parser.add_argument("input", help="Path to the HTML input file, or - to read stdin.")
    parser.add_argument("-o", "--output", type=Path, help="Optional path to write the resulting text file.")
    parser.add_argument("--width", type=int, default=80, help="Maximum line length, 0 disables wrapping (default: 80).")
    parser.add_argument("--preserve-newlines", action="store_true", help="Keep line breaks found in text nodes.")
    parser.add_argument(
        "--wrap-characters",
        default="",
        metavar="CHARS",
        help="Characters after which over-long words may be split, e.g. '/-'.",
    )
    parser.add_argument(
        "--force-wrap",
        action="store_true",
        help="Cut over-long words at the line length when no wrap character helps.",
    )
    parser.add_argument(
        "--base-element",
        action="append",
        default=[],
        metavar="SELECTOR",
        help="Only convert elements matching SELECTOR (may repeat).",
    )
    parser.add_argument(
        "--format",
        action="append",
        default=[],
        type=_split_option,
        metavar="SELECTOR=FORMAT",
        help="Use the named formatter for elements matching SELECTOR (may repeat).",
    )
    parser.add_argument("--max-input-length", type=int, help="Truncate input longer than this many characters.")
    parser.add_argument("--max-depth", type=int, help="Stop descending below this nesting depth.")
    parser.add_argument("--max-child-nodes", type=int, help="Convert at most this many children of any node.")
    parser.add_argument("--ellipsis", help="Text marking content dropped by a limit (default: ...).")
    parser.add_argument("--crlf", action="store_true", help="Write DOS line endings.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format=LOG_FORMAT)
    try:
        converter = HtmlToTextConverter(build_options(args))
    except (KeyError, TypeError, ValueError, SelectorSyntaxError) as exc:
        sys.stderr.write(f"{exc}\n")
        return 2
    text = converter.convert(read_input(args.input))
    write_output(args.output, text, crlf=args.crlf)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
