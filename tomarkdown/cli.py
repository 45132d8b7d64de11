#!/usr/bin/env python3
"""
tomarkdown CLI

Command-line interface for HTML-to-Markdown conversion.

Usage:
    python -m tomarkdown <source> [options]
    python -m tomarkdown page.html
    python -m tomarkdown https://example.com
    python -m tomarkdown page1.html page2.html -o ./markdown_out

Options:
    -o, --output DIR     Save <name>.md files into DIR instead of printing
    --gfm                Use GitHub-flavoured Markdown (tables, strikethrough, fences)
    --strict             Fail on elements no rule can convert
"""

import argparse
import logging
import sys

from .core import ConversionOptions, ToMarkdown
from .errors import ConversionError
from .sources import DEFAULT_TIMEOUT, is_url, read_source, save_markdown

NO_INPUT_MESSAGE = "No input file"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tomarkdown",
        description=(
            "HTML to Markdown converter\n\n"
            "Converts HTML files and web pages into Markdown and prints it,\n"
            "or saves one .md file per source."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m tomarkdown page.html\n"
            "  python -m tomarkdown https://example.com --gfm\n"
            "  python -m tomarkdown a.html b.html -o ./markdown_out\n"
        ),
    )

    parser.add_argument(
        "sources",
        nargs="*",
        help="HTML files or URLs to convert",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Save Markdown files into this directory instead of printing",
    )
    parser.add_argument(
        "--gfm",
        action="store_true",
        help="Enable GitHub-flavoured rules: tables, strikethrough, task lists, fenced code",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on elements no rule converts instead of keeping their text",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Seconds to wait when fetching a URL (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log conversion details to stderr",
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.sources:
        parser.print_help()
        print(f"\n{NO_INPUT_MESSAGE}")
        return 1

    options = ConversionOptions(
        gfm=args.gfm,
        unmatched="error" if args.strict else "passthrough",
    )
    engine = ToMarkdown(options)

    error_count = 0
    for source in args.sources:
        tag = "URL" if is_url(source) else "FILE"
        print(f"[{tag}] Converting: {source}", file=sys.stderr)
        try:
            md_text = engine.convert(read_source(source, timeout=args.timeout))
        except ConversionError as e:
            print(f"[ERROR] {source}: {e}", file=sys.stderr)
            error_count += 1
            continue

        if args.output:
            out_path = save_markdown(md_text, source, args.output)
            print(f"[SAVED] {out_path}", file=sys.stderr)
        else:
            print(md_text)

    return 1 if error_count else 0


if __name__ == "__main__":
    sys.exit(main())
