"""
Command-line interface for pdfbind.

Argument parsing and dispatch. Subcommands live in ``commands``.
"""

from __future__ import annotations

import argparse
import logging
import sys

from ..constants import ENV_CONFIG, ENV_STRICT_LIFETIMES, ENV_WARN_SIZE_MB, __version__
from ..errors import BindingsError
from .commands import cmd_links, cmd_set_link, cmd_signatures


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdfbind",
        description="Inspect and edit PDF signatures and link annotations through PDFium.",
        epilog=(
            "Environment variables:\n"
            f"  {ENV_CONFIG:<26}JSON settings file (default: ~/.pdfbind/config.json)\n"
            f"  {ENV_STRICT_LIFETIMES:<26}Check handle lifetimes (default: 1)\n"
            f"  {ENV_WARN_SIZE_MB:<26}Warn when opening larger files (default: 200)\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-V", "--version", action="version", version=f"pdfbind {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=False, help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command", help="Available commands")

    # signatures
    p_sigs = sub.add_parser("signatures", help="List embedded signatures")
    p_sigs.add_argument("pdf", help="PDF file")
    p_sigs.add_argument("--password", default=None, help="Document password")

    # links
    p_links = sub.add_parser("links", help="List link annotations and their targets")
    p_links.add_argument("pdf", help="PDF file")
    p_links.add_argument("--page", type=int, default=None, help="1-based page number (default: all)")
    p_links.add_argument("--password", default=None, help="Document password")

    # set-link
    p_set = sub.add_parser("set-link", help="Point a link annotation at a new URI")
    p_set.add_argument("pdf", help="PDF file")
    p_set.add_argument("--page", type=int, required=True, help="1-based page number")
    p_set.add_argument(
        "--annotation", type=int, required=True, help="0-based annotation index on the page"
    )
    p_set.add_argument("--uri", required=True, help="New link URI")
    p_set.add_argument("-o", "--output", required=True, help="Output file path")
    p_set.add_argument("--password", default=None, help="Document password")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "signatures": cmd_signatures,
        "links": cmd_links,
        "set-link": cmd_set_link,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    from ..library import Pdfium

    try:
        pdfium = Pdfium()
    except BindingsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    command(pdfium, args)


if __name__ == "__main__":
    main()
