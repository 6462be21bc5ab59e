"""
Subcommand implementations: listing signatures and links, rewriting a link.

Each command takes the parsed arguments and a ``Pdfium`` instance, prints
to stdout, and exits with status 1 on error.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

from ..annotations import LinkAnnotation
from ..errors import PdfBindError
from ..link import NamedDestination

if TYPE_CHECKING:
    import argparse

    from ..document import Document
    from ..library import Pdfium
    from ..link import Link


def _fail(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _open(pdfium: Pdfium, args: argparse.Namespace) -> Document:
    pdf_path = Path(args.pdf)
    if not pdf_path.exists():
        _fail(f"{pdf_path} not found")
    try:
        return pdfium.load_pdf_from_file(pdf_path, args.password)
    except OSError as e:
        _fail(f"cannot read {pdf_path}: {e}")
    except PdfBindError as e:
        _fail(f"cannot open {pdf_path}: {e}")


def describe_link(link: Link) -> str:
    """One-line description of a link target."""
    try:
        target = link.target()
    except PdfBindError as e:
        return f"(unresolved: {e})"
    if isinstance(target, NamedDestination):
        coords = ", ".join(
            "-" if value is None else f"{value:g}" for value in (target.x, target.y, target.zoom)
        )
        return f"page {target.page_index + 1} at ({coords})"
    return target.uri


def cmd_signatures(pdfium: Pdfium, args: argparse.Namespace) -> None:
    """List the signatures in a document."""
    with _open(pdfium, args) as document:
        signatures = document.signatures
        count = len(signatures)
        print(f"{Path(args.pdf).name}: {count} signature(s)")
        for index, signature in enumerate(signatures):
            signer = signature.signer_info() or {}
            print(f"\n  [{index + 1}]")
            print(f"  Sub-filter: {signature.sub_filter() or '-'}")
            print(f"  Reason:     {signature.reason() or '-'}")
            print(f"  Date:       {signature.signing_date() or '-'}")
            print(f"  Signer:     {signer.get('name') or '-'}")
            print(f"  DocMDP:     {signature.modification_detection_permission().name}")


def cmd_links(pdfium: Pdfium, args: argparse.Namespace) -> None:
    """List link annotations, optionally restricted to one page."""
    with _open(pdfium, args) as document:
        pages = document.pages
        if args.page is not None:
            if args.page < 1 or args.page > len(pages):
                _fail(f"page {args.page} out of range (document has {len(pages)} pages)")
            page_numbers = [args.page]
        else:
            page_numbers = [i + 1 for i in pages.as_range()]

        total = 0
        for number in page_numbers:
            with pages.get(number - 1) as page:
                for index, annotation in enumerate(page.annotations):
                    if not isinstance(annotation, LinkAnnotation):
                        continue
                    total += 1
                    quads = len(annotation.attachment_points)
                    try:
                        target = describe_link(annotation.link())
                    except PdfBindError:
                        target = "-"
                    print(f"  page {number} annotation {index}: {target} [{quads} quad(s)]")
        print(f"{total} link annotation(s)")


def cmd_set_link(pdfium: Pdfium, args: argparse.Namespace) -> None:
    """Point one link annotation at a new URI and save the result."""
    output = Path(args.output)
    with _open(pdfium, args) as document:
        try:
            page = document.pages.get(args.page - 1)
            annotation = page.annotations.get(args.annotation)
        except PdfBindError as e:
            _fail(str(e))
        if not isinstance(annotation, LinkAnnotation):
            _fail(f"annotation {args.annotation} on page {args.page} is not a link")
        try:
            annotation.set_link(args.uri)
            document.save_to_file(output)
        except PdfBindError as e:
            _fail(f"cannot update link: {e}")
        except OSError as e:
            _fail(f"cannot write {output}: {e}")
    print(f"Saved {output}")
