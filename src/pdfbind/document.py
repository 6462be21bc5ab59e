"""The root owner of a native document handle."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .classifier import check_handle
from .page import Pages
from .scope import HandleScope
from .signatures import Signatures

if TYPE_CHECKING:
    from types import TracebackType

    from .bindings import NativeHandle, PdfiumBindings

_logger = logging.getLogger(__name__)


class Document:
    """An open PDF document.

    Every page, annotation, signature and link wrapper is borrowed from a
    ``Document`` and must not be used after it is closed. Closing releases
    the native resources in child-first order: annotations, pages, then
    the document itself.

    Instances come from ``Pdfium.load_pdf_from_bytes()``,
    ``Pdfium.load_pdf_from_file()`` or ``Pdfium.create_new_pdf()``.
    """

    def __init__(
        self,
        handle: NativeHandle,
        bindings: PdfiumBindings,
        *,
        strict_lifetimes: bool = True,
        name: str = "document",
    ) -> None:
        self._handle = handle
        self._bindings = bindings
        self._scope = HandleScope(
            name, release=lambda: bindings.close_document(handle), strict=strict_lifetimes
        )

    def __repr__(self) -> str:
        return f"<Document {self._scope.name}>"

    def __enter__(self) -> Document:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def handle(self) -> NativeHandle:
        return self._handle

    @property
    def bindings(self) -> PdfiumBindings:
        return self._bindings

    @property
    def scope(self) -> HandleScope:
        return self._scope

    @property
    def pages(self) -> Pages:
        return Pages(self)

    @property
    def signatures(self) -> Signatures:
        return Signatures(self)

    @property
    def is_closed(self) -> bool:
        return self._scope.is_closed

    def save_to_bytes(self, flags: int = 0) -> bytes:
        """Serialize the document, including unsaved modifications."""
        self._scope.ensure_alive()
        return check_handle(
            self._bindings, self._bindings.save_as_copy(self._handle, flags), "save document"
        )

    def save_to_file(self, path: str | Path, flags: int = 0) -> None:
        data = self.save_to_bytes(flags)
        Path(path).write_bytes(data)
        _logger.debug("Saved %s (%d bytes)", path, len(data))

    def close(self) -> None:
        """Close every page and annotation, then the document. Idempotent."""
        self._scope.close()
