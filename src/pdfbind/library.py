"""
Library entry point.

``Pdfium`` holds the bindings for one load of the native library and
opens documents. Every wrapper reached from those documents shares the
same bindings instance.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .classifier import native_failure
from .config import Settings, load_settings
from .constants import BYTES_PER_MB, PDF_MAGIC
from .document import Document
from .errors import DocumentLoadError

if TYPE_CHECKING:
    from .bindings import PdfiumBindings

_logger = logging.getLogger(__name__)


class Pdfium:
    """Entry point owning the native bindings.

    Args:
        bindings: Bindings implementation. Defaults to
            ``PdfiumLibraryBindings`` (real PDFium via pypdfium2).
        settings: Behaviour switches. Defaults to ``load_settings()``.

    Raises:
        BindingsError: If the default bindings cannot be loaded.
    """

    def __init__(
        self, bindings: PdfiumBindings | None = None, settings: Settings | None = None
    ) -> None:
        if bindings is None:
            from .bindings import PdfiumLibraryBindings

            bindings = PdfiumLibraryBindings()
        self._bindings = bindings
        self._settings = settings if settings is not None else load_settings()

    @property
    def bindings(self) -> PdfiumBindings:
        return self._bindings

    @property
    def settings(self) -> Settings:
        return self._settings

    def _wrap(self, handle: object, name: str) -> Document:
        return Document(
            handle, self._bindings, strict_lifetimes=self._settings.strict_lifetimes, name=name
        )

    def load_pdf_from_bytes(
        self, data: bytes, password: str | None = None, *, name: str = "document"
    ) -> Document:
        """Open a document from an in-memory PDF.

        Raises:
            DocumentLoadError: Classified from PDFium's last error
                (e.g. FORMAT for a damaged file, PASSWORD for a wrong password).
        """
        if not data.startswith(PDF_MAGIC):
            _logger.debug("Input does not start with %r; PDFium may still recover it", PDF_MAGIC)
        handle = self._bindings.load_mem_document(data, password)
        if handle is None:
            raise native_failure(self._bindings, f"load {name}", DocumentLoadError)
        _logger.debug("Loaded %s (%d bytes)", name, len(data))
        return self._wrap(handle, name)

    def load_pdf_from_file(self, path: str | Path, password: str | None = None) -> Document:
        """Open a document from disk.

        Raises:
            OSError: If the file cannot be read.
            DocumentLoadError: If PDFium rejects the contents.
        """
        pdf_path = Path(path)
        data = pdf_path.read_bytes()
        limit = self._settings.warn_size_mb * BYTES_PER_MB
        if limit and len(data) > limit:
            _logger.warning(
                "%s is %.1f MB, above the %d MB warning threshold",
                pdf_path.name,
                len(data) / BYTES_PER_MB,
                self._settings.warn_size_mb,
            )
        return self.load_pdf_from_bytes(data, password, name=pdf_path.name)

    def create_new_pdf(self) -> Document:
        """Create an empty document with no pages."""
        handle = self._bindings.create_new_document()
        if handle is None:
            raise native_failure(self._bindings, "create document", DocumentLoadError)
        return self._wrap(handle, "new document")
