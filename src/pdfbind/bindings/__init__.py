"""Native library bindings: the capability protocol and the PDFium implementation."""

from .base import NativeHandle, PdfiumBindings
from .pdfium import PdfiumLibraryBindings, require_pdfium_raw

__all__ = [
    "NativeHandle",
    "PdfiumBindings",
    "PdfiumLibraryBindings",
    "require_pdfium_raw",
]
