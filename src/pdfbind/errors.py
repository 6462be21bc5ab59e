"""pdfbind error types."""

from __future__ import annotations

import enum

__all__ = [
    "BindingsError",
    "ClosedHandleError",
    "ConfigError",
    "DocumentLoadError",
    "IndexOutOfBoundsError",
    "InternalErrorCode",
    "LibraryInternalError",
    "PdfBindError",
    "UnsupportedOperationError",
]


class InternalErrorCode(enum.IntEnum):
    """Failure causes reported by the native last-error signal.

    Values match PDFium's ``FPDF_ERR_*`` codes. ``FPDF_ERR_SUCCESS`` (0)
    has no member: it means "no cause reported".
    """

    UNKNOWN = 1
    FILE = 2
    FORMAT = 3
    PASSWORD = 4
    SECURITY = 5
    PAGE_NOT_FOUND = 6


class PdfBindError(Exception):
    """Base error for pdfbind operations."""


class IndexOutOfBoundsError(PdfBindError, IndexError):
    """Requested element index is outside ``0..len()`` of a collection.

    Raised before any native fetch is issued.

    Args:
        collection: Name of the collection that rejected the index.
        index: The requested index.
        length: The collection length at the time of the check.
    """

    def __init__(self, collection: str, index: int, length: int) -> None:
        super().__init__(f"{collection} index {index} out of bounds (length {length})")
        self.collection = collection
        self.index = index
        self.length = length

    def __reduce__(self) -> tuple[type[IndexOutOfBoundsError], tuple[str, int, int]]:
        return (type(self), (self.collection, self.index, self.length))


class ClosedHandleError(PdfBindError):
    """A wrapper was used after the document or page that owns it was closed."""


class LibraryInternalError(PdfBindError):
    """The native library signalled failure.

    Args:
        code: Cause reported by the native last-error signal, or
            ``InternalErrorCode.UNKNOWN`` when none was reported.
        message: Optional human-readable context.
    """

    def __init__(self, code: InternalErrorCode, message: str = "") -> None:
        super().__init__(message or f"PDFium reported an internal error: {code.name}")
        self.code = code

    def __reduce__(self) -> tuple[type[LibraryInternalError], tuple[InternalErrorCode, str]]:
        """Preserve the error code across pickle/unpickle."""
        return (type(self), (self.code, str(self)))

    @property
    def is_unknown(self) -> bool:
        return self.code is InternalErrorCode.UNKNOWN


class DocumentLoadError(LibraryInternalError):
    """A document could not be opened, read or created."""


class BindingsError(PdfBindError):
    """The native library could not be loaded or lacks required exports."""


class UnsupportedOperationError(PdfBindError):
    """The loaded native library does not export an optional entry point."""


class ConfigError(PdfBindError):
    """Configuration validation error."""
