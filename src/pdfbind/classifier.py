"""
Classification of native failure signals into the pdfbind error taxonomy.

Every native call that can fail signals it with a sentinel: a null handle
or a false boolean. The cause is then read from the native last-error
slot. A specific code becomes ``LibraryInternalError(code)``; an empty
slot becomes ``LibraryInternalError(UNKNOWN)``. No cause is ever invented.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from .errors import InternalErrorCode, LibraryInternalError

if TYPE_CHECKING:
    from .bindings import PdfiumBindings

_logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def native_failure(
    bindings: PdfiumBindings,
    operation: str,
    error_cls: type[LibraryInternalError] = LibraryInternalError,
) -> LibraryInternalError:
    """Build the error for a native call that just returned a failure sentinel.

    Must be called before any other native call, since the last-error
    slot is overwritten by the next failing call.

    Args:
        bindings: The bindings the failing call went through.
        operation: Short name of the failed operation, used in the message.
        error_cls: Concrete error class to build.
    """
    code = bindings.get_last_error()
    if code is None:
        # Failure sentinel without a reported cause.
        _logger.debug("%s failed; PDFium reported no cause", operation)
        return error_cls(InternalErrorCode.UNKNOWN, f"{operation} failed: unknown cause")
    _logger.debug("%s failed; PDFium reported %s", operation, code.name)
    return error_cls(code, f"{operation} failed: {code.name}")


def check_handle(bindings: PdfiumBindings, handle: _T | None, operation: str) -> _T:
    """Return ``handle`` unchanged, or raise the classified error if it is null."""
    if handle is None:
        raise native_failure(bindings, operation)
    return handle


def check_success(bindings: PdfiumBindings, ok: bool, operation: str) -> None:
    """Raise the classified error if a boolean native mutator returned False."""
    if not ok:
        raise native_failure(bindings, operation)
