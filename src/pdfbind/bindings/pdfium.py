# pyright: reportUnknownMemberType=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""
Native PDFium bindings over the ctypes layer shipped with pypdfium2.

Translates the raw C surface (NULL pointers, FPDF_BOOL, out-parameter
buffers, UTF-16LE strings) into the conventions of ``PdfiumBindings``.
No wrapper logic lives here: failures are returned, not raised.
"""

from __future__ import annotations

import ctypes
import io
import logging
import types
from typing import Any

from ..errors import BindingsError, InternalErrorCode, UnsupportedOperationError
from ..quad_points import QuadPoints
from .base import NativeHandle

_logger = logging.getLogger(__name__)

# Entry points every wrapper relies on. Checked once per bindings instance.
_REQUIRED_FUNCTIONS = [
    "FPDF_GetLastError",
    "FPDF_LoadMemDocument64",
    "FPDF_CreateNewDocument",
    "FPDF_CloseDocument",
    "FPDF_SaveAsCopy",
    "FPDF_GetPageCount",
    "FPDF_LoadPage",
    "FPDF_ClosePage",
    "FPDFPage_New",
    "FPDF_GetPageWidthF",
    "FPDF_GetPageHeightF",
    "FPDF_GetSignatureCount",
    "FPDF_GetSignatureObject",
    "FPDFSignatureObj_GetContents",
    "FPDFSignatureObj_GetByteRange",
    "FPDFSignatureObj_GetSubFilter",
    "FPDFSignatureObj_GetReason",
    "FPDFSignatureObj_GetTime",
    "FPDFSignatureObj_GetDocMDPPermission",
    "FPDFPage_GetAnnotCount",
    "FPDFPage_GetAnnot",
    "FPDFPage_CreateAnnot",
    "FPDFPage_RemoveAnnot",
    "FPDFPage_CloseAnnot",
    "FPDFAnnot_GetSubtype",
    "FPDFAnnot_GetLink",
    "FPDFAnnot_SetURI",
    "FPDFAnnot_CountAttachmentPoints",
    "FPDFAnnot_GetAttachmentPoints",
    "FPDFAnnot_SetAttachmentPoints",
    "FPDFAnnot_AppendAttachmentPoints",
    "FPDFAnnot_GetObjectCount",
    "FPDFAnnot_GetObject",
    "FPDFAnnot_RemoveObject",
    "FPDFPageObj_GetType",
    "FPDFPageObj_GetBounds",
    "FPDFLink_GetDest",
    "FPDFLink_GetAction",
    "FPDFAction_GetType",
    "FPDFAction_GetURIPath",
    "FPDFAction_GetDest",
    "FPDFDest_GetDestPageIndex",
    "FPDFDest_GetLocationInPage",
]

# Present only in patched PDFium builds.
_OPTIONAL_FUNCTIONS = [
    "FPDFAnnot_SetDest",
]

# FPDF_ERR_SUCCESS: the last-error slot holds no cause
_ERR_SUCCESS = 0


def require_pdfium_raw() -> types.ModuleType:
    """Import the ctypes PDFium module from pypdfium2.

    Importing pypdfium2 also initializes the native library for the
    process.
    """
    try:
        import pypdfium2.raw as pdfium_c
    except ImportError as exc:
        raise BindingsError(
            "pypdfium2 is required for native PDFium bindings.\nInstall with: pip install pypdfium2"
        ) from exc
    else:
        return pdfium_c


def _validate_library_exports(lib: Any) -> None:
    missing = [name for name in _REQUIRED_FUNCTIONS if not hasattr(lib, name)]
    if missing:
        raise BindingsError(
            f"PDFium library is missing required function symbols: {', '.join(missing)}\n"
            "This indicates a version mismatch between the native library and pdfbind."
        )


def _nonnull(handle: Any) -> NativeHandle | None:
    """Map a NULL ctypes pointer to None."""
    return handle if handle else None


def _handle_key(handle: Any) -> int | None:
    return ctypes.cast(handle, ctypes.c_void_p).value


class PdfiumLibraryBindings:
    """``PdfiumBindings`` implementation backed by the real PDFium library.

    Args:
        lib: ctypes PDFium module. Defaults to ``pypdfium2.raw``.

    Raises:
        BindingsError: If pypdfium2 is missing or the library lacks
            required exports.
    """

    def __init__(self, lib: Any = None) -> None:
        self._lib = lib if lib is not None else require_pdfium_raw()
        _validate_library_exports(self._lib)
        # Source bytes must outlive the document loaded from them.
        self._buffers: dict[int, bytes] = {}
        missing_optional = [name for name in _OPTIONAL_FUNCTIONS if not hasattr(self._lib, name)]
        if missing_optional:
            _logger.debug("Optional PDFium exports unavailable: %s", ", ".join(missing_optional))

    def supports(self, function_name: str) -> bool:
        """Return True if the loaded library exports ``function_name``."""
        return hasattr(self._lib, function_name)

    # ── Errors ───────────────────────────────────────────────────────

    def get_last_error(self) -> InternalErrorCode | None:
        code = int(self._lib.FPDF_GetLastError())
        if code == _ERR_SUCCESS:
            return None
        try:
            return InternalErrorCode(code)
        except ValueError:
            _logger.debug("Unrecognized PDFium error code %d", code)
            return InternalErrorCode.UNKNOWN

    # ── Documents ────────────────────────────────────────────────────

    def load_mem_document(self, data: bytes, password: str | None) -> NativeHandle | None:
        encoded_password = password.encode("utf-8") if password is not None else None
        handle = _nonnull(self._lib.FPDF_LoadMemDocument64(data, len(data), encoded_password))
        if handle is not None:
            key = _handle_key(handle)
            if key is not None:
                self._buffers[key] = data
        return handle

    def create_new_document(self) -> NativeHandle | None:
        return _nonnull(self._lib.FPDF_CreateNewDocument())

    def close_document(self, document: NativeHandle) -> None:
        key = _handle_key(document)
        self._lib.FPDF_CloseDocument(document)
        if key is not None:
            self._buffers.pop(key, None)

    def save_as_copy(self, document: NativeHandle, flags: int) -> bytes | None:
        out = io.BytesIO()

        def _write_block(_filewrite: Any, data: Any, size: int) -> int:
            out.write(ctypes.string_at(data, size))
            return 1

        filewrite = self._lib.FPDF_FILEWRITE()
        filewrite.version = 1
        filewrite.WriteBlock = type(filewrite.WriteBlock)(_write_block)
        if not self._lib.FPDF_SaveAsCopy(document, ctypes.byref(filewrite), flags):
            return None
        return out.getvalue()

    def get_page_count(self, document: NativeHandle) -> int:
        return int(self._lib.FPDF_GetPageCount(document))

    # ── Pages ────────────────────────────────────────────────────────

    def load_page(self, document: NativeHandle, index: int) -> NativeHandle | None:
        return _nonnull(self._lib.FPDF_LoadPage(document, index))

    def close_page(self, page: NativeHandle) -> None:
        self._lib.FPDF_ClosePage(page)

    def page_new(
        self, document: NativeHandle, index: int, width: float, height: float
    ) -> NativeHandle | None:
        return _nonnull(self._lib.FPDFPage_New(document, index, width, height))

    def get_page_width(self, page: NativeHandle) -> float:
        return float(self._lib.FPDF_GetPageWidthF(page))

    def get_page_height(self, page: NativeHandle) -> float:
        return float(self._lib.FPDF_GetPageHeightF(page))

    # ── Signatures ───────────────────────────────────────────────────

    def get_signature_count(self, document: NativeHandle) -> int:
        return int(self._lib.FPDF_GetSignatureCount(document))

    def get_signature_object(self, document: NativeHandle, index: int) -> NativeHandle | None:
        return _nonnull(self._lib.FPDF_GetSignatureObject(document, index))

    def signature_get_contents(self, signature: NativeHandle) -> bytes:
        size = int(self._lib.FPDFSignatureObj_GetContents(signature, None, 0))
        if size == 0:
            return b""
        buffer = ctypes.create_string_buffer(size)
        self._lib.FPDFSignatureObj_GetContents(signature, buffer, size)
        return buffer.raw[:size]

    def signature_get_byte_range(self, signature: NativeHandle) -> list[int]:
        count = int(self._lib.FPDFSignatureObj_GetByteRange(signature, None, 0))
        if count == 0:
            return []
        buffer = (ctypes.c_int * count)()
        self._lib.FPDFSignatureObj_GetByteRange(signature, buffer, count)
        return list(buffer)

    def _ascii_string(self, func: Any, handle: NativeHandle) -> str | None:
        size = int(func(handle, None, 0))
        if size == 0:
            return None
        buffer = ctypes.create_string_buffer(size)
        func(handle, buffer, size)
        return buffer.value.decode("ascii", errors="replace")

    def signature_get_sub_filter(self, signature: NativeHandle) -> str | None:
        return self._ascii_string(self._lib.FPDFSignatureObj_GetSubFilter, signature)

    def signature_get_reason(self, signature: NativeHandle) -> str | None:
        # UTF-16LE with a two-byte terminator
        size = int(self._lib.FPDFSignatureObj_GetReason(signature, None, 0))
        if size <= 2:
            return None
        buffer = ctypes.create_string_buffer(size)
        self._lib.FPDFSignatureObj_GetReason(signature, buffer, size)
        return buffer.raw[: size - 2].decode("utf-16-le", errors="replace")

    def signature_get_time(self, signature: NativeHandle) -> str | None:
        return self._ascii_string(self._lib.FPDFSignatureObj_GetTime, signature)

    def signature_get_doc_mdp_permission(self, signature: NativeHandle) -> int:
        return int(self._lib.FPDFSignatureObj_GetDocMDPPermission(signature))

    # ── Annotations ──────────────────────────────────────────────────

    def page_get_annot_count(self, page: NativeHandle) -> int:
        return int(self._lib.FPDFPage_GetAnnotCount(page))

    def page_get_annot(self, page: NativeHandle, index: int) -> NativeHandle | None:
        return _nonnull(self._lib.FPDFPage_GetAnnot(page, index))

    def page_create_annot(self, page: NativeHandle, subtype: int) -> NativeHandle | None:
        return _nonnull(self._lib.FPDFPage_CreateAnnot(page, subtype))

    def page_remove_annot(self, page: NativeHandle, index: int) -> bool:
        return bool(self._lib.FPDFPage_RemoveAnnot(page, index))

    def page_close_annot(self, annotation: NativeHandle) -> None:
        self._lib.FPDFPage_CloseAnnot(annotation)

    def annot_get_subtype(self, annotation: NativeHandle) -> int:
        return int(self._lib.FPDFAnnot_GetSubtype(annotation))

    def annot_get_link(self, annotation: NativeHandle) -> NativeHandle | None:
        return _nonnull(self._lib.FPDFAnnot_GetLink(annotation))

    def annot_set_uri(self, annotation: NativeHandle, uri: str) -> bool:
        return bool(self._lib.FPDFAnnot_SetURI(annotation, uri.encode("utf-8")))

    def annot_set_dest(
        self, annotation: NativeHandle, page: NativeHandle, x: float, y: float, z: float
    ) -> bool:
        set_dest = getattr(self._lib, "FPDFAnnot_SetDest", None)
        if set_dest is None:
            raise UnsupportedOperationError(
                "This PDFium build does not export FPDFAnnot_SetDest; "
                "link destinations cannot be set."
            )
        return bool(set_dest(annotation, page, x, y, z))

    # ── Attachment points ────────────────────────────────────────────

    def annot_count_attachment_points(self, annotation: NativeHandle) -> int:
        return int(self._lib.FPDFAnnot_CountAttachmentPoints(annotation))

    def annot_get_attachment_points(self, annotation: NativeHandle, index: int) -> QuadPoints | None:
        quad = self._lib.FS_QUADPOINTSF()
        if not self._lib.FPDFAnnot_GetAttachmentPoints(annotation, index, ctypes.byref(quad)):
            return None
        return QuadPoints(quad.x1, quad.y1, quad.x2, quad.y2, quad.x3, quad.y3, quad.x4, quad.y4)

    def annot_set_attachment_points(
        self, annotation: NativeHandle, index: int, quad: QuadPoints
    ) -> bool:
        native_quad = self._lib.FS_QUADPOINTSF(*quad.as_tuple())
        return bool(
            self._lib.FPDFAnnot_SetAttachmentPoints(annotation, index, ctypes.byref(native_quad))
        )

    def annot_append_attachment_points(self, annotation: NativeHandle, quad: QuadPoints) -> bool:
        native_quad = self._lib.FS_QUADPOINTSF(*quad.as_tuple())
        return bool(self._lib.FPDFAnnot_AppendAttachmentPoints(annotation, ctypes.byref(native_quad)))

    # ── Annotation objects ───────────────────────────────────────────

    def annot_get_object_count(self, annotation: NativeHandle) -> int:
        return int(self._lib.FPDFAnnot_GetObjectCount(annotation))

    def annot_get_object(self, annotation: NativeHandle, index: int) -> NativeHandle | None:
        return _nonnull(self._lib.FPDFAnnot_GetObject(annotation, index))

    def annot_remove_object(self, annotation: NativeHandle, index: int) -> bool:
        return bool(self._lib.FPDFAnnot_RemoveObject(annotation, index))

    def page_object_get_type(self, page_object: NativeHandle) -> int:
        return int(self._lib.FPDFPageObj_GetType(page_object))

    def page_object_get_bounds(
        self, page_object: NativeHandle
    ) -> tuple[float, float, float, float] | None:
        left, bottom, right, top = (ctypes.c_float() for _ in range(4))
        ok = self._lib.FPDFPageObj_GetBounds(
            page_object,
            ctypes.byref(left),
            ctypes.byref(bottom),
            ctypes.byref(right),
            ctypes.byref(top),
        )
        if not ok:
            return None
        return (left.value, bottom.value, right.value, top.value)

    # ── Links, actions, destinations ─────────────────────────────────

    def link_get_dest(self, document: NativeHandle, link: NativeHandle) -> NativeHandle | None:
        return _nonnull(self._lib.FPDFLink_GetDest(document, link))

    def link_get_action(self, link: NativeHandle) -> NativeHandle | None:
        return _nonnull(self._lib.FPDFLink_GetAction(link))

    def action_get_type(self, action: NativeHandle) -> int:
        return int(self._lib.FPDFAction_GetType(action))

    def action_get_uri_path(self, document: NativeHandle, action: NativeHandle) -> str | None:
        size = int(self._lib.FPDFAction_GetURIPath(document, action, None, 0))
        if size == 0:
            return None
        buffer = ctypes.create_string_buffer(size)
        self._lib.FPDFAction_GetURIPath(document, action, buffer, size)
        return buffer.value.decode("utf-8", errors="replace")

    def action_get_dest(self, document: NativeHandle, action: NativeHandle) -> NativeHandle | None:
        return _nonnull(self._lib.FPDFAction_GetDest(document, action))

    def dest_get_page_index(self, document: NativeHandle, dest: NativeHandle) -> int:
        return int(self._lib.FPDFDest_GetDestPageIndex(document, dest))

    def dest_get_location_in_page(
        self, dest: NativeHandle
    ) -> tuple[float | None, float | None, float | None] | None:
        has_x, has_y, has_zoom = (ctypes.c_int() for _ in range(3))
        x, y, zoom = (ctypes.c_float() for _ in range(3))
        ok = self._lib.FPDFDest_GetLocationInPage(
            dest,
            ctypes.byref(has_x),
            ctypes.byref(has_y),
            ctypes.byref(has_zoom),
            ctypes.byref(x),
            ctypes.byref(y),
            ctypes.byref(zoom),
        )
        if not ok:
            return None
        return (
            x.value if has_x.value else None,
            y.value if has_y.value else None,
            zoom.value if has_zoom.value else None,
        )
