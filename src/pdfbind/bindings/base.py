"""
Bindings protocol for the native PDF library.

Defines the capability that every wrapper holds. Wrappers depend on this
protocol, never on a concrete implementation, so a test double can stand
in for the native library.

Call conventions:
    * indexed fetches return a handle, or ``None`` for a null handle;
    * counts return an ``int``;
    * mutators return ``True`` on success and ``False`` on failure;
    * ``get_last_error()`` is a snapshot read of the cause of the most
      recent failure and must be called right after the failure signal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ..errors import InternalErrorCode
    from ..quad_points import QuadPoints

# Opaque native reference. Identity equality only; never None once stored.
NativeHandle = Any


class PdfiumBindings(Protocol):
    """Protocol over the native PDFium entry points used by pdfbind.

    Implementations translate between Python values and the native call
    surface. They never raise for a native failure sentinel; they return
    it, and the caller classifies it.
    """

    # ── Errors ───────────────────────────────────────────────────────

    def get_last_error(self) -> InternalErrorCode | None:
        """Return the cause of the last failed call, or None if none was reported."""
        ...

    # ── Documents ────────────────────────────────────────────────────

    def load_mem_document(self, data: bytes, password: str | None) -> NativeHandle | None: ...

    def create_new_document(self) -> NativeHandle | None: ...

    def close_document(self, document: NativeHandle) -> None: ...

    def save_as_copy(self, document: NativeHandle, flags: int) -> bytes | None:
        """Serialize the document; None signals failure."""
        ...

    def get_page_count(self, document: NativeHandle) -> int: ...

    # ── Pages ────────────────────────────────────────────────────────

    def load_page(self, document: NativeHandle, index: int) -> NativeHandle | None: ...

    def close_page(self, page: NativeHandle) -> None: ...

    def page_new(
        self, document: NativeHandle, index: int, width: float, height: float
    ) -> NativeHandle | None: ...

    def get_page_width(self, page: NativeHandle) -> float: ...

    def get_page_height(self, page: NativeHandle) -> float: ...

    # ── Signatures ───────────────────────────────────────────────────

    def get_signature_count(self, document: NativeHandle) -> int: ...

    def get_signature_object(self, document: NativeHandle, index: int) -> NativeHandle | None: ...

    def signature_get_contents(self, signature: NativeHandle) -> bytes: ...

    def signature_get_byte_range(self, signature: NativeHandle) -> list[int]: ...

    def signature_get_sub_filter(self, signature: NativeHandle) -> str | None: ...

    def signature_get_reason(self, signature: NativeHandle) -> str | None: ...

    def signature_get_time(self, signature: NativeHandle) -> str | None: ...

    def signature_get_doc_mdp_permission(self, signature: NativeHandle) -> int: ...

    # ── Annotations ──────────────────────────────────────────────────

    def page_get_annot_count(self, page: NativeHandle) -> int: ...

    def page_get_annot(self, page: NativeHandle, index: int) -> NativeHandle | None: ...

    def page_create_annot(self, page: NativeHandle, subtype: int) -> NativeHandle | None: ...

    def page_remove_annot(self, page: NativeHandle, index: int) -> bool: ...

    def page_close_annot(self, annotation: NativeHandle) -> None: ...

    def annot_get_subtype(self, annotation: NativeHandle) -> int: ...

    def annot_get_link(self, annotation: NativeHandle) -> NativeHandle | None: ...

    def annot_set_uri(self, annotation: NativeHandle, uri: str) -> bool: ...

    def annot_set_dest(
        self, annotation: NativeHandle, page: NativeHandle, x: float, y: float, z: float
    ) -> bool:
        """Point a link annotation at a location on another page.

        Raises:
            UnsupportedOperationError: If the native build lacks this entry point.
        """
        ...

    # ── Attachment points ────────────────────────────────────────────

    def annot_count_attachment_points(self, annotation: NativeHandle) -> int: ...

    def annot_get_attachment_points(
        self, annotation: NativeHandle, index: int
    ) -> QuadPoints | None: ...

    def annot_set_attachment_points(
        self, annotation: NativeHandle, index: int, quad: QuadPoints
    ) -> bool: ...

    def annot_append_attachment_points(self, annotation: NativeHandle, quad: QuadPoints) -> bool: ...

    # ── Annotation objects ───────────────────────────────────────────

    def annot_get_object_count(self, annotation: NativeHandle) -> int: ...

    def annot_get_object(self, annotation: NativeHandle, index: int) -> NativeHandle | None: ...

    def annot_remove_object(self, annotation: NativeHandle, index: int) -> bool: ...

    def page_object_get_type(self, page_object: NativeHandle) -> int: ...

    def page_object_get_bounds(
        self, page_object: NativeHandle
    ) -> tuple[float, float, float, float] | None: ...

    # ── Links, actions, destinations ─────────────────────────────────

    def link_get_dest(self, document: NativeHandle, link: NativeHandle) -> NativeHandle | None: ...

    def link_get_action(self, link: NativeHandle) -> NativeHandle | None: ...

    def action_get_type(self, action: NativeHandle) -> int: ...

    def action_get_uri_path(self, document: NativeHandle, action: NativeHandle) -> str | None: ...

    def action_get_dest(
        self, document: NativeHandle, action: NativeHandle
    ) -> NativeHandle | None: ...

    def dest_get_page_index(self, document: NativeHandle, dest: NativeHandle) -> int: ...

    def dest_get_location_in_page(
        self, dest: NativeHandle
    ) -> tuple[float | None, float | None, float | None] | None:
        """Return (x, y, zoom) with None for absent components; None on failure."""
        ...
