"""Attachment points: the quadrilaterals tying an annotation to page coordinates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .classifier import check_handle, check_success
from .quad_points import QuadPoints
from .sequence import NativeSequence

if TYPE_CHECKING:
    from .bindings import NativeHandle, PdfiumBindings
    from .scope import HandleScope


class AttachmentPoints(NativeSequence[QuadPoints]):
    """Live view over the attachment points of a single annotation.

    Elements are ``QuadPoints`` values copied out of the native
    annotation; changing one requires ``set_attachment_point_at_index``.
    The view keeps ``owner`` (the annotation wrapper) reachable so the
    annotation handle stays open while the view is in use.
    """

    _collection_name = "attachment points"

    def __init__(
        self,
        annotation_handle: NativeHandle,
        bindings: PdfiumBindings,
        scope: HandleScope,
        owner: object = None,
    ) -> None:
        super().__init__(bindings, scope)
        self._annotation_handle = annotation_handle
        self._owner = owner

    def _count(self) -> int:
        return self._bindings.annot_count_attachment_points(self._annotation_handle)

    def _fetch(self, index: int) -> QuadPoints:
        return check_handle(
            self._bindings,
            self._bindings.annot_get_attachment_points(self._annotation_handle, index),
            f"get attachment point {index}",
        )

    def create_attachment_point_at_end(self, quad: QuadPoints) -> None:
        """Append ``quad`` after the last attachment point."""
        self._scope.ensure_alive()
        check_success(
            self._bindings,
            self._bindings.annot_append_attachment_points(self._annotation_handle, quad),
            "append attachment point",
        )

    append = create_attachment_point_at_end

    def set_attachment_point_at_index(self, index: int, quad: QuadPoints) -> None:
        """Replace the attachment point at ``index``.

        Raises:
            IndexOutOfBoundsError: If ``index`` is outside ``0..len()``.
        """
        index = self._check_index(index)
        check_success(
            self._bindings,
            self._bindings.annot_set_attachment_points(self._annotation_handle, index, quad),
            f"set attachment point {index}",
        )

    def __setitem__(self, index: int, quad: QuadPoints) -> None:
        self.set_attachment_point_at_index(index, quad)
