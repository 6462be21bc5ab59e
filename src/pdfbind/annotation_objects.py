"""Graphical page objects stored inside an annotation's appearance stream."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from .classifier import check_handle, check_success
from .sequence import NativeSequence

if TYPE_CHECKING:
    from .bindings import NativeHandle, PdfiumBindings
    from .scope import HandleScope


class PageObjectType(enum.IntEnum):
    """Values of ``FPDFPageObj_GetType``."""

    UNKNOWN = 0
    TEXT = 1
    PATH = 2
    IMAGE = 3
    SHADING = 4
    FORM = 5


class PageObject:
    """A single page object borrowed from an annotation.

    The annotation owns the native object; this wrapper never frees it,
    but keeps ``owner`` reachable so the annotation is not released first.
    """

    def __init__(
        self,
        handle: NativeHandle,
        bindings: PdfiumBindings,
        scope: HandleScope,
        owner: object = None,
    ) -> None:
        self._handle = handle
        self._bindings = bindings
        self._scope = scope
        self._owner = owner

    def __repr__(self) -> str:
        return f"<PageObject in {self._scope.name}>"

    @property
    def handle(self) -> NativeHandle:
        return self._handle

    @property
    def object_type(self) -> PageObjectType:
        self._scope.ensure_alive()
        try:
            return PageObjectType(self._bindings.page_object_get_type(self._handle))
        except ValueError:
            return PageObjectType.UNKNOWN

    def bounds(self) -> tuple[float, float, float, float]:
        """Return (left, bottom, right, top) in page coordinates."""
        self._scope.ensure_alive()
        return check_handle(
            self._bindings,
            self._bindings.page_object_get_bounds(self._handle),
            "get page object bounds",
        )


class AnnotationObjects(NativeSequence[PageObject]):
    """Live view over the page objects inside one annotation.

    ``owner`` is the annotation wrapper; the view and every ``PageObject``
    it hands out keep it reachable.
    """

    _collection_name = "annotation objects"

    def __init__(
        self,
        document_handle: NativeHandle,
        page_handle: NativeHandle,
        annotation_handle: NativeHandle,
        bindings: PdfiumBindings,
        scope: HandleScope,
        owner: object = None,
    ) -> None:
        super().__init__(bindings, scope)
        self._document_handle = document_handle
        self._owner = owner
        self._page_handle = page_handle
        self._annotation_handle = annotation_handle

    @property
    def document_handle(self) -> NativeHandle:
        return self._document_handle

    @property
    def page_handle(self) -> NativeHandle:
        return self._page_handle

    def _count(self) -> int:
        return self._bindings.annot_get_object_count(self._annotation_handle)

    def _fetch(self, index: int) -> PageObject:
        handle = check_handle(
            self._bindings,
            self._bindings.annot_get_object(self._annotation_handle, index),
            f"get annotation object {index}",
        )
        return PageObject(handle, self._bindings, self._scope, self._owner)

    def remove(self, index: int) -> None:
        """Remove the object at ``index`` from the annotation.

        Raises:
            IndexOutOfBoundsError: If ``index`` is outside ``0..len()``.
        """
        index = self._check_index(index)
        check_success(
            self._bindings,
            self._bindings.annot_remove_object(self._annotation_handle, index),
            f"remove annotation object {index}",
        )
