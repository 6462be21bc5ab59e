"""
Page annotations.

``PageAnnotations`` is the live view over a page's annotations.
Fetching an annotation opens a new native annotation handle. It is
closed with the page, through ``PageAnnotation.close()``, or when the
wrapper is garbage collected, whichever comes first.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

from .annotation_objects import AnnotationObjects
from .attachment_points import AttachmentPoints
from .classifier import check_handle, check_success
from .constants import FPDF_ANNOT_LINK
from .errors import InternalErrorCode, LibraryInternalError
from .link import Link
from .sequence import NativeSequence

if TYPE_CHECKING:
    from types import TracebackType

    from .bindings import NativeHandle, PdfiumBindings
    from .page import Page
    from .scope import HandleScope

_logger = logging.getLogger(__name__)


class AnnotationType(enum.IntEnum):
    """Annotation subtypes (``FPDF_ANNOT_*``)."""

    UNKNOWN = 0
    TEXT = 1
    LINK = 2
    FREETEXT = 3
    LINE = 4
    SQUARE = 5
    CIRCLE = 6
    POLYGON = 7
    POLYLINE = 8
    HIGHLIGHT = 9
    UNDERLINE = 10
    SQUIGGLY = 11
    STRIKEOUT = 12
    STAMP = 13
    CARET = 14
    INK = 15
    POPUP = 16
    FILEATTACHMENT = 17
    SOUND = 18
    MOVIE = 19
    WIDGET = 20
    SCREEN = 21
    PRINTERMARK = 22
    TRAPNET = 23
    WATERMARK = 24
    THREED = 25
    RICHMEDIA = 26
    XFAWIDGET = 27
    REDACT = 28


class PageAnnotation:
    """A single annotation on a ``Page``.

    Composes the native handle with two live sub-collections, ``objects``
    and ``attachment_points``, all bound to the annotation's scope.
    """

    def __init__(
        self,
        handle: NativeHandle,
        page: Page,
        scope: HandleScope,
        annotation_type: AnnotationType = AnnotationType.UNKNOWN,
    ) -> None:
        self._handle = handle
        self._page = page
        self._scope = scope
        self._bindings = page.bindings
        self._annotation_type = annotation_type

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._annotation_type.name} on {self._page!r}>"

    def __enter__(self) -> PageAnnotation:
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
    def page(self) -> Page:
        return self._page

    @property
    def scope(self) -> HandleScope:
        return self._scope

    @property
    def annotation_type(self) -> AnnotationType:
        return self._annotation_type

    @property
    def objects(self) -> AnnotationObjects:
        return AnnotationObjects(
            self._page.document.handle,
            self._page.handle,
            self._handle,
            self._bindings,
            self._scope,
            owner=self,
        )

    @property
    def attachment_points(self) -> AttachmentPoints:
        return AttachmentPoints(self._handle, self._bindings, self._scope, owner=self)

    def attachment_points_mut(self) -> AttachmentPoints:
        """Return the attachment points view for editing."""
        return self.attachment_points

    def is_link(self) -> bool:
        return self._annotation_type is AnnotationType.LINK

    @property
    def is_closed(self) -> bool:
        return self._scope.is_closed

    def close(self) -> None:
        """Release the native annotation handle before the page is closed."""
        self._scope.close()


class LinkAnnotation(PageAnnotation):
    """A single annotation of type ``AnnotationType.LINK``."""

    def __init__(self, handle: NativeHandle, page: Page, scope: HandleScope) -> None:
        super().__init__(handle, page, scope, AnnotationType.LINK)

    def link(self) -> Link:
        """Return the ``Link`` associated with this annotation.

        Raises:
            LibraryInternalError: If the annotation has no link.
        """
        self._scope.ensure_alive()
        handle = check_handle(
            self._bindings, self._bindings.annot_get_link(self._handle), "get annotation link"
        )
        return Link(
            handle, self._page.document.handle, self._bindings, self._scope, owner=self
        )

    def set_link(self, uri: str) -> None:
        """Point this annotation at ``uri`` (a URI action)."""
        self._scope.ensure_alive()
        check_success(
            self._bindings, self._bindings.annot_set_uri(self._handle, uri), "set annotation URI"
        )

    def set_dest(self, page_dest: Page, x: float, y: float, z: float) -> None:
        """Point this annotation at location (x, y, z) on ``page_dest``.

        Cross-document targets are not checked here; PDFium rejects them
        and the rejection is raised as ``LibraryInternalError``.

        Raises:
            UnsupportedOperationError: If the PDFium build cannot set destinations.
        """
        self._scope.ensure_alive()
        page_dest.scope.ensure_alive()
        check_success(
            self._bindings,
            self._bindings.annot_set_dest(self._handle, page_dest.handle, x, y, z),
            "set annotation destination",
        )


class PageAnnotations(NativeSequence[PageAnnotation]):
    """Live view over the annotations of one ``Page``."""

    _collection_name = "annotations"

    def __init__(self, page: Page) -> None:
        super().__init__(page.bindings, page.scope)
        self._page = page

    @property
    def page(self) -> Page:
        return self._page

    def _count(self) -> int:
        return self._bindings.page_get_annot_count(self._page.handle)

    def _fetch(self, index: int) -> PageAnnotation:
        handle = check_handle(
            self._bindings,
            self._bindings.page_get_annot(self._page.handle, index),
            f"get annotation {index}",
        )
        return self._adopt(handle, f"annotation {index}")

    def _adopt(self, handle: NativeHandle, name: str) -> PageAnnotation:
        """Register ``handle`` with the page scope and wrap it by subtype."""
        bindings = self._bindings
        scope = self._page.scope.child(
            f"{name} on {self._page.scope.name}",
            release=lambda: bindings.page_close_annot(handle),
        )
        subtype = bindings.annot_get_subtype(handle)
        annotation: PageAnnotation
        if subtype == FPDF_ANNOT_LINK:
            annotation = LinkAnnotation(handle, self._page, scope)
        else:
            try:
                annotation_type = AnnotationType(subtype)
            except ValueError:
                _logger.debug("Unrecognized annotation subtype %d", subtype)
                annotation_type = AnnotationType.UNKNOWN
            annotation = PageAnnotation(handle, self._page, scope, annotation_type)
        scope.close_with(annotation)
        return annotation

    def links(self) -> list[LinkAnnotation]:
        """Return the link annotations on the page, in page order.

        Built on ``iter()``, so it stops at the first annotation that
        cannot be fetched.
        """
        return [annotation for annotation in self if isinstance(annotation, LinkAnnotation)]

    def create_link_annotation(self) -> LinkAnnotation:
        """Append a new, empty link annotation to the page."""
        self._scope.ensure_alive()
        handle = check_handle(
            self._bindings,
            self._bindings.page_create_annot(self._page.handle, FPDF_ANNOT_LINK),
            "create link annotation",
        )
        annotation = self._adopt(handle, "new annotation")
        if not isinstance(annotation, LinkAnnotation):
            raise LibraryInternalError(
                InternalErrorCode.UNKNOWN,
                "create link annotation failed: created annotation has subtype "
                f"{annotation.annotation_type.name}",
            )
        return annotation

    def remove(self, index: int) -> None:
        """Remove the annotation at ``index`` from the page.

        Wrappers already fetched for that annotation keep their handle
        until closed, but no longer refer to anything on the page.
        """
        index = self._check_index(index)
        check_success(
            self._bindings,
            self._bindings.page_remove_annot(self._page.handle, index),
            f"remove annotation {index}",
        )
