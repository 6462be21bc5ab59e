"""Pages of a document and the live page collection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .annotations import PageAnnotations
from .classifier import check_handle
from .sequence import NativeSequence

if TYPE_CHECKING:
    from types import TracebackType

    from .bindings import NativeHandle, PdfiumBindings
    from .document import Document
    from .scope import HandleScope

# US Letter, in PDF points
DEFAULT_PAGE_WIDTH = 612.0
DEFAULT_PAGE_HEIGHT = 792.0


class Page:
    """A loaded page, borrowed from its ``Document``.

    The page owns its native page handle and every annotation handle it
    hands out; ``close()`` releases all of them. Closing the document
    closes the page, and so does dropping the last reference to it.
    """

    def __init__(
        self, handle: NativeHandle, document: Document, index: int, scope: HandleScope
    ) -> None:
        self._handle = handle
        self._document = document
        self._index = index
        self._scope = scope

    def __repr__(self) -> str:
        return f"<Page {self._index}>"

    def __enter__(self) -> Page:
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
    def document(self) -> Document:
        return self._document

    @property
    def bindings(self) -> PdfiumBindings:
        return self._document.bindings

    @property
    def scope(self) -> HandleScope:
        return self._scope

    @property
    def index(self) -> int:
        """Zero-based index the page was loaded from."""
        return self._index

    @property
    def width(self) -> float:
        self._scope.ensure_alive()
        return self.bindings.get_page_width(self._handle)

    @property
    def height(self) -> float:
        self._scope.ensure_alive()
        return self.bindings.get_page_height(self._handle)

    @property
    def annotations(self) -> PageAnnotations:
        return PageAnnotations(self)

    @property
    def is_closed(self) -> bool:
        return self._scope.is_closed

    def close(self) -> None:
        """Release the page and all annotation handles fetched from it."""
        self._scope.close()


class Pages(NativeSequence[Page]):
    """Live view over the pages of a ``Document``.

    Each ``get`` loads a fresh native page handle owned by the returned
    ``Page``. The handle is closed when that ``Page`` is closed or
    garbage collected, whichever comes first.
    """

    _collection_name = "pages"

    def __init__(self, document: Document) -> None:
        super().__init__(document.bindings, document.scope)
        self._document = document

    def _count(self) -> int:
        return self._bindings.get_page_count(self._document.handle)

    def _fetch(self, index: int) -> Page:
        handle = check_handle(
            self._bindings,
            self._bindings.load_page(self._document.handle, index),
            f"load page {index}",
        )
        return self._adopt(handle, index)

    def _adopt(self, handle: NativeHandle, index: int) -> Page:
        bindings = self._bindings
        scope = self._document.scope.child(
            f"page {index}", release=lambda: bindings.close_page(handle)
        )
        page = Page(handle, self._document, index, scope)
        scope.close_with(page)
        return page

    def create_page_at_end(
        self, width: float = DEFAULT_PAGE_WIDTH, height: float = DEFAULT_PAGE_HEIGHT
    ) -> Page:
        """Append a blank page of the given size (in points) and return it."""
        index = self.len()
        handle = check_handle(
            self._bindings,
            self._bindings.page_new(self._document.handle, index, width, height),
            "create page",
        )
        return self._adopt(handle, index)
