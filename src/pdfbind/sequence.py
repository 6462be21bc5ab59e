"""
Native-backed collection views.

A collection view holds no elements. Its length is re-queried from the
native library on every call and elements are fetched by index on
demand, so the view always reflects the native state at call time, even
if the document was modified through another wrapper.
"""

from __future__ import annotations

import logging
import operator
from typing import TYPE_CHECKING, Generic, Iterator, TypeVar

from .constants import MAX_COLLECTION_INDEX
from .errors import IndexOutOfBoundsError, LibraryInternalError

if TYPE_CHECKING:
    from .bindings import PdfiumBindings
    from .scope import HandleScope

_logger = logging.getLogger(__name__)

_E = TypeVar("_E")


class NativeSequence(Generic[_E]):
    """Base class for index-addressable views over a native collection.

    Subclasses implement ``_count()`` (the native count call) and
    ``_fetch(index)`` (the native fetch for an index already checked to be
    in bounds). Everything else, including bounds checking and iteration,
    lives here.

    Args:
        bindings: Native bindings shared with the owning wrapper.
        scope: Liveness scope of the owning wrapper.
    """

    _collection_name = "collection"

    def __init__(self, bindings: PdfiumBindings, scope: HandleScope) -> None:
        self._bindings = bindings
        self._scope = scope

    def __repr__(self) -> str:
        return f"<{type(self).__name__} of {self._scope.name}>"

    @property
    def bindings(self) -> PdfiumBindings:
        return self._bindings

    # ── Subclass hooks ───────────────────────────────────────────────

    def _count(self) -> int:
        raise NotImplementedError

    def _fetch(self, index: int) -> _E:
        raise NotImplementedError

    # ── Length and ranges ────────────────────────────────────────────

    def len(self) -> int:
        """Return the number of elements, queried live from the native library.

        Negative native counts (a native error) read as 0; counts above the
        16-bit index domain are capped.
        """
        self._scope.ensure_alive()
        count = self._count()
        if count < 0:
            _logger.debug("%s count query returned %d; treating as empty", self._collection_name, count)
            return 0
        return min(count, MAX_COLLECTION_INDEX)

    def __len__(self) -> int:
        return self.len()

    def is_empty(self) -> bool:
        return self.len() == 0

    def as_range(self) -> range:
        """Return ``range(0, len())``."""
        return range(self.len())

    def as_range_inclusive(self) -> range:
        """Return the inclusive index range ``0..=len()-1`` as a Python range.

        An empty collection yields the placeholder ``0..=0`` (``range(0, 1)``),
        which contains the index 0 even though ``get(0)`` will fail.
        """
        length = self.len()
        if length == 0:
            return range(0, 1)
        return range(0, length)

    # ── Element access ───────────────────────────────────────────────

    def get(self, index: int) -> _E:
        """Return the element at ``index``.

        Raises:
            IndexOutOfBoundsError: If ``index`` is outside ``0..len()``.
                No native fetch is issued in that case.
            LibraryInternalError: If the native fetch fails.
            ClosedHandleError: If the owning wrapper has been closed.
        """
        return self._fetch(self._check_index(index))

    def __getitem__(self, index: int) -> _E:
        return self.get(index)

    def iter(self) -> NativeSequenceIterator[_E]:
        """Return a lazy iterator over the elements.

        Iteration stops at the first index whose ``get`` fails, whether
        the index ran past the end or the native fetch failed. The failure
        is not propagated: a native error at index k yields exactly k
        elements. Use ``get`` directly to observe the error.
        """
        return NativeSequenceIterator(self)

    def __iter__(self) -> Iterator[_E]:
        return self.iter()

    def _check_index(self, index: int) -> int:
        """Bounds-check an index for mutators that take one."""
        index = operator.index(index)
        length = self.len()
        if index < 0 or index >= length:
            raise IndexOutOfBoundsError(self._collection_name, index, length)
        return index


class NativeSequenceIterator(Generic[_E]):
    """Cursor over a ``NativeSequence`` built from repeated ``get`` calls.

    The cursor advances by one on every step, successful or not. Once a
    step fails the iterator is exhausted. A fresh iterator restarts at 0.
    """

    def __init__(self, sequence: NativeSequence[_E]) -> None:
        self._sequence = sequence
        self._next_index = 0
        self._exhausted = False

    def __iter__(self) -> NativeSequenceIterator[_E]:
        return self

    def __next__(self) -> _E:
        if self._exhausted:
            raise StopIteration
        index = self._next_index
        self._next_index += 1
        try:
            return self._sequence.get(index)
        except (IndexOutOfBoundsError, LibraryInternalError) as e:
            if not isinstance(e, IndexOutOfBoundsError):
                _logger.debug("Iteration stopped at index %d: %s", index, e)
            self._exhausted = True
            raise StopIteration from None
