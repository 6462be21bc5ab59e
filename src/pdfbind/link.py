"""
Link targets.

A ``Link`` is resolved lazily from a native link handle. Its target is
either a ``NamedDestination`` (a page plus a location on it) or a
``UriDestination``; a link never carries both.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from .classifier import native_failure
from .constants import PDFACTION_GOTO, PDFACTION_URI
from .errors import InternalErrorCode, LibraryInternalError

if TYPE_CHECKING:
    from .bindings import NativeHandle, PdfiumBindings
    from .scope import HandleScope

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamedDestination:
    """A location inside the document: zero-based page index plus a point.

    Components the destination leaves unspecified are None. ``zoom`` is
    the third coordinate and is interpreted by the viewer.
    """

    page_index: int
    x: float | None = None
    y: float | None = None
    zoom: float | None = None


@dataclass(frozen=True)
class UriDestination:
    """An external target identified by a URI."""

    uri: str


LinkTarget = Union[NamedDestination, UriDestination]


class Link:
    """The target of a link annotation.

    Args:
        handle: Native link handle.
        document_handle: Handle of the document the link lives in.
        bindings: Native bindings.
        scope: Liveness scope of the annotation the link came from.
        owner: The annotation wrapper, kept reachable so its handle stays
            open while the link is in use.
    """

    def __init__(
        self,
        handle: NativeHandle,
        document_handle: NativeHandle,
        bindings: PdfiumBindings,
        scope: HandleScope,
        owner: object = None,
    ) -> None:
        self._handle = handle
        self._document_handle = document_handle
        self._bindings = bindings
        self._scope = scope
        self._owner = owner

    def __repr__(self) -> str:
        return f"<Link in {self._scope.name}>"

    @property
    def handle(self) -> NativeHandle:
        return self._handle

    def _action(self) -> NativeHandle | None:
        return self._bindings.link_get_action(self._handle)

    def uri(self) -> str | None:
        """Return the URI if this link performs a URI action."""
        self._scope.ensure_alive()
        action = self._action()
        if action is None or self._bindings.action_get_type(action) != PDFACTION_URI:
            return None
        return self._bindings.action_get_uri_path(self._document_handle, action)

    def destination(self) -> NamedDestination | None:
        """Return the in-document destination, from ``/Dest`` or a GoTo action."""
        self._scope.ensure_alive()
        dest = self._bindings.link_get_dest(self._document_handle, self._handle)
        if dest is None:
            action = self._action()
            if action is not None and self._bindings.action_get_type(action) == PDFACTION_GOTO:
                dest = self._bindings.action_get_dest(self._document_handle, action)
        if dest is None:
            return None

        page_index = self._bindings.dest_get_page_index(self._document_handle, dest)
        if page_index < 0:
            raise native_failure(self._bindings, "resolve destination page")
        location = self._bindings.dest_get_location_in_page(dest)
        if location is None:
            _logger.debug("Destination on page %d has no location", page_index)
            return NamedDestination(page_index)
        x, y, zoom = location
        return NamedDestination(page_index, x, y, zoom)

    def target(self) -> LinkTarget:
        """Return the link's destination or URI.

        Raises:
            LibraryInternalError: With code ``UNKNOWN`` if the link resolves
                to neither. No native call failed, so the last-error slot
                is not consulted.
        """
        destination = self.destination()
        if destination is not None:
            return destination
        uri = self.uri()
        if uri is not None:
            return UriDestination(uri)
        raise LibraryInternalError(
            InternalErrorCode.UNKNOWN, "resolve link target failed: no destination or URI"
        )
