"""
Liveness scopes for native handles.

A ``Document`` owns a root scope; each loaded ``Page`` owns a child scope;
annotation handles handed out by a page get a grandchild scope. Closing a
scope closes its children first (newest first), then releases its own
native resource. Wrappers check their scope before every native call, so
a child used after its parent was closed raises ``ClosedHandleError``
instead of touching freed native memory.

A page or annotation scope is also closed as soon as the wrapper that
owns it is garbage collected, so handles fetched and dropped in a loop
do not pile up until the document is closed. Parents hold their
children weakly; the pending finalizer keeps an unclosed child alive.
"""

from __future__ import annotations

import logging
import weakref
from typing import Callable

from .errors import ClosedHandleError

_logger = logging.getLogger(__name__)


class HandleScope:
    """A node in the tree of native resource lifetimes.

    Args:
        name: Label used in error messages (e.g. ``"document"``, ``"page 3"``).
        release: Callback that frees the native resource; called exactly once.
        strict: Whether ``ensure_alive()`` raises on a closed scope.
    """

    def __init__(
        self,
        name: str,
        release: Callable[[], None] | None = None,
        *,
        strict: bool = True,
        parent: HandleScope | None = None,
    ) -> None:
        self.name = name
        self._release = release
        self._strict = strict
        self._parent = parent
        self._children: list[weakref.ref[HandleScope]] = []
        self._closed = False

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<HandleScope {self.name} ({state})>"

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def open_children(self) -> list[HandleScope]:
        """Child scopes not yet closed, oldest first."""
        children = (ref() for ref in self._children)
        return [child for child in children if child is not None and not child.is_closed]

    def child(self, name: str, release: Callable[[], None] | None = None) -> HandleScope:
        """Open a scope that is closed no later than this one.

        The parent only holds the child weakly: keep it reachable, usually
        through ``close_with(owner)``, or its resource is never released.
        """
        self.ensure_alive()
        scope = HandleScope(name, release, strict=self._strict, parent=self)
        self._children.append(weakref.ref(scope))
        return scope

    def close_with(self, owner: object) -> None:
        """Close this scope once ``owner`` is garbage collected."""
        finalizer = weakref.finalize(owner, self.close)
        # Not run at interpreter exit
        finalizer.atexit = False

    def ensure_alive(self) -> None:
        """Raise ``ClosedHandleError`` if this scope has been closed."""
        if self._closed and self._strict:
            raise ClosedHandleError(f"{self.name} has been closed")

    def close(self) -> None:
        """Close children, then release this scope's native resource.

        Closing an already closed scope does nothing.
        """
        if self._closed:
            return
        while self._children:
            child = self._children.pop()()
            if child is not None:
                child.close()
        self._closed = True
        if self._parent is not None:
            self._parent._forget(self)
        release, self._release = self._release, None
        if release is not None:
            _logger.debug("Releasing %s", self.name)
            release()

    def _forget(self, child: HandleScope) -> None:
        kept = []
        for ref in self._children:
            scope = ref()
            if scope is not None and scope is not child:
                kept.append(ref)
        self._children = kept
