"""Hierarchical, synchronous event sources.

An :class:`EventSource` holds an ordered list of listeners and an optional
parent.  Firing an :class:`Event` on a source first forwards it up the
parent chain, then delivers it to the source's own listeners::

    root  ◄── mid  ◄── child          child.notify(Event())
     │         │         │
     1         2         3            delivery order

Parents do not know their children, and several sources may share one
parent.  Each :class:`Event` remembers which parents and listeners it has
already reached, so firing the same instance through two children of a
shared parent reaches that parent only once.

Listeners are plain callables taking the event.  The listener list is a
copy-on-write tuple: a dispatch in progress keeps iterating the snapshot
it started with, while other threads add or remove listeners.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from proptree.core.errors import InvalidArgumentError
from proptree.events.event import Event

logger = logging.getLogger(__name__)

# Listener signature: receives an Event (or a bare payload).
EventListener = Callable[[Any], Any]


class EventSource:
    """Listener registry with an optional, mutable parent link."""

    def __init__(self, parent: EventSource | None = None) -> None:
        self._parent = parent
        self._init_transient()

    def _init_transient(self) -> None:
        self._write_lock = threading.Lock()
        self._listeners: tuple[EventListener, ...] = ()

    # ------------------------------------------------------------------
    # Parent link
    # ------------------------------------------------------------------

    @property
    def parent(self) -> EventSource | None:
        return self._parent

    @parent.setter
    def parent(self, parent: EventSource | None) -> None:
        self._parent = parent

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    @property
    def listeners(self) -> tuple[EventListener, ...]:
        """Current listener snapshot."""
        return self._listeners

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: EventListener | None) -> None:
        if listener is None:
            return
        with self._write_lock:
            self._listeners = self._listeners + (listener,)

    def insert_listener(self, index: int, listener: EventListener | None) -> None:
        """Insert *listener* at *index*, which must lie in ``[0, listener_count]``."""
        if listener is None:
            return
        with self._write_lock:
            updated = list(self._listeners)
            if not 0 <= index <= len(updated):
                raise InvalidArgumentError(
                    f"Listener index {index} out of range [0, {len(updated)}]"
                )
            updated.insert(index, listener)
            self._listeners = tuple(updated)

    def remove_listener(self, listener: EventListener | None) -> None:
        """Remove the first occurrence of *listener*; unknown ones are ignored.

        Listeners are matched by identity.
        """
        if listener is None:
            return
        with self._write_lock:
            for pos, existing in enumerate(self._listeners):
                if existing is listener:
                    self._listeners = (
                        self._listeners[:pos] + self._listeners[pos + 1:]
                    )
                    return

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def notify(self, event: Any, propagate_to_parent: bool = True) -> None:
        """Deliver *event* to the parent chain, then to local listeners.

        Anything that is not an :class:`Event` is treated as a bare payload
        and handed to every local listener, with no parent propagation and
        no deduplication.

        Exceptions raised by listeners propagate to the caller.
        """
        if not isinstance(event, Event):
            for listener in self._listeners:
                listener(event)
            return

        if event.source is None:
            event.source = self

        parent = self._parent
        if (
            propagate_to_parent
            and parent is not None
            and parent is not self
            and parent is not event.source
            and not event.has_reached_parent(parent)
        ):
            event.mark_parent(parent)
            parent.notify(event)

        # Only a stop raised by this node's own listeners ends its loop
        stopped_upstream = event.stop_propagation
        event.stop_propagation = False
        try:
            for listener in self._listeners:
                if listener is event.source or event.has_reached_listener(listener):
                    continue
                event.mark_listener(listener)
                listener(event)
                if event.stop_propagation:
                    logger.debug(
                        "Event %s stopped at %r", event.event_id, self,
                    )
                    break
        finally:
            event.stop_propagation = event.stop_propagation or stopped_upstream

    # ------------------------------------------------------------------
    # Pickling: listeners and parent are transient
    # ------------------------------------------------------------------

    def __getstate__(self) -> dict[str, Any]:
        state = self.__dict__.copy()
        state.pop("_write_lock", None)
        state.pop("_listeners", None)
        state["_parent"] = None
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
        self._init_transient()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(listeners={len(self._listeners)}, "
            f"has_parent={self._parent is not None})"
        )


def relay(source: EventSource, target: EventSource) -> EventListener:
    """Forward every event fired on *source* to *target*.

    Returns the forwarding listener so it can be removed later with
    ``source.remove_listener(...)``.
    """
    if source is None or target is None:
        raise InvalidArgumentError("Event source is null")

    def forward(event: Any) -> None:
        target.notify(event)

    source.add_listener(forward)
    return forward
