"""Event envelope for hierarchical notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable

from proptree.core.ids import new_id, utc_now

if TYPE_CHECKING:
    from proptree.events.source import EventSource


@dataclass(eq=False)
class Event:
    """A single firing of a notification.

    ``source`` is bound by the first :class:`EventSource` that fires the
    event.  The two ``notified_*`` maps record, by identity, which listeners
    and parent sources have already seen this instance, which makes re-firing it
    along another path a no-op for those nodes.

    Fields
    ------
    data : Any
        Payload.
    type : int | str
        Application-defined tag.
    stop_propagation : bool
        Set by a listener to skip the remaining listeners of the node that
        is currently dispatching.
    """

    data: Any = None
    type: int | str = 0
    source: EventSource | None = None
    event_id: str = field(default_factory=new_id)
    timestamp: datetime = field(default_factory=utc_now)
    stop_propagation: bool = False
    # id(obj) -> obj; holding the object keeps its id from being reused
    notified_listeners: dict[int, Callable[[Any], Any]] = field(default_factory=dict)
    notified_parents: dict[int, EventSource] = field(default_factory=dict)

    def stop(self) -> None:
        """Skip the remaining listeners at the current node."""
        self.stop_propagation = True

    def has_reached_listener(self, listener: Callable[[Any], Any]) -> bool:
        return id(listener) in self.notified_listeners

    def mark_listener(self, listener: Callable[[Any], Any]) -> None:
        self.notified_listeners[id(listener)] = listener

    def has_reached_parent(self, parent: EventSource) -> bool:
        return id(parent) in self.notified_parents

    def mark_parent(self, parent: EventSource) -> None:
        self.notified_parents[id(parent)] = parent
