"""Hierarchical, synchronous event propagation."""

from proptree.events.event import Event
from proptree.events.source import EventListener, EventSource, relay

__all__ = ["Event", "EventListener", "EventSource", "relay"]
