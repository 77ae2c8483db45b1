"""Shared fixtures for the proptree test suite."""

from __future__ import annotations

from typing import Any

import pytest

from proptree.events.source import EventSource
from proptree.properties.registry import RegistryNode
from proptree.properties.types import StringPropertyType


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

@pytest.fixture
def root() -> RegistryNode:
    """Return an anonymous root node (namespace ``""``)."""
    return RegistryNode()


@pytest.fixture
def app_node(root: RegistryNode) -> RegistryNode:
    """Return ``.app`` attached under the anonymous root."""
    return RegistryNode("app", root, description="Application settings")


@pytest.fixture
def text_type() -> StringPropertyType:
    """Return a short bounded string type."""
    return StringPropertyType.intern(0, 32, "")


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class Recorder:
    """Collects listener invocations in a shared call log."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def listener(self, label: str, *, stop: bool = False):
        def _listen(event: Any) -> None:
            self.calls.append((label, event))
            if stop:
                event.stop()

        _listen.__name__ = f"listener_{label}"
        return _listen

    @property
    def labels(self) -> list[str]:
        return [label for label, _ in self.calls]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def chain() -> tuple[EventSource, EventSource, EventSource]:
    """Return ``(root, mid, child)`` with child → mid → root parent links."""
    top = EventSource()
    mid = EventSource(top)
    leaf = EventSource(mid)
    return top, mid, leaf
