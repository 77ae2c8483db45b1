"""End-to-end: a registry tree whose changes are announced on an event tree.

The two trees are independent; the application wires one EventSource per
registry region and fires an Event carrying each new definition.  An
audit listener at the root sees everything, region listeners see only
their own subtree, and a relay mirrors announcements to a second tree.
"""

from proptree import (
    Event,
    EventSource,
    RegistryNode,
    StringPropertyType,
    relay,
)

DEFINITION_ADDED = "definition_added"


class AnnouncingRegistry:
    """Pairs each RegistryNode with an EventSource mirroring its parent."""

    def __init__(self) -> None:
        self.root = RegistryNode()
        self.sources = {"": EventSource()}

    def node(self, path: str) -> RegistryNode:
        current = self.root
        for region in filter(None, path.split(".")):
            child = current.get_child(region)
            if child is None:
                child = RegistryNode(region, current)
                self.sources[child.namespace] = EventSource(
                    self.sources[current.namespace]
                )
            current = child
        return current

    def define(self, path: str, name: str, kind, description=None):
        node = self.node(path)
        definition = node.add_definition(name, kind, description)
        self.sources[node.namespace].notify(
            Event(data=definition, type=DEFINITION_ADDED)
        )
        return definition


def test_root_audit_sees_every_definition():
    reg = AnnouncingRegistry()
    audit = []
    reg.sources[""].add_listener(lambda e: audit.append(e.data.qualified_name))
    text = StringPropertyType.intern(0, 64, "")

    reg.define("app", "Title", text, "Window title")
    reg.define("app.ui", "Theme", text)
    reg.define("net", "Host", StringPropertyType.intern(1, 255, "localhost"))

    assert audit == [".app.Title", ".app.ui.Theme", ".net.Host"]


def test_region_listener_scoped_to_subtree():
    reg = AnnouncingRegistry()
    text = StringPropertyType.create()
    reg.node("app.ui")
    reg.node("net")
    seen = []
    reg.sources[".app"].add_listener(lambda e: seen.append(e.data.name))

    reg.define("app.ui", "Theme", text)
    reg.define("net", "Host", text)
    reg.define("app", "Title", text)

    assert seen == ["Theme", "Title"]


def test_relay_mirrors_into_second_tree():
    reg = AnnouncingRegistry()
    mirror_root = EventSource()
    mirror = EventSource(mirror_root)
    mirrored = []
    mirror_root.add_listener(lambda e: mirrored.append(("root", e.data.name)))
    mirror.add_listener(lambda e: mirrored.append(("leaf", e.data.name)))
    relay(reg.sources[""], mirror)

    reg.define("app", "Title", StringPropertyType.create())

    assert mirrored == [("root", "Title"), ("leaf", "Title")]


def test_shared_type_across_tree():
    reg = AnnouncingRegistry()
    a = reg.define("app", "Title", StringPropertyType.intern(0, 10, "x"))
    b = reg.define("net", "Host", StringPropertyType.intern(0, 10, "x"))
    assert a.type is b.type
    assert reg.root.resolve("app").get_definition("Title") is a
