"""Test DefinitionGroup creation, membership and removal."""

import pytest

from proptree.core.errors import (
    InvalidArgumentError,
    InvalidStateError,
    RegistrationConflictError,
)


class TestAddGroup:
    def test_add_group(self, app_node):
        grp = app_node.add_group("display")
        assert grp.name == "display"
        assert not grp.is_default
        assert app_node.get_group("display") is grp
        assert [g.name for g in app_node.groups] == ["", "display"]

    def test_duplicate_group(self, app_node):
        app_node.add_group("display")
        with pytest.raises(RegistrationConflictError, match="display"):
            app_node.add_group("display")

    def test_default_group_name_is_taken(self, app_node):
        with pytest.raises(RegistrationConflictError):
            app_node.add_group("")

    @pytest.mark.parametrize("name", ["   ", "\t", None])
    def test_blank_group_rejected(self, app_node, name):
        with pytest.raises(InvalidArgumentError, match="Illegal group name"):
            app_node.add_group(name)
        assert len(app_node.groups) == 1

    def test_get_missing_group(self, app_node):
        assert app_node.get_group("nope") is None


class TestGroupMembership:
    def test_add_via_group(self, app_node, text_type):
        grp = app_node.add_group("display")
        d = grp.add_definition("Title", text_type, "Shown in the title bar")
        assert grp.definitions == [d]
        assert app_node.get_definition("Title") is d
        assert len(app_node.default_group) == 0

    def test_add_with_group_name(self, app_node, text_type):
        app_node.add_group("display")
        d = app_node.add_definition("Title", text_type, group="display")
        assert list(app_node.get_group("display")) == [d]

    def test_definitions_is_a_snapshot(self, app_node, text_type):
        grp = app_node.add_group("display")
        snapshot = grp.definitions
        grp.add_definition("Title", text_type)
        assert snapshot == []
        assert len(grp) == 1


class TestRemoveGroup:
    def test_remove_default_group_is_refused(self, app_node):
        assert app_node.remove_group("") is False
        assert app_node.get_group("") is not None

    @pytest.mark.parametrize("name", ["  ", None])
    def test_remove_blank(self, app_node, name):
        assert app_node.remove_group(name) is False

    def test_remove_unknown(self, app_node):
        assert app_node.remove_group("nope") is False

    def test_remove_moves_definitions_to_default(self, app_node, text_type):
        base = app_node.add_definition("Base", text_type)
        grp = app_node.add_group("display")
        a = grp.add_definition("Title", text_type)
        b = grp.add_definition("Width", text_type)

        assert app_node.remove_group("display") is True

        assert app_node.get_group("display") is None
        assert app_node.default_group.definitions == [base, a, b]
        assert app_node.definitions == [base, a, b]

    def test_removed_name_can_be_reused(self, app_node):
        app_node.add_group("display")
        app_node.remove_group("display")
        assert app_node.add_group("display").definitions == []

    def test_remove_empty_group(self, app_node):
        app_node.add_group("empty")
        assert app_node.remove_group("empty") is True
        assert len(app_node.default_group) == 0

    def test_stale_handle_rejects_definitions(self, app_node, text_type):
        old = app_node.add_group("display")
        app_node.remove_group("display")
        fresh = app_node.add_group("display")

        with pytest.raises(InvalidStateError, match="display"):
            old.add_definition("Title", text_type)

        assert fresh.definitions == []
        assert app_node.get_definition("Title") is None
