"""Tests for CommandRegistry."""

from __future__ import annotations

import pytest

from cogdispatch.core.commands.registry import CommandRegistry
from cogdispatch.core.errors import CommandRegistrationError
from cogdispatch.core.models import Group, Leaf


async def _noop(message, args):
    return None


class TestCommandRegistry:
    """Registration, lookup and removal."""

    @pytest.fixture
    def leaf(self):
        return Leaf(handler=_noop)

    def test_lookup_missing_returns_none(self):
        assert CommandRegistry().lookup("nope") is None

    def test_add_top_level_leaf(self, leaf):
        registry = CommandRegistry()
        registry.add_command("ping", leaf)
        assert registry.lookup("ping") is leaf

    def test_add_subcommands_builds_group(self, leaf):
        registry = CommandRegistry()
        other = Leaf(handler=_noop, description="remove a tag")
        registry.add_command(("tags", "add"), leaf)
        registry.add_command(["tags", "remove"], other)

        group = registry.lookup("tags")
        assert isinstance(group, Group)
        assert group.subcommands == {"add": leaf, "remove": other}
        assert group.default is None

    def test_add_default_keeps_subcommands(self, leaf):
        registry = CommandRegistry()
        default = Leaf(handler=_noop, description="show tag")
        registry.add_command(("tags", "add"), leaf)
        registry.add_command(("tags",), default, default=True)

        group = registry.lookup("tags")
        assert group.default is default
        assert group.subcommand_names == ("add",)

    def test_lookup_is_exact(self, leaf):
        registry = CommandRegistry()
        registry.add_command("ping", leaf)
        assert registry.lookup("PING") is None

    def test_stored_groups_are_not_mutated(self, leaf):
        registry = CommandRegistry()
        registry.add_command(("tags", "add"), leaf)
        before = registry.lookup("tags")
        registry.add_command(("tags", "remove"), leaf)

        assert before.subcommand_names == ("add",)
        assert registry.lookup("tags").subcommand_names == ("add", "remove")

    def test_group_subcommands_are_read_only(self, leaf):
        group = Group(subcommands={"add": leaf})
        with pytest.raises(TypeError):
            group.subcommands["remove"] = leaf  # type: ignore[index]

    def test_subcommand_under_leaf_rejected(self, leaf):
        registry = CommandRegistry()
        registry.add_command("ping", leaf)
        with pytest.raises(CommandRegistrationError):
            registry.add_command(("ping", "sub"), leaf)
        with pytest.raises(CommandRegistrationError):
            registry.add_group("ping", Group(subcommands={"sub": leaf}))

    def test_leaf_over_group_rejected(self, leaf):
        registry = CommandRegistry()
        registry.add_command(("tags", "add"), leaf)
        with pytest.raises(CommandRegistrationError):
            registry.add_command("tags", leaf)

    @pytest.mark.parametrize("path", [(), ("",), ("a", "b", "c"), ("has space",)])
    def test_invalid_paths_rejected(self, leaf, path):
        with pytest.raises(CommandRegistrationError):
            CommandRegistry().add_command(path, leaf)

    def test_default_requires_group_path(self, leaf):
        with pytest.raises(CommandRegistrationError):
            CommandRegistry().add_command(("tags", "add"), leaf, default=True)

    def test_remove_subcommand_and_drop_empty_group(self, leaf):
        registry = CommandRegistry()
        registry.add_command(("tags", "add"), leaf)
        registry.add_command(("tags", "remove"), leaf)

        registry.remove_command(("tags", "add"))
        assert registry.lookup("tags").subcommand_names == ("remove",)

        registry.remove_command(("tags", "remove"))
        assert registry.lookup("tags") is None

    def test_remove_default(self, leaf):
        registry = CommandRegistry()
        registry.add_command(("tags", "add"), leaf)
        registry.add_command("tags", leaf, default=True)

        registry.remove_command("tags", default=True)
        assert registry.lookup("tags").default is None

    def test_remove_missing_is_noop(self):
        registry = CommandRegistry()
        registry.remove_command("ghost")
        registry.remove_command(("ghost", "sub"))
        assert registry.all_commands() == {}

    def test_all_commands_is_a_snapshot(self, leaf):
        registry = CommandRegistry({"ping": leaf})
        snapshot = registry.all_commands()
        snapshot["other"] = leaf
        assert registry.lookup("other") is None

    def test_empty_group_rejected(self):
        registry = CommandRegistry()
        with pytest.raises(CommandRegistrationError):
            registry.add_group("tags", Group())
        assert registry.lookup("tags") is None
