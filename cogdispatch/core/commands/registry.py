"""In-memory command registry keyed by top-level command name."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Dict, Mapping, Optional, Protocol, Sequence, Union

from ..errors import CommandRegistrationError
from ..models import CommandDescriptor, Group, Leaf

LOGGER = logging.getLogger(__name__)

CommandPath = Union[str, Sequence[str]]


class CommandLookup(Protocol):
    """The only registry operation the dispatcher depends on."""

    def lookup(self, name: str) -> Optional[CommandDescriptor]:
        ...


def _normalize_path(path: CommandPath) -> tuple[str, ...]:
    parts = (path,) if isinstance(path, str) else tuple(path)
    if not parts or len(parts) > 2:
        raise CommandRegistrationError(
            f"Command path must name a command and at most one subcommand, got {parts!r}"
        )
    if any(not part or any(ch.isspace() for ch in part) for part in parts):
        raise CommandRegistrationError(f"Invalid command name in path {parts!r}")
    return parts


class CommandRegistry:
    """Thread-safe store mapping command names to leaves or groups.

    Stored descriptors are immutable. Registering or removing a command
    replaces the top-level descriptor, so a concurrent ``lookup`` always sees
    either the old or the new command, never a partially edited group.
    """

    def __init__(self, commands: Optional[Mapping[str, CommandDescriptor]] = None) -> None:
        self._commands: Dict[str, CommandDescriptor] = dict(commands or {})
        self._lock = RLock()

    def lookup(self, name: str) -> Optional[CommandDescriptor]:
        with self._lock:
            return self._commands.get(name)

    def all_commands(self) -> Dict[str, CommandDescriptor]:
        with self._lock:
            return dict(self._commands)

    def add_command(self, path: CommandPath, leaf: Leaf, *, default: bool = False) -> None:
        """Register ``leaf`` at ``path``.

        ``("ping",)`` registers a top-level command, ``("tags", "add")`` a
        subcommand of the ``tags`` group, and ``("tags",)`` with
        ``default=True`` the leaf run when no ``tags`` subcommand matches.
        """
        parts = _normalize_path(path)
        if default and len(parts) != 1:
            raise CommandRegistrationError("A default leaf is registered on the group path only")

        with self._lock:
            name = parts[0]
            existing = self._commands.get(name)
            if len(parts) == 1 and not default:
                if isinstance(existing, Group):
                    raise CommandRegistrationError(f"`{name}` is already a command group")
                self._commands[name] = leaf
            else:
                if isinstance(existing, Leaf):
                    raise CommandRegistrationError(
                        f"`{name}` is already a plain command and cannot hold subcommands"
                    )
                group = existing or Group()
                if default:
                    self._commands[name] = Group(
                        subcommands=group.subcommands,
                        default=leaf,
                        description=group.description,
                    )
                else:
                    subcommands = dict(group.subcommands)
                    subcommands[parts[1]] = leaf
                    self._commands[name] = Group(
                        subcommands=subcommands,
                        default=group.default,
                        description=group.description,
                    )
        LOGGER.debug("Registered command %s%s", " ".join(parts), " (default)" if default else "")

    def add_group(self, name: str, group: Group) -> None:
        """Register a fully built group, replacing any group of the same name."""
        _normalize_path(name)
        if not group.subcommands and group.default is None:
            raise CommandRegistrationError(f"Group `{name}` needs a subcommand or a default")
        with self._lock:
            if isinstance(self._commands.get(name), Leaf):
                raise CommandRegistrationError(
                    f"`{name}` is already a plain command and cannot hold subcommands"
                )
            self._commands[name] = group
        LOGGER.debug("Registered command group %s (%s)", name, ", ".join(group.subcommand_names))

    def remove_command(self, path: CommandPath, *, default: bool = False) -> None:
        """Remove the command at ``path``; removing an absent command is a no-op.

        A group left without subcommands and without a default is dropped.
        """
        parts = _normalize_path(path)
        with self._lock:
            name = parts[0]
            existing = self._commands.get(name)
            if existing is None:
                return
            if len(parts) == 1 and not default:
                del self._commands[name]
                LOGGER.debug("Removed command %s", name)
                return
            if not isinstance(existing, Group):
                return

            subcommands = dict(existing.subcommands)
            new_default = existing.default
            if default:
                new_default = None
            else:
                subcommands.pop(parts[1], None)

            if not subcommands and new_default is None:
                del self._commands[name]
            else:
                self._commands[name] = Group(
                    subcommands=subcommands,
                    default=new_default,
                    description=existing.description,
                )
        LOGGER.debug("Removed command %s%s", " ".join(parts), " (default)" if default else "")
