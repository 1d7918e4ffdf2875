"""Prefix-based command dispatch over an injected registry."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional

from ..models import IGNORED, CommandDescriptor, Group, Leaf, Message
from .parse import split_content, strip_prefix
from .predicates import find_failing_predicate
from .registry import CommandLookup

LOGGER = logging.getLogger(__name__)

SendMessageFn = Callable[[str, str], Awaitable[Any]]


def format_unknown_subcommand(group: Group) -> str:
    known = ", ".join(f"`{name}`" for name in sorted(group.subcommands))
    return f"🚫 unknown subcommand, known subcommands: {known}"


class CommandDispatcher:
    """Resolves prefixed messages to registered commands and invokes them."""

    def __init__(
        self,
        prefix: str,
        registry: CommandLookup,
        send_message: SendMessageFn,
    ) -> None:
        if not prefix:
            raise ValueError("Command prefix must be a non-empty string")
        self._prefix = prefix
        self._registry = registry
        self._send_message = send_message

    @property
    def prefix(self) -> str:
        return self._prefix

    async def handle_message(
        self, message: Message, registry: Optional[CommandLookup] = None
    ) -> Any:
        """Dispatch ``message``.

        Returns ``IGNORED`` when the message names no registered command,
        otherwise the handler's return value, or the result of sending the
        response when a predicate fails or a subcommand is unknown.
        """
        lookup = self._registry if registry is None else registry

        parsed = strip_prefix(split_content(message.content), self._prefix)
        if parsed is None:
            return IGNORED
        name, args = parsed

        descriptor = lookup.lookup(name)
        if descriptor is None:
            LOGGER.debug("Ignoring unknown command %r in %s", name, message.channel_id)
            return IGNORED

        return await self._handle_command(name, descriptor, message, args)

    async def _handle_command(
        self,
        name: str,
        descriptor: CommandDescriptor,
        message: Message,
        args: List[str],
    ) -> Any:
        if isinstance(descriptor, Leaf):
            return await self._invoke(name, descriptor, message, args)
        if isinstance(descriptor, Group):
            return await self._handle_group(name, descriptor, message, args)
        raise TypeError(f"Unsupported command descriptor for {name!r}: {descriptor!r}")

    async def _handle_group(
        self, name: str, group: Group, message: Message, args: List[str]
    ) -> Any:
        if args and args[0] in group.subcommands:
            subcommand = args[0]
            return await self._invoke(
                f"{name} {subcommand}", group.subcommands[subcommand], message, args[1:]
            )
        if group.default is not None:
            return await self._invoke(name, group.default, message, args)

        LOGGER.debug("Unknown subcommand %r for %s", args[0] if args else None, name)
        return await self._send_message(message.channel_id, format_unknown_subcommand(group))

    async def _invoke(self, name: str, leaf: Leaf, message: Message, args: List[str]) -> Any:
        message, failure = await find_failing_predicate(message, leaf.predicates)
        if failure is not None:
            LOGGER.debug("Predicate rejected %s in %s", name, message.channel_id)
            return await self._send_message(message.channel_id, failure.response)

        parsed_args = leaf.parse_args(args) if leaf.parse_args is not None else args
        LOGGER.debug("Invoking %s with %d argument(s)", name, len(args))
        result = leaf.handler(message, parsed_args)
        if inspect.isawaitable(result):
            result = await result
        return result
