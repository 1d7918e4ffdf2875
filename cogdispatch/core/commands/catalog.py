"""Built-in catalog commands (help, ping)."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..models import Group, Leaf, Message
from .dispatcher import SendMessageFn
from .registry import CommandRegistry


def _leaf_line(prefix: str, name: str, leaf: Leaf) -> str:
    usage = leaf.usage or f"{prefix}{name}"
    if leaf.description:
        return f"- `{usage}` – {leaf.description}"
    return f"- `{usage}`"


def _command_lines(prefix: str, name: str, descriptor) -> List[str]:
    if isinstance(descriptor, Leaf):
        return [_leaf_line(prefix, name, descriptor)]

    header = f"- `{prefix}{name}`"
    if descriptor.description:
        header = f"{header} – {descriptor.description}"
    lines = [header]
    for sub_name in sorted(descriptor.subcommands):
        lines.append("  " + _leaf_line(prefix, f"{name} {sub_name}", descriptor.subcommands[sub_name]))
    if descriptor.default is not None:
        lines.append("  " + _leaf_line(prefix, f"{name} …", descriptor.default) + " (default)")
    return lines


def build_help_lines(
    registry: CommandRegistry, prefix: str, name: Optional[str] = None
) -> List[str]:
    """Render help text for every command, or for one command by name."""

    commands = registry.all_commands()
    if name is not None:
        descriptor = commands.get(name)
        if descriptor is None:
            return [f"🚫 unknown command `{prefix}{name}`"]
        return _command_lines(prefix, name, descriptor)

    lines = ["Available commands:"]
    for command_name in sorted(commands):
        lines.extend(_command_lines(prefix, command_name, commands[command_name]))
    return lines


def _parse_help_args(args: Sequence[str]) -> Optional[str]:
    return args[0] if args else None


def help_command(registry: CommandRegistry, prefix: str, send_message: SendMessageFn) -> Leaf:
    async def _handle(message: Message, name: Optional[str]):
        if name is not None and name.startswith(prefix):
            name = name[len(prefix) :]
        lines = build_help_lines(registry, prefix, name)
        return await send_message(message.channel_id, "\n".join(lines))

    return Leaf(
        handler=_handle,
        parse_args=_parse_help_args,
        usage=f"{prefix}help [command]",
        description="Show this command list, or details for one command.",
    )


def ping_command(send_message: SendMessageFn) -> Leaf:
    async def _handle(message: Message, args: Sequence[str]):
        return await send_message(message.channel_id, "pong")

    return Leaf(handler=_handle, description="Check that the bot is responding.")


def register_builtin_commands(
    registry: CommandRegistry, prefix: str, send_message: SendMessageFn
) -> None:
    registry.add_command("help", help_command(registry, prefix, send_message))
    registry.add_command("ping", ping_command(send_message))
