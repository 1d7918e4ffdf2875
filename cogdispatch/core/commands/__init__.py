"""Command parsing, registration and dispatch."""

from .catalog import build_help_lines, register_builtin_commands
from .dispatcher import CommandDispatcher, format_unknown_subcommand
from .parse import split_content, strip_prefix
from .predicates import author_allowed, channel_only, find_failing_predicate, has_permission
from .registry import CommandLookup, CommandRegistry

__all__ = [
    "CommandDispatcher",
    "CommandLookup",
    "CommandRegistry",
    "author_allowed",
    "build_help_lines",
    "channel_only",
    "find_failing_predicate",
    "format_unknown_subcommand",
    "has_permission",
    "register_builtin_commands",
    "split_content",
    "strip_prefix",
]
