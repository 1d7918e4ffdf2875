"""Tokenizing helpers for prefixed chat commands."""

from __future__ import annotations

import shlex
from typing import List, Optional, Sequence, Tuple


def split_content(content: str) -> List[str]:
    """Split message content into tokens using shell-like quoting.

    Malformed quoting (for example an unmatched ``"``) falls back to a plain
    whitespace split that keeps quote characters as literal text.
    """
    try:
        return shlex.split(content)
    except ValueError:
        return content.split()


def strip_prefix(tokens: Sequence[str], prefix: str) -> Optional[Tuple[str, List[str]]]:
    """Return ``(command_name, args)`` when the first token carries the prefix."""
    if not tokens:
        return None
    head = tokens[0]
    if not head.startswith(prefix):
        return None
    name = head[len(prefix) :]
    if not name:
        return None
    return name, list(tokens[1:])
