"""Command preconditions and the short-circuiting predicate chain."""

from __future__ import annotations

import inspect
from typing import Iterable, Optional, Tuple

from ..models import Failed, Message, Passed, Predicate


async def find_failing_predicate(
    message: Message, predicates: Iterable[Predicate]
) -> Tuple[Message, Optional[Failed]]:
    """Evaluate ``predicates`` in order and stop at the first failure.

    Returns the message as rewritten by the passing predicates, together with
    the first ``Failed`` result or ``None`` when every predicate passed.
    Predicates after a failing one are never called.
    """
    for predicate in predicates:
        result = predicate(message)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, Failed):
            return message, result
        if isinstance(result, Passed):
            message = result.message
        else:
            raise TypeError(
                f"Predicate {predicate!r} returned {result!r}; expected Passed or Failed"
            )
    return message, None


def has_permission(permission: str) -> Predicate:
    """Require the author to hold ``permission``."""

    def _check(message: Message):
        if permission in message.permissions:
            return Passed(message)
        return Failed(f"🚫 you need the `{permission}` permission to do that")

    _check.__name__ = f"has_permission_{permission}"
    return _check


def channel_only(message: Message):
    """Reject commands sent as direct messages."""
    if message.is_direct:
        return Failed("🚫 this command can not be used in direct messages")
    return Passed(message)


def author_allowed(author_ids: Iterable[str]) -> Predicate:
    allowed = frozenset(author_ids)

    def _check(message: Message):
        if message.author_id in allowed:
            return Passed(message)
        return Failed("🚫 you are not allowed to use this command")

    return _check
