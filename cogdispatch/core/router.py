"""Routes Slack events to the command dispatcher."""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from .commands.dispatcher import CommandDispatcher
from .models import IGNORED, Message

LOGGER = logging.getLogger(__name__)

PermissionsFn = Callable[[Dict[str, Any]], Iterable[str]]

# Thread of the message currently being dispatched, read by reply senders.
_REPLY_THREAD: ContextVar[Optional[str]] = ContextVar("reply_thread", default=None)


def current_reply_thread() -> Optional[str]:
    return _REPLY_THREAD.get()


def permissions_from_mapping(grants: Mapping[str, Iterable[str]]) -> PermissionsFn:
    """Look up an event author's permissions in a user id -> names mapping."""

    def _lookup(event: Dict[str, Any]) -> Iterable[str]:
        return grants.get(event.get("user") or "", ())

    return _lookup


def message_from_event(event: Dict[str, Any], permissions: Iterable[str] = ()) -> Message:
    """Build a ``Message`` from a Slack ``message`` event payload."""
    return Message(
        content=event.get("text") or "",
        channel_id=event["channel"],
        author_id=event.get("user"),
        thread_ts=event.get("thread_ts") or event.get("ts"),
        permissions=frozenset(permissions),
        is_direct=event.get("channel_type") == "im",
    )


class Router:
    """Hosts the dispatcher: one call per incoming message, faults contained."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        permissions_for: Optional[PermissionsFn] = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._permissions_for = permissions_for

    async def handle_message(self, event: Dict[str, Any]) -> Any:
        channel_id = event.get("channel")
        text = (event.get("text") or "").strip()

        if not channel_id or not text:
            LOGGER.debug("Ignoring Slack event missing channel or text")
            return IGNORED

        permissions = self._permissions_for(event) if self._permissions_for else ()
        message = message_from_event(event, permissions=permissions)
        token = _REPLY_THREAD.set(message.thread_ts)
        try:
            result = await self._dispatcher.handle_message(message)
        except Exception:
            LOGGER.exception("Command failed for message in %s: %r", channel_id, text)
            return None
        finally:
            _REPLY_THREAD.reset(token)

        if result is not IGNORED:
            LOGGER.info("Handled command in %s from %s", channel_id, message.author_id)
        return result
