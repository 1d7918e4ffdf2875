"""Shared fixtures for command dispatch tests."""

from __future__ import annotations

import pytest

from cogdispatch.core.commands.registry import CommandRegistry
from cogdispatch.core.models import Group, Leaf, Message


@pytest.fixture
def mock_send_message():
    """Async mock for send_message that prints to terminal."""

    messages: list[dict[str, str]] = []

    async def _send(channel: str, text: str):
        print(f"\n{'='*60}")
        print("CHAT OUTPUT")
        print(f"   Channel: {channel}")
        print(f"{'-'*60}")
        print(f"{text}")
        print(f"{'='*60}\n")
        messages.append({"channel": channel, "text": text})
        return f"sent:{len(messages)}"

    _send.messages = messages  # type: ignore[attr-defined]
    return _send


class RecordingHandler:
    """Handler stub that remembers every call it receives."""

    def __init__(self, result="ok") -> None:
        self.calls: list[tuple[Message, object]] = []
        self._result = result

    async def __call__(self, message: Message, args):
        self.calls.append((message, args))
        return self._result


@pytest.fixture
def handler_factory():
    return RecordingHandler


@pytest.fixture
def make_message():
    def _make(content: str, **kwargs) -> Message:
        kwargs.setdefault("channel_id", "C123456")
        kwargs.setdefault("author_id", "U123")
        return Message(content=content, **kwargs)

    return _make


@pytest.fixture
def tag_handlers():
    return {
        "add": RecordingHandler("added"),
        "remove": RecordingHandler("removed"),
        "default": RecordingHandler("default"),
    }


@pytest.fixture
def registry(tag_handlers):
    """Registry with a plain `echo` command and a `tags` group without default."""
    reg = CommandRegistry()
    reg.add_command("echo", Leaf(handler=RecordingHandler("echoed")))
    reg.add_group(
        "tags",
        Group(
            subcommands={
                "add": Leaf(handler=tag_handlers["add"]),
                "remove": Leaf(handler=tag_handlers["remove"]),
            }
        ),
    )
    return reg
