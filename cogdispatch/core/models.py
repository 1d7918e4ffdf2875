"""Domain models for cogdispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, FrozenSet, Mapping, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Message:
    """An incoming chat message.

    Only ``content`` and ``channel_id`` are read by the dispatcher. The other
    fields are handed through untouched for predicates and handlers.
    """

    content: str
    channel_id: str
    author_id: Optional[str] = None
    thread_ts: Optional[str] = None
    permissions: FrozenSet[str] = frozenset()
    is_direct: bool = False


@dataclass(frozen=True)
class Passed:
    message: Message


@dataclass(frozen=True)
class Failed:
    response: str


PredicateResult = Union[Passed, Failed]
Predicate = Callable[[Message], Union[PredicateResult, Awaitable[PredicateResult]]]
CommandHandler = Callable[[Message, Any], Any]
ArgParser = Callable[[Sequence[str]], Any]


@dataclass(frozen=True)
class Leaf:
    """A directly invokable command."""

    handler: CommandHandler
    predicates: Tuple[Predicate, ...] = ()
    parse_args: Optional[ArgParser] = None
    usage: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "predicates", tuple(self.predicates))


@dataclass(frozen=True)
class Group:
    """A command made of named subcommands and an optional default leaf."""

    subcommands: Mapping[str, Leaf] = field(default_factory=dict)
    default: Optional[Leaf] = None
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "subcommands", MappingProxyType(dict(self.subcommands)))

    @property
    def subcommand_names(self) -> Tuple[str, ...]:
        return tuple(self.subcommands)


CommandDescriptor = Union[Leaf, Group]


class _Ignored:
    """Sentinel returned when a message does not invoke any command."""

    _instance: Optional["_Ignored"] = None

    def __new__(cls) -> "_Ignored":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "IGNORED"

    def __bool__(self) -> bool:
        return False


IGNORED = _Ignored()
