"""Core domain logic for cogdispatch."""

from .commands import CommandDispatcher, CommandRegistry
from .config import Config, load_config
from .errors import (
    CogDispatchError,
    CommandRegistrationError,
    ConfigError,
    SlackError,
)
from .models import (
    IGNORED,
    CommandDescriptor,
    Failed,
    Group,
    Leaf,
    Message,
    Passed,
)
from .router import Router

__all__ = [
    "Config",
    "load_config",
    "CommandDescriptor",
    "CommandDispatcher",
    "CommandRegistry",
    "Failed",
    "Group",
    "IGNORED",
    "Leaf",
    "Message",
    "Passed",
    "CogDispatchError",
    "CommandRegistrationError",
    "ConfigError",
    "SlackError",
    "Router",
]
