"""Custom exception hierarchy for cogdispatch."""


class CogDispatchError(Exception):
    """Base error type."""


class ConfigError(CogDispatchError):
    pass


class CommandRegistrationError(CogDispatchError):
    """Raised when a command path conflicts with what is already registered."""


class SlackError(CogDispatchError):
    pass
