# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the Brisk CLI framework.

Two families are distinguished:

- Construction errors are raised while a command tree, flag registry or argument
  list is being declared. A malformed tree can never be built successfully.
- Usage errors are raised while an invocation is resolved. They carry the
  offending name or token so the caller can report it and exit cleanly.

Exception Hierarchy:
- BriskError
    ├── CommandAlreadyExistsError
    ├── FlagAlreadyExistsError
    ├── InvalidFlagError
    ├── InvalidArgumentError
    ├── InvalidHookError
    ├── ConfigError
    └── UsageError
          ├── UnknownCommandError
          ├── CommandRequiredError
          ├── UnknownFlagError
          ├── BundledValueFlagError
          ├── MissingValueError
          ├── MissingRequiredValueError
          ├── InvalidValueError
          ├── TooManyArgumentsError
          └── MissingArgumentError

Errors raised by user hooks are never wrapped in any of these.
"""
from __future__ import annotations

from typing import Any, Sequence


class BriskError(Exception):
    """Base exception for the Brisk framework."""


class CommandAlreadyExistsError(BriskError):
    """Raised when a sibling command already uses the same name or alias."""


class FlagAlreadyExistsError(BriskError):
    """Raised when a flag name or short form is registered twice."""


class InvalidFlagError(BriskError):
    """Raised when a flag definition is internally inconsistent."""


class InvalidArgumentError(BriskError):
    """Raised when an argument declaration is invalid or out of order."""


class InvalidHookError(BriskError):
    """Raised when a hook is not callable or a leaf command has no run hook."""


class ConfigError(BriskError):
    """Raised when a configuration file cannot be loaded."""


class UsageError(BriskError):
    """Base class for errors caused by what the user typed.

    Attributes:
        path (tuple[str, ...]): Names of the matched command path, when known.
    """

    def __init__(self, message: str, path: Sequence[str] = ()):
        super().__init__(message)
        self.path: tuple[str, ...] = tuple(path)


class UnknownCommandError(UsageError):
    """Raised when a router command receives a token that names no child."""

    def __init__(self, token: str, path: Sequence[str] = ()):
        where = " ".join(path)
        message = f"unknown command '{token}'"
        if where:
            message = f"unknown command '{token}' for '{where}'"
        super().__init__(message, path)
        self.token = token


class CommandRequiredError(UsageError):
    """Raised when a router command is invoked without selecting a child."""

    def __init__(self, path: Sequence[str] = (), choices: Sequence[str] = ()):
        message = "a command is required"
        if choices:
            message = f"a command is required, choose one of: {', '.join(choices)}"
        super().__init__(message, path)
        self.choices = tuple(choices)


class UnknownFlagError(UsageError):
    """Raised when a flag-like token matches no flag on the command path."""

    def __init__(
        self, token: str, suggestions: Sequence[str] = (), path: Sequence[str] = ()
    ):
        if suggestions:
            message = (
                f"Unrecognized option '{token}'. "
                f"Did you mean one of: {', '.join(suggestions)}?"
            )
        else:
            message = f"Unrecognized option '{token}'. Use --help to see available options."
        super().__init__(message, path)
        self.token = token
        self.suggestions = tuple(suggestions)


class MissingValueError(UsageError):
    """Raised when a value-taking flag is the last token of the input."""

    def __init__(self, flag: str, path: Sequence[str] = ()):
        super().__init__(f"flag '{flag}' expects a value", path)
        self.flag = flag


class MissingRequiredValueError(UsageError):
    """Raised when a required flag was not supplied by any source."""

    def __init__(self, flag: str, path: Sequence[str] = ()):
        super().__init__(f"missing required value for flag '--{flag}'", path)
        self.flag = flag


class InvalidValueError(UsageError):
    """Raised when a literal cannot be coerced to the flag's kind."""

    def __init__(
        self,
        flag: str,
        literal: Any,
        kind: str,
        reason: str | None = None,
        path: Sequence[str] = (),
    ):
        message = f"invalid value {literal!r} for flag '--{flag}': expected {kind}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, path)
        self.flag = flag
        self.literal = literal
        self.kind = kind
        self.reason = reason


class TooManyArgumentsError(UsageError):
    """Raised when more positional tokens are given than arguments declared."""

    def __init__(self, extra: Sequence[str], path: Sequence[str] = ()):
        super().__init__(f"too many arguments: {' '.join(extra)}", path)
        self.extra = tuple(extra)


class MissingArgumentError(UsageError):
    """Raised when a required argument is absent and prompting is unavailable."""

    def __init__(self, argument: str, path: Sequence[str] = ()):
        super().__init__(f"missing required argument '{argument}'", path)
        self.argument = argument


class BundledValueFlagError(UsageError):
    """Raised when a value-taking short flag appears inside a bundle like `-ab`."""

    def __init__(self, flag: str, token: str, path: Sequence[str] = ()):
        super().__init__(
            f"flag '{flag}' takes a value and cannot be bundled in '{token}'", path
        )
        self.flag = flag
        self.token = token
