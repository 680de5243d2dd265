# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by the Brisk CLI framework.

These signals are raised to interrupt CLI execution flow (displaying help or
abandoning an interactive prompt) without being treated as traditional exceptions.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks.

Signals:
- CancelSignal: An interactive prompt was cancelled by the user or its input stream.
- HelpSignal: Help was requested for the matched command.
"""
from __future__ import annotations

from enum import Enum


class CancelReason(Enum):
    """Why a prompt stopped without producing a value."""

    USER = "user"
    END_OF_INPUT = "end_of_input"
    READ_ERROR = "read_error"

    def __str__(self) -> str:
        return self.value


class FlowSignal(BaseException):
    """Base class for all flow control signals in Brisk.

    These are not errors. They carry control back to the caller of `App.run`.
    """


class CancelSignal(FlowSignal):
    """Raised when a prompt is cancelled.

    Callers may treat every reason uniformly; `reason` only tells a user cancel
    apart from a closed or failing input stream.
    """

    def __init__(
        self,
        message: str = "Cancel signal received.",
        reason: CancelReason = CancelReason.USER,
    ):
        super().__init__(message)
        self.reason = reason


class HelpSignal(FlowSignal):
    """Raised to display help information."""

    def __init__(self, message: str = "Help signal received."):
        super().__init__(message)
