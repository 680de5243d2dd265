# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Input events fed to prompt state machines.

Drivers translate terminal keys or input lines into `PromptEvent`s. Tests feed
them directly, so prompt behavior can be checked without a terminal.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EventKind(Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    SUBMIT = "submit"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    TOGGLE = "toggle"
    JUMP = "jump"
    COMPLETE = "complete"
    CANCEL = "cancel"
    EOF = "eof"
    ERROR = "error"


@dataclass(frozen=True)
class PromptEvent:
    """
    A single input event.

    Attributes:
        kind (EventKind): What happened.
        text (str | None): Typed character, a submitted line, or the buffer to
            complete. `SUBMIT` without text accepts the machine's own buffer or
            highlighted item.
        index (int | None): Zero-based item index for `JUMP`.
    """

    kind: EventKind
    text: str | None = None
    index: int | None = None

    @classmethod
    def char(cls, text: str) -> PromptEvent:
        return cls(EventKind.CHAR, text=text)

    @classmethod
    def submit(cls, text: str | None = None) -> PromptEvent:
        return cls(EventKind.SUBMIT, text=text)

    @classmethod
    def jump(cls, index: int) -> PromptEvent:
        return cls(EventKind.JUMP, index=index)

    @classmethod
    def complete(cls, text: str | None = None) -> PromptEvent:
        return cls(EventKind.COMPLETE, text=text)

    @classmethod
    def key(cls, kind: EventKind | str) -> PromptEvent:
        return cls(EventKind(kind))


BACKSPACE = PromptEvent(EventKind.BACKSPACE)
UP = PromptEvent(EventKind.UP)
DOWN = PromptEvent(EventKind.DOWN)
HOME = PromptEvent(EventKind.HOME)
END = PromptEvent(EventKind.END)
TOGGLE = PromptEvent(EventKind.TOGGLE)
CANCEL = PromptEvent(EventKind.CANCEL)
EOF = PromptEvent(EventKind.EOF)
READ_ERROR = PromptEvent(EventKind.ERROR)
