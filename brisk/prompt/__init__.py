"""
Brisk CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .completion import CompletionResult, complete_buffer, words_source
from .events import EventKind, PromptEvent
from .machine import (
    ConfirmMachine,
    MultiSelectMachine,
    PromptMachine,
    PromptState,
    SelectMachine,
    TextMachine,
    build_machine,
)
from .prompter import Prompter, StreamPrompter, TerminalPrompter, default_prompter
from .spec import PromptKind, PromptSpec, SelectOption

__all__ = [
    "CompletionResult",
    "complete_buffer",
    "words_source",
    "EventKind",
    "PromptEvent",
    "PromptMachine",
    "PromptState",
    "TextMachine",
    "ConfirmMachine",
    "SelectMachine",
    "MultiSelectMachine",
    "build_machine",
    "Prompter",
    "StreamPrompter",
    "TerminalPrompter",
    "default_prompter",
    "PromptKind",
    "PromptSpec",
    "SelectOption",
]
