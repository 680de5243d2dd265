"""
Brisk CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .app import App
from .command import Command
from .context import ExecutionContext, ResolvedContext
from .hook_manager import HookManager, HookType
from .parser import Argument, Flag, FlagKind, ValueSource
from .prompt import PromptKind, PromptSpec, StreamPrompter, TerminalPrompter
from .signals import CancelReason, CancelSignal, HelpSignal

logger = logging.getLogger("brisk")


__all__ = [
    "App",
    "Command",
    "Flag",
    "FlagKind",
    "Argument",
    "ValueSource",
    "ResolvedContext",
    "ExecutionContext",
    "HookManager",
    "HookType",
    "PromptKind",
    "PromptSpec",
    "StreamPrompter",
    "TerminalPrompter",
    "CancelReason",
    "CancelSignal",
    "HelpSignal",
]
