# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `HookManager` and `HookType` used by Brisk to observe command
execution.

These observer hooks are separate from a command's own `pre`, `run` and `post`
hooks: they receive the `ExecutionContext` and are meant for logging, metrics and
diagnostics. A failing observer is logged and skipped, so it can never change the
outcome of a command.

Key Components:
- HookType: Enum of observable lifecycle stages
- HookManager: Registers and triggers observers

Usage:
    hooks = HookManager()
    hooks.register(HookType.BEFORE, log_before)
"""
from __future__ import annotations

import inspect
from enum import Enum
from typing import Awaitable, Callable, Union

from brisk.context import ExecutionContext
from brisk.exceptions import InvalidHookError
from brisk.logger import logger

Hook = Union[
    Callable[[ExecutionContext], None], Callable[[ExecutionContext], Awaitable[None]]
]


class HookType(Enum):
    """
    Enum for supported observer stages.

    Members:
        BEFORE: Run before the `pre` hook.
        ON_SUCCESS: Run after `run` and `post` completed.
        ON_ERROR: Run when any command hook raised.
        AFTER: Run after success or failure (always runs).

    Aliases:
        "success" → "on_success"
        "error" → "on_error"
    """

    BEFORE = "before"
    ON_SUCCESS = "on_success"
    ON_ERROR = "on_error"
    AFTER = "after"

    @classmethod
    def choices(cls) -> list[HookType]:
        """Return a list of all hook type choices."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "success": "on_success",
            "error": "on_error",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> HookType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        """Return the string representation of the hook type."""
        return self.value


class HookManager:
    """
    Manages observer hooks for an application or command.

    Methods:
        register(hook_type, hook): Register a callable for a given HookType.
        clear(hook_type): Remove hooks for one or all lifecycle stages.
        trigger(hook_type, context): Execute all hooks of a given type.
    """

    def __init__(self) -> None:
        self._hooks: dict[HookType, list[Hook]] = {
            hook_type: [] for hook_type in HookType
        }

    def register(self, hook_type: HookType | str, hook: Hook):
        """
        Register a new hook for a given lifecycle phase.

        Raises:
            ValueError: If the hook type is invalid.
            InvalidHookError: If the hook is not callable.
        """
        hook_type = HookType(hook_type)
        if not callable(hook):
            raise InvalidHookError(f"Hook for '{hook_type}' must be callable: {hook!r}")
        self._hooks[hook_type].append(hook)

    def clear(self, hook_type: HookType | None = None):
        """Clear registered hooks for one or all hook types."""
        if hook_type:
            self._hooks[hook_type] = []
        else:
            for ht in self._hooks:
                self._hooks[ht] = []

    async def trigger(self, hook_type: HookType, context: ExecutionContext):
        """
        Invoke all hooks registered for a given lifecycle phase.

        Raises:
            BaseException: Re-raises the original context.exception if a hook fails
                during ON_ERROR. Other hook exceptions are logged and skipped.
        """
        if hook_type not in self._hooks:
            raise ValueError(f"Unsupported hook type: {hook_type}")
        for hook in self._hooks[hook_type]:
            try:
                if inspect.iscoroutinefunction(hook):
                    await hook(context)
                else:
                    hook(context)
            except Exception as hook_error:
                logger.warning(
                    "[Hook:%s] raised an exception during '%s' for '%s': %s",
                    getattr(hook, "__name__", hook),
                    hook_type,
                    context.name,
                    hook_error,
                )
                if hook_type == HookType.ON_ERROR and context.exception is not None:
                    raise context.exception from hook_error

    def __str__(self) -> str:
        """Return a formatted string of registered hooks grouped by hook type."""

        def format_hook_list(hooks: list[Hook]) -> str:
            return ", ".join(h.__name__ for h in hooks) if hooks else "-"

        lines = ["<HookManager>"]
        for hook_type in HookType:
            hook_list = self._hooks.get(hook_type, [])
            lines.append(f"  {hook_type.value}: {format_hook_list(hook_list)}")
        return "\n".join(lines)
