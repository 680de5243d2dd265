# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ExecutionPipeline`, which runs a command's `pre`, `run` and `post` hooks.

Ordering rules:
- `pre` runs first when present. If it raises, neither `run` nor `post` runs.
- `run` is required; a router reaching the pipeline is a usage error.
- `post` runs only after `run` succeeded. If it raises, the error propagates but
  `run`'s result stays recorded on the `ExecutionContext`.

Errors from hooks propagate unchanged. Hooks run one after another on the
calling task; nothing is scheduled concurrently. Observer hooks from the
application and from the command see every execution through the
`ExecutionContext`.
"""
from __future__ import annotations

from typing import Any, Sequence

from brisk.command import Command
from brisk.context import ExecutionContext, ResolvedContext
from brisk.exceptions import CommandRequiredError
from brisk.hook_manager import HookManager, HookType
from brisk.logger import logger


class ExecutionPipeline:
    """
    Runs the lifecycle of one resolved command.

    Args:
        hooks (Sequence[HookManager]): Observer managers triggered in order
            (typically the application's, then the command's).
    """

    def __init__(self, hooks: Sequence[HookManager] = ()) -> None:
        self.hooks = list(hooks)
        self.last_context: ExecutionContext | None = None

    async def execute(self, command: Command, resolved: ResolvedContext) -> Any:
        """
        Run `command` against `resolved` and return `run`'s result.

        Raises:
            CommandRequiredError: The command has no run hook.
            Exception: Whatever a hook raised, unchanged.
        """
        if command.run is None:
            raise CommandRequiredError(
                resolved.path, [child.name for child in command.visible_children()]
            )
        hooks = [*self.hooks, command.hooks]
        context = ExecutionContext(name=" ".join(resolved.path), context=resolved)
        self.last_context = context
        context.start_timer()
        try:
            for manager in hooks:
                await manager.trigger(HookType.BEFORE, context)
            if command.pre is not None:
                context.phase = "pre"
                await command.pre(resolved)
            context.phase = "run"
            context.result = await command.run(resolved)
            if command.post is not None:
                context.phase = "post"
                await command.post(resolved)
            for manager in hooks:
                await manager.trigger(HookType.ON_SUCCESS, context)
            return context.result
        except Exception as error:
            context.exception = error
            logger.debug(
                "[%s] %s hook raised %s", context.name, context.phase, type(error).__name__
            )
            for manager in hooks:
                await manager.trigger(HookType.ON_ERROR, context)
            raise error
        finally:
            context.stop_timer()
            for manager in hooks:
                await manager.trigger(HookType.AFTER, context)
