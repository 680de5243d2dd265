# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""debug.py"""
from brisk.context import ExecutionContext
from brisk.hook_manager import HookManager, HookType
from brisk.logger import logger


def log_before(context: ExecutionContext):
    """Log the start of a command."""
    resolved = context.context
    logger.info(
        "[%s] Starting -> flags=%s args=%s",
        context.name,
        dict(resolved.flags),
        dict(resolved.args),
    )


def log_success(context: ExecutionContext):
    """Log the successful completion of a command."""
    result_str = repr(context.result)
    if len(result_str) > 100:
        result_str = f"{result_str[:100]} ..."
    logger.debug("[%s] Success -> Result: %s", context.name, result_str)


def log_after(context: ExecutionContext):
    """Log the completion of a command, regardless of success or failure."""
    logger.debug("[%s] Finished in %.3fs", context.name, context.duration or 0.0)


def log_error(context: ExecutionContext):
    """Log an error raised by one of the command's hooks."""
    logger.error(
        "[%s] Error in %s (%s): %s",
        context.name,
        context.phase,
        type(context.exception).__name__,
        context.exception,
        exc_info=context.exception,
    )


def register_debug_hooks(hooks: HookManager):
    hooks.register(HookType.BEFORE, log_before)
    hooks.register(HookType.AFTER, log_after)
    hooks.register(HookType.ON_SUCCESS, log_success)
    hooks.register(HookType.ON_ERROR, log_error)
