# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Execution context management for Brisk commands.

- `ResolvedContext`: the immutable bundle handed to `pre`, `run` and `post`
  hooks. It carries the matched command path, flag values by destination,
  bound argument values, the I/O handles and a cancellation event. Hooks read
  inputs from it instead of closing over shared variables.
- `ExecutionContext`: per-invocation runtime record of the pipeline, holding
  the phase being run, the result, the exception and timing. Lifecycle observer
  hooks (see `brisk.hook_manager`) receive it.
"""
from __future__ import annotations

import asyncio
import time
from datetime import datetime
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from rich.console import Console

from brisk.console import console
from brisk.formatter import OutputFormat, render_output
from brisk.parser.parser_types import ValueSource


def _empty_mapping() -> MappingProxyType:
    return MappingProxyType({})


class ResolvedContext(BaseModel):
    """
    Immutable per-invocation inputs for command hooks.

    Attributes:
        path (tuple[str, ...]): Names of the matched commands, root first.
        command (Command): The matched command.
        flags (MappingProxyType): Resolved flag values keyed by `dest`.
        sources (MappingProxyType): `ValueSource` of each flag, keyed by `dest`.
        args (MappingProxyType): Bound argument values keyed by argument name.
        positionals (tuple): Bound argument values in declaration order.
        stdin (TextIO | None): Input handle for the invocation.
        stdout (TextIO | None): Output handle for the invocation.
        console (Console): Rich console writing to `stdout`.
        prompter (Prompter | None): Interactive prompter, when one is available.
        cancel_event (asyncio.Event): Set when the invocation is cancelled.
        output_format (OutputFormat): Format used by `output()`.
    """

    path: tuple[str, ...] = ()
    command: Any = None
    flags: MappingProxyType = Field(default_factory=_empty_mapping)
    sources: MappingProxyType = Field(default_factory=_empty_mapping)
    args: MappingProxyType = Field(default_factory=_empty_mapping)
    positionals: tuple[Any, ...] = ()
    stdin: Any = None
    stdout: Any = None
    console: Console = console
    prompter: Any = None
    cancel_event: asyncio.Event = Field(default_factory=asyncio.Event)
    output_format: OutputFormat = OutputFormat.TEXT

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @field_validator("flags", "sources", "args", mode="before")
    @classmethod
    def freeze_mapping(cls, value: Any) -> MappingProxyType:
        if isinstance(value, MappingProxyType):
            return value
        return MappingProxyType(dict(value or {}))

    @property
    def command_name(self) -> str:
        return self.path[-1] if self.path else ""

    def flag(self, dest: str, default: Any = None) -> Any:
        """Resolved value of a flag by destination (`-` is accepted for `_`)."""
        dest = dest.replace("-", "_")
        if dest not in self.flags:
            return default
        return self.flags[dest]

    def arg(self, name: str | int, default: Any = None) -> Any:
        """Bound value of an argument by name or by zero-based position."""
        if isinstance(name, int):
            if 0 <= name < len(self.positionals):
                return self.positionals[name]
            return default
        value = self.args.get(name, self.args.get(name.replace("_", "-")))
        return default if value is None else value

    def source(self, dest: str) -> ValueSource:
        return self.sources.get(dest.replace("-", "_"), ValueSource.NONE)

    def is_set(self, dest: str) -> bool:
        """True when the flag was given on the command line."""
        return self.source(dest) is ValueSource.CLI

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def cancel(self) -> None:
        self.cancel_event.set()

    def output(self, data: Any) -> None:
        """Render structured data in the invocation's output format."""
        render_output(data, self.output_format, self.console)


class ExecutionContext(BaseModel):
    """
    Represents the runtime metadata and state for a single command execution.

    Attributes:
        name (str): Space separated command path.
        context (ResolvedContext): Inputs handed to the hooks.
        phase (str | None): Hook currently running: "pre", "run" or "post".
        result (Any | None): The result of the run hook, if it succeeded.
        exception (BaseException | None): The error raised by any hook.
        start_time / end_time (float | None): High-resolution timing.
        start_wall / end_wall (datetime | None): Wall-clock timestamps.
        extra (dict): Metadata for observers.

    Properties:
        duration (float | None): The execution duration in seconds.
        success (bool): Whether the execution completed without an exception.
        status (str): Returns "OK" if successful, otherwise "ERROR".
    """

    name: str
    context: ResolvedContext
    phase: str | None = None
    result: Any | None = None
    exception: BaseException | None = None

    start_time: float | None = None
    end_time: float | None = None
    start_wall: datetime | None = None
    end_wall: datetime | None = None

    extra: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def start_timer(self):
        self.start_wall = datetime.now()
        self.start_time = time.perf_counter()

    def stop_timer(self):
        self.end_time = time.perf_counter()
        self.end_wall = datetime.now()

    @property
    def duration(self) -> float | None:
        if self.start_time is None:
            return None
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time

    @property
    def success(self) -> bool:
        return self.exception is None

    @property
    def status(self) -> str:
        return "OK" if self.success else "ERROR"

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "phase": self.phase,
            "result": self.result,
            "exception": repr(self.exception) if self.exception else None,
            "duration": self.duration,
            "extra": self.extra,
        }

    def to_log_line(self) -> str:
        """Structured flat-line format for logging and metrics."""
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        exception_str = (
            f"{type(self.exception).__name__}: {self.exception}"
            if self.exception
            else "None"
        )
        return (
            f"[{self.name}] status={self.status} phase={self.phase} "
            f"duration={duration_str} result={self.result!r} exception={exception_str}"
        )

    def __str__(self) -> str:
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        result_str = (
            f"Result: {self.result!r}" if self.success else f"Exception: {self.exception}"
        )
        return (
            f"<ExecutionContext '{self.name}' | {self.status} | "
            f"Duration: {duration_str} | {result_str}>"
        )
