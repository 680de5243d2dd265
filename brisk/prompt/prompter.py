# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Prompt drivers.

A driver owns the input and output handles for the duration of one prompt. It
feeds events into a prompt state machine until the machine accepts or cancels,
then returns the result or raises `CancelSignal`.

- `TerminalPrompter`: prompt_toolkit based. Text and confirm prompts use a
  `PromptSession` with a Tab binding for completion; select prompts run a small
  `Application` with arrow-key navigation.
- `StreamPrompter`: line based, for piped or scripted input. Frames are written
  through a Rich console; each input line is one submission; end of input
  cancels.

`default_prompter()` picks a `TerminalPrompter` when standard input is a TTY and
returns None otherwise, which makes missing required arguments hard errors.
"""
from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Any, Sequence, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import FormattedText, StyleAndTextTuples
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent
from prompt_toolkit.layout import FormattedTextControl, Layout, Window
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.text import Text

from brisk.logger import logger
from brisk.prompt import events
from brisk.prompt.events import PromptEvent
from brisk.prompt.machine import PromptMachine, SelectMachine, build_machine
from brisk.prompt.spec import CompletionSource, PromptKind, PromptSpec, SelectOption
from brisk.signals import CancelReason, CancelSignal
from brisk.themes import get_brisk_theme, get_prompt_style
from brisk.validators import Validator


class Prompter(ABC):
    """
    Interactive input facade used by the argument binder and by command hooks.

    Subclasses implement `drive(machine)`; every convenience method builds a
    `PromptSpec` and runs it through `prompt`.
    """

    async def prompt(self, spec: PromptSpec) -> Any:
        """Run one prompt to completion and return its value."""
        machine = build_machine(spec)
        await self.drive(machine)
        return self._finish(machine)

    @abstractmethod
    async def drive(self, machine: PromptMachine) -> None:
        """Feed input into `machine` until it reaches a terminal state."""

    def _finish(self, machine: PromptMachine) -> Any:
        if machine.accepted:
            return machine.result
        reason = machine.cancel_reason or CancelReason.USER
        raise CancelSignal(f"Prompt '{machine.spec.label}' cancelled ({reason}).", reason)

    async def text(
        self,
        label: str,
        default: str | None = None,
        validator: Validator | None = None,
        completion_source: CompletionSource | None = None,
        allow_empty: bool = False,
    ) -> str:
        return await self.prompt(
            PromptSpec(
                label=label,
                kind=PromptKind.TEXT,
                default=default,
                validator=validator,
                completion_source=completion_source,
                allow_empty=allow_empty,
            )
        )

    async def confirm(self, label: str, default: bool | None = None) -> bool:
        return await self.prompt(
            PromptSpec(label=label, kind=PromptKind.CONFIRM, default=default)
        )

    async def select(
        self,
        label: str,
        items: Sequence[SelectOption | str],
        default: Any = None,
    ) -> Any:
        return await self.prompt(
            PromptSpec(label=label, kind=PromptKind.SELECT, items=items, default=default)
        )

    async def multiselect(
        self,
        label: str,
        items: Sequence[SelectOption | str],
        default: Sequence[Any] | None = None,
        min_selections: int = 0,
    ) -> list[Any]:
        return await self.prompt(
            PromptSpec(
                label=label,
                kind=PromptKind.MULTISELECT,
                items=items,
                default=default,
                min_selections=min_selections,
            )
        )


def fragments_to_text(fragments: StyleAndTextTuples) -> Text:
    """Convert prompt_toolkit fragments to Rich text, mapping `class:` styles."""
    text = Text()
    for fragment in fragments:
        style, string = fragment[0], fragment[1]
        classes = [
            part.removeprefix("class:")
            for part in style.split()
            if part.startswith("class:")
        ]
        text.append(string, style=classes[-1] if classes else None)
    return text


class StreamPrompter(Prompter):
    """
    Line based driver over text streams.

    Args:
        stdin (TextIO): Source of input lines.
        stdout (TextIO | None): Destination for prompt frames.
        console (Console | None): Console to render frames with. Built on
            `stdout` when not given.
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        console: Console | None = None,
    ) -> None:
        self.stdin = stdin or sys.stdin
        self.console = console or Console(
            file=stdout or sys.stdout, theme=get_brisk_theme(), highlight=False
        )
        self._echo_newline = not _is_tty(self.stdin)

    async def drive(self, machine: PromptMachine) -> None:
        machine.start()
        while not machine.done:
            self.console.print(fragments_to_text(machine.render()), end="")
            try:
                line = self.stdin.readline()
            except (OSError, ValueError) as error:
                logger.debug("Prompt input failed: %s", error)
                machine.feed(events.READ_ERROR)
                break
            if line == "":
                self.console.print()
                machine.feed(events.EOF)
                break
            if self._echo_newline:
                self.console.print()
            machine.feed(PromptEvent.submit(line.rstrip("\r\n")))


class TerminalPrompter(Prompter):
    """
    prompt_toolkit driver for interactive terminals.

    Args:
        session (PromptSession | None): Session reused for text and confirm prompts.
        style (Style | None): prompt_toolkit style for the `prompt.*` classes.
    """

    def __init__(
        self,
        session: PromptSession | None = None,
        style: Style | None = None,
    ) -> None:
        self.session: PromptSession = session or PromptSession()
        self.style = style or get_prompt_style()

    async def drive(self, machine: PromptMachine) -> None:
        if isinstance(machine, SelectMachine):
            await self._drive_select(machine)
        else:
            await self._drive_line(machine)

    def _completion_bindings(self, machine: PromptMachine) -> KeyBindings:
        bindings = KeyBindings()

        @bindings.add("tab")
        def _(event: KeyPressEvent) -> None:
            buffer = event.current_buffer
            machine.feed(PromptEvent.complete(buffer.text))
            buffer.text = machine.buffer
            buffer.cursor_position = len(machine.buffer)

        return bindings

    def _candidates_toolbar(self, machine: PromptMachine):
        def toolbar() -> StyleAndTextTuples:
            if not machine.candidates:
                return []
            return [("class:prompt.candidate", "  ".join(machine.candidates))]

        return toolbar

    async def _drive_line(self, machine: PromptMachine) -> None:
        machine.start()
        has_completion = machine.spec.completion_source is not None
        while not machine.done:
            frame = machine.render()
            try:
                answer = await self.session.prompt_async(
                    FormattedText(frame),
                    style=self.style,
                    key_bindings=self._completion_bindings(machine)
                    if has_completion
                    else None,
                    bottom_toolbar=self._candidates_toolbar(machine)
                    if has_completion
                    else None,
                )
            except KeyboardInterrupt:
                machine.feed(events.CANCEL)
            except EOFError:
                machine.feed(events.EOF)
            except OSError as error:
                logger.debug("Terminal input failed: %s", error)
                machine.feed(events.READ_ERROR)
            else:
                machine.feed(PromptEvent.submit(answer))

    async def _drive_select(self, machine: SelectMachine) -> None:
        machine.start()
        bindings = KeyBindings()

        def send(event: KeyPressEvent, prompt_event: PromptEvent) -> None:
            if machine.done:
                return
            machine.feed(prompt_event)
            if machine.done:
                event.app.exit()

        @bindings.add("up")
        def _(event: KeyPressEvent) -> None:
            send(event, events.UP)

        @bindings.add("down")
        def _(event: KeyPressEvent) -> None:
            send(event, events.DOWN)

        @bindings.add("home")
        def _(event: KeyPressEvent) -> None:
            send(event, events.HOME)

        @bindings.add("end")
        def _(event: KeyPressEvent) -> None:
            send(event, events.END)

        @bindings.add("space")
        def _(event: KeyPressEvent) -> None:
            send(event, events.TOGGLE)

        @bindings.add("enter", eager=True)
        def _(event: KeyPressEvent) -> None:
            send(event, PromptEvent.submit())

        @bindings.add("c-c")
        @bindings.add("escape", eager=True)
        def _(event: KeyPressEvent) -> None:
            send(event, events.CANCEL)

        @bindings.add("c-d")
        def _(event: KeyPressEvent) -> None:
            send(event, events.EOF)

        for digit in "123456789":

            @bindings.add(digit)
            def _(event: KeyPressEvent) -> None:
                send(event, PromptEvent.char(event.data))

        application: Application = Application(
            layout=Layout(
                Window(
                    FormattedTextControl(machine.render, focusable=True, show_cursor=False),
                    dont_extend_height=True,
                )
            ),
            key_bindings=bindings,
            style=self.style,
            full_screen=False,
            erase_when_done=True,
        )
        try:
            await application.run_async()
        except (EOFError, KeyboardInterrupt) as error:
            if not machine.done:
                machine.feed(
                    events.EOF if isinstance(error, EOFError) else events.CANCEL
                )
        if not machine.done:
            machine.feed(events.CANCEL)


def _is_tty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def default_prompter(stdin: TextIO | None = None) -> Prompter | None:
    """A terminal prompter when `stdin` is a TTY, otherwise None."""
    if _is_tty(stdin or sys.stdin):
        return TerminalPrompter()
    return None
