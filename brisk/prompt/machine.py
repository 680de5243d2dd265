# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Prompt state machines.

Every prompt is an explicit transition system:

    IDLE → RENDERING → AWAITING_INPUT → VALIDATING → RENDERING
                                                   → ACCEPTED
                                      → CANCELLED

Machines perform no I/O. A driver calls `start()`, then alternates `render()`
(which returns prompt_toolkit style/text fragments) and `feed(event)` until
`done` is true. `result` holds the accepted value; `cancel_reason` tells a user
cancel apart from a closed or failing input stream.

Validation retries are unbounded. Only a cancel or end-of-input ends a prompt
without a value.

Machines:
- TextMachine: free text with default, validator and Tab completion.
- ConfirmMachine: yes/no with default.
- SelectMachine: one item from a list.
- MultiSelectMachine: any number of items, kept in toggle order.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Any

from prompt_toolkit.formatted_text import StyleAndTextTuples

from brisk.logger import logger
from brisk.parser.utils import FALSE_WORDS, TRUE_WORDS, coerce_bool
from brisk.prompt.completion import complete_buffer
from brisk.prompt.events import EventKind, PromptEvent
from brisk.prompt.spec import PromptKind, PromptSpec, SelectOption
from brisk.signals import CancelReason
from brisk.validators import run_validator

REQUIRED_MESSAGE = "A value is required."
CONFIRM_MESSAGE = "Please enter 'y' or 'n'."
QUICK_SELECT_LIMIT = 9


class PromptState(Enum):
    IDLE = "idle"
    RENDERING = "rendering"
    AWAITING_INPUT = "awaiting_input"
    VALIDATING = "validating"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


class PromptMachine:
    """
    Base class holding the state, the buffer and the terminal transitions.

    Subclasses implement `_handle(event)` and `_frame()`.
    """

    def __init__(self, spec: PromptSpec) -> None:
        self.spec = spec
        self.state = PromptState.IDLE
        self.buffer = ""
        self.message: str | None = None
        self.result: Any = None
        self.cancel_reason: CancelReason | None = None
        self.candidates: tuple[str, ...] = ()

    @property
    def done(self) -> bool:
        return self.state in (PromptState.ACCEPTED, PromptState.CANCELLED)

    @property
    def accepted(self) -> bool:
        return self.state is PromptState.ACCEPTED

    def start(self) -> PromptMachine:
        if self.state is not PromptState.IDLE:
            raise RuntimeError(f"Prompt already started (state: {self.state})")
        self.state = PromptState.RENDERING
        return self

    def render(self) -> StyleAndTextTuples:
        """Return the current frame; a pending redraw moves on to AWAITING_INPUT."""
        if self.state is PromptState.IDLE:
            raise RuntimeError("start() must be called before render()")
        if self.state is PromptState.RENDERING:
            self.state = PromptState.AWAITING_INPUT
        return self._frame()

    def feed(self, event: PromptEvent) -> PromptState:
        """Apply one input event and return the new state."""
        if self.state is PromptState.IDLE:
            raise RuntimeError("start() must be called before feed()")
        if self.done:
            raise RuntimeError(f"Prompt is finished (state: {self.state})")
        if event.kind is EventKind.CANCEL:
            self._cancel(CancelReason.USER)
        elif event.kind is EventKind.EOF:
            self._cancel(CancelReason.END_OF_INPUT)
        elif event.kind is EventKind.ERROR:
            self._cancel(CancelReason.READ_ERROR)
        else:
            self._handle(event)
            if not self.done:
                self.state = PromptState.RENDERING
        return self.state

    def _handle(self, event: PromptEvent) -> None:
        raise NotImplementedError

    def _frame(self) -> StyleAndTextTuples:
        raise NotImplementedError

    def _accept(self, value: Any) -> None:
        self.result = value
        self.message = None
        self.state = PromptState.ACCEPTED
        logger.debug("Prompt '%s' accepted: %r", self.spec.label, value)

    def _reject(self, reason: str) -> None:
        self.message = reason
        self.state = PromptState.RENDERING
        logger.debug("Prompt '%s' rejected input: %s", self.spec.label, reason)

    def _cancel(self, reason: CancelReason) -> None:
        self.cancel_reason = reason
        self.state = PromptState.CANCELLED
        logger.debug("Prompt '%s' cancelled (%s)", self.spec.label, reason)

    def _edit_buffer(self, event: PromptEvent) -> bool:
        if event.kind is EventKind.CHAR and event.text:
            self.buffer += event.text
            return True
        if event.kind is EventKind.BACKSPACE:
            self.buffer = self.buffer[:-1]
            return True
        return False

    def _message_fragments(self) -> StyleAndTextTuples:
        if not self.message:
            return []
        return [("class:prompt.error", f"✗ {self.message}"), ("", "\n")]


class TextMachine(PromptMachine):
    """Free text entry."""

    def _handle(self, event: PromptEvent) -> None:
        if self._edit_buffer(event):
            return
        if event.kind is EventKind.COMPLETE:
            if event.text is not None:
                self.buffer = event.text
            completion = complete_buffer(self.buffer, self.spec.completion_source)
            self.buffer = completion.buffer
            self.candidates = completion.candidates
        elif event.kind is EventKind.SUBMIT:
            text = self.buffer if event.text is None else event.text
            self.buffer = ""
            self.candidates = ()
            self.state = PromptState.VALIDATING
            self._submit(text)

    def _submit(self, text: str) -> None:
        if text == "":
            if self.spec.default is not None:
                self._accept(self.spec.default)
            elif self.spec.allow_empty:
                self._accept("")
            else:
                self._reject(REQUIRED_MESSAGE)
            return
        reason = run_validator(self.spec.validator, text)
        if reason:
            self._reject(reason)
        else:
            self._accept(text)

    def _hint(self) -> str:
        if self.spec.default is not None and self.spec.default != "":
            return f" [{self.spec.default}]"
        return ""

    def _frame(self) -> StyleAndTextTuples:
        fragments = self._message_fragments()
        fragments.append(("class:prompt.label", self.spec.label))
        hint = self._hint()
        if hint:
            fragments.append(("class:prompt.default", hint))
        fragments.append(("", ": "))
        if self.buffer:
            fragments.append(("class:prompt.input", self.buffer))
        if self.candidates:
            fragments.append(("", "\n"))
            fragments.append(("class:prompt.candidate", "  ".join(self.candidates)))
        return fragments


class ConfirmMachine(TextMachine):
    """Yes/no question. The result is a bool."""

    def __init__(self, spec: PromptSpec) -> None:
        super().__init__(spec)
        self.default: bool | None = None
        if spec.default is not None:
            self.default = coerce_bool(spec.default)

    def _handle(self, event: PromptEvent) -> None:
        if event.kind is EventKind.COMPLETE:
            return
        super()._handle(event)

    def _submit(self, text: str) -> None:
        answer = text.strip().lower()
        if answer == "" and self.default is not None:
            self._accept(self.default)
        elif answer in TRUE_WORDS - {"1", "t", "on"}:
            self._accept(True)
        elif answer in FALSE_WORDS - {"0", "f", "off"}:
            self._accept(False)
        else:
            self._reject(CONFIRM_MESSAGE)

    def _hint(self) -> str:
        if self.default is True:
            return " [Y/n]"
        if self.default is False:
            return " [y/N]"
        return " [y/n]"


class SelectMachine(PromptMachine):
    """Single choice from `spec.items`, navigated with wraparound."""

    def __init__(self, spec: PromptSpec) -> None:
        super().__init__(spec)
        self.options: list[SelectOption] = spec.options
        self.index = self._initial_index()

    def _initial_index(self) -> int:
        if self.spec.default is None:
            return 0
        found = self._find(str(self.spec.default), allow_prefix=False)
        return 0 if found is None else found

    def _find(self, text: str, allow_prefix: bool = True) -> int | None:
        """Resolve a typed answer: label/value, 1-based number, or unique prefix."""
        answer = text.strip()
        for position, option in enumerate(self.options):
            if option.matches(answer):
                return position
        if answer.isdecimal():
            number = int(answer)
            if 1 <= number <= len(self.options):
                return number - 1
        if allow_prefix and answer:
            lowered = answer.lower()
            hits = [
                position
                for position, option in enumerate(self.options)
                if option.label.lower().startswith(lowered)
            ]
            if len(hits) == 1:
                return hits[0]
        return None

    def _navigate(self, event: PromptEvent) -> bool:
        count = len(self.options)
        if event.kind is EventKind.UP:
            self.index = (self.index - 1) % count
        elif event.kind is EventKind.DOWN:
            self.index = (self.index + 1) % count
        elif event.kind is EventKind.HOME:
            self.index = 0
        elif event.kind is EventKind.END:
            self.index = count - 1
        else:
            return False
        return True

    def _quick_index(self, event: PromptEvent) -> int | None:
        """Index chosen by a digit key or a JUMP event, if valid."""
        if event.kind is EventKind.JUMP and event.index is not None:
            index = event.index
        elif event.kind is EventKind.CHAR and event.text and event.text.isdecimal():
            index = int(event.text) - 1
        else:
            return None
        limit = min(len(self.options), QUICK_SELECT_LIMIT)
        if event.kind is EventKind.JUMP:
            limit = len(self.options)
        if 0 <= index < limit:
            return index
        return None

    def _handle(self, event: PromptEvent) -> None:
        if self._navigate(event):
            self.message = None
            return
        quick = self._quick_index(event)
        if quick is not None:
            self.index = quick
            self._accept(self.options[quick].value)
            return
        if event.kind is EventKind.SUBMIT:
            self.state = PromptState.VALIDATING
            if event.text is None or event.text.strip() == "":
                self._accept(self.options[self.index].value)
                return
            found = self._find(event.text)
            if found is None:
                self._reject(
                    f"Invalid selection '{event.text.strip()}'. "
                    f"Enter a number between 1 and {len(self.options)}."
                )
                return
            self.index = found
            self._accept(self.options[found].value)

    @property
    def selected_option(self) -> SelectOption:
        return self.options[self.index]

    def _marker(self, position: int) -> str:
        return ""

    def _footer(self) -> str:
        return "↑/↓ move, enter select, 1-9 quick select, esc cancel"

    def _frame(self) -> StyleAndTextTuples:
        fragments: StyleAndTextTuples = [
            ("class:prompt.label", self.spec.label),
            ("", "\n"),
        ]
        for position, option in enumerate(self.options):
            current = position == self.index
            pointer = "❯ " if current else "  "
            style = "class:prompt.highlight" if current else "class:prompt.item"
            fragments.append(("class:prompt.pointer", pointer))
            fragments.append((style, f"{position + 1}. {self._marker(position)}"))
            fragments.append((style, option.label))
            if option.description:
                fragments.append(("class:prompt.hint", f"  {option.description}"))
            fragments.append(("", "\n"))
        fragments.extend(self._message_fragments())
        fragments.append(("class:prompt.hint", self._footer()))
        return fragments


class MultiSelectMachine(SelectMachine):
    """Any number of choices; the result keeps the order items were toggled in."""

    def __init__(self, spec: PromptSpec) -> None:
        super().__init__(spec)
        self.selected: list[int] = self._initial_selection()

    def _initial_index(self) -> int:
        return 0

    def _initial_selection(self) -> list[int]:
        default = self.spec.default
        if default is None:
            return []
        if isinstance(default, (str, int)):
            default = [default]
        selection: list[int] = []
        for item in default:
            found = self._find(str(item), allow_prefix=False)
            if found is not None and found not in selection:
                selection.append(found)
        return selection

    def toggle(self, index: int) -> None:
        if index in self.selected:
            self.selected.remove(index)
        else:
            self.selected.append(index)

    def _handle(self, event: PromptEvent) -> None:
        if self._navigate(event):
            return
        quick = self._quick_index(event)
        if quick is not None:
            self.index = quick
            self.toggle(quick)
            self.message = None
            return
        if event.kind is EventKind.TOGGLE or (
            event.kind is EventKind.CHAR and event.text == " "
        ):
            self.toggle(self.index)
            self.message = None
            return
        if event.kind is EventKind.SUBMIT:
            self.state = PromptState.VALIDATING
            answer = "" if event.text is None else event.text.strip()
            if answer == "" or answer.lower() == "done":
                self._submit()
            else:
                self._toggle_line(answer)

    def _toggle_line(self, answer: str) -> None:
        """Line input: toggle every listed number or label."""
        parts = [part for part in re.split(r"[,\s]+", answer) if part]
        indexes = []
        for part in parts:
            found = self._find(part)
            if found is None:
                self._reject(
                    f"Invalid selection '{part}'. "
                    f"Enter numbers between 1 and {len(self.options)}, or 'done'."
                )
                return
            indexes.append(found)
        for index in indexes:
            self.toggle(index)
        self.message = None

    def _submit(self) -> None:
        if len(self.selected) < self.spec.min_selections:
            noun = "item" if self.spec.min_selections == 1 else "items"
            self._reject(f"Select at least {self.spec.min_selections} {noun}.")
            return
        self._accept([self.options[index].value for index in self.selected])

    @property
    def selected_options(self) -> list[SelectOption]:
        return [self.options[index] for index in self.selected]

    def _marker(self, position: int) -> str:
        return "[x] " if position in self.selected else "[ ] "

    def _footer(self) -> str:
        return "↑/↓ move, space toggle, enter confirm, type numbers then 'done'"


def build_machine(spec: PromptSpec) -> PromptMachine:
    """Return the state machine for `spec.kind`."""
    machines: dict[PromptKind, type[PromptMachine]] = {
        PromptKind.TEXT: TextMachine,
        PromptKind.CONFIRM: ConfirmMachine,
        PromptKind.SELECT: SelectMachine,
        PromptKind.MULTISELECT: MultiSelectMachine,
    }
    return machines[spec.kind](spec)
