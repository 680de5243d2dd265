# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Prompt specifications: what to ask, not how to ask it.

A `PromptSpec` is built fresh for every prompt call and consumed by exactly one
prompt state machine.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Sequence

from brisk.validators import Validator

CompletionSource = Callable[[str], Sequence[str]]


class PromptKind(Enum):
    """Prompt archetypes."""

    TEXT = "text"
    CONFIRM = "confirm"
    SELECT = "select"
    MULTISELECT = "multiselect"

    @classmethod
    def _missing_(cls, value: object) -> PromptKind:
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "").replace("_", "")
            for member in cls:
                if member.value == normalized:
                    return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


@dataclass
class SelectOption:
    """One selectable item. `value` defaults to the label."""

    label: str
    value: Any = None
    description: str = ""

    def __post_init__(self) -> None:
        if self.value is None:
            self.value = self.label

    def matches(self, text: str) -> bool:
        """Case-insensitive match on label or value."""
        wanted = text.strip().lower()
        return wanted in (self.label.lower(), str(self.value).lower())


@dataclass
class PromptSpec:
    """
    Describes a single prompt.

    Attributes:
        label (str): Question shown to the user.
        kind (PromptKind): Prompt archetype.
        default (Any): Value used on empty input. For select, the default item
            (by value or label); for multiselect, items to preselect.
        validator (Validator | None): Predicate-with-reason for text input.
        items (Sequence[SelectOption]): Options for select and multiselect.
        allow_multiple (bool): Turns a select prompt into a multiselect.
        allow_empty (bool): Accept empty text when there is no default.
        min_selections (int): Minimum selected items for multiselect.
        completion_source (CompletionSource | None): Candidates for Tab completion.
    """

    label: str
    kind: PromptKind = PromptKind.TEXT
    default: Any = None
    validator: Validator | None = None
    items: Sequence[SelectOption | str] = field(default_factory=list)
    allow_multiple: bool = False
    allow_empty: bool = False
    min_selections: int = 0
    completion_source: CompletionSource | None = None

    def __post_init__(self) -> None:
        self.kind = PromptKind(self.kind)
        if self.allow_multiple and self.kind is PromptKind.SELECT:
            self.kind = PromptKind.MULTISELECT
        if self.kind is PromptKind.MULTISELECT:
            self.allow_multiple = True
        self.items = [
            item if isinstance(item, SelectOption) else SelectOption(str(item))
            for item in self.items
        ]
        if self.kind in (PromptKind.SELECT, PromptKind.MULTISELECT) and not self.items:
            raise ValueError(f"{self.kind} prompt '{self.label}' needs at least one item")
        if self.min_selections < 0 or self.min_selections > max(len(self.items), 1):
            raise ValueError(
                f"min_selections must be between 0 and the number of items, "
                f"got {self.min_selections}"
            )
        if self.validator is not None and not callable(self.validator):
            raise TypeError("validator must be callable")
        if self.completion_source is not None and not callable(self.completion_source):
            raise TypeError("completion_source must be callable")

    @property
    def options(self) -> list[SelectOption]:
        return list(self.items)  # type: ignore[arg-type]
