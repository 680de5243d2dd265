# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Type utilities and result containers for Brisk flag resolution.

- `ValueSource`: where a resolved flag value came from.
- `ResolvedValues`: output of `ValueResolver.resolve`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValueSource(Enum):
    """Origin of a resolved flag value, highest precedence first."""

    CLI = "cli"
    ENV = "env"
    CONFIG = "config"
    DEFAULT = "default"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


@dataclass
class ResolvedValues:
    """
    Result of resolving a merged flag registry against input tokens.

    Attributes:
        values (dict[str, Any]): Typed values keyed by flag `dest`.
        sources (dict[str, ValueSource]): Origin of each value, keyed by `dest`.
        remaining (list[str]): Positional tokens left for argument binding.
    """

    values: dict[str, Any] = field(default_factory=dict)
    sources: dict[str, ValueSource] = field(default_factory=dict)
    remaining: list[str] = field(default_factory=list)
