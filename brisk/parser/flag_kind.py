# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `FlagKind`, the closed set of value types a Brisk flag can carry.

Each member has exactly one coercion routine (see `brisk.parser.utils`), so adding
a kind means adding one enum member and one coercer.

Aliases:
    "str" → "string"
    "int", "int64" → "integer"
    "float64", "number" → "float"
    "bool" → "boolean"
    "time", "date" → "datetime"

Example:
    FlagKind("int") → FlagKind.INTEGER
"""
from __future__ import annotations

from enum import Enum


class FlagKind(Enum):
    """
    Enum for the supported flag value kinds.

    Members:
        STRING: Any text, stored as given.
        INTEGER: Base-10 whole number.
        FLOAT: Decimal number.
        BOOLEAN: Switch set by presence, `--name=<bool>` or `--no-name`.
        DURATION: Time span such as `1h30m`, `250ms` or `1.5s`.
        DATETIME: Timestamp parsed with `dateutil`.
    """

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DURATION = "duration"
    DATETIME = "datetime"

    @classmethod
    def choices(cls) -> list[FlagKind]:
        """Return a list of all flag kind choices."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "str": "string",
            "int": "integer",
            "int64": "integer",
            "float64": "float",
            "number": "float",
            "bool": "boolean",
            "time": "datetime",
            "date": "datetime",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> FlagKind:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def takes_value(self) -> bool:
        """Whether a flag of this kind consumes the token that follows it."""
        return self is not FlagKind.BOOLEAN

    @property
    def empty_value(self) -> bool | None:
        """Value a non-required flag resolves to when no source provides one."""
        return False if self is FlagKind.BOOLEAN else None

    def __str__(self) -> str:
        """Return the string representation of the flag kind."""
        return self.value
