# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains value coercion utilities for Brisk flag parsing.

Every `FlagKind` maps to exactly one coercer. Coercers accept the raw literal
(a command-line or environment string, or an already typed configuration value)
and either return the typed value or raise `ValueError`. They never truncate or
guess: `"3.5"` is not an integer and `"maybe"` is not a boolean.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_duration: Convert a string such as `1h30m` to a `timedelta`.
- coerce_value: Dispatch to the coercer for a `FlagKind`.
- looks_like_number: Whether a token is a negative or positive number literal.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Any, Callable

from dateutil import parser as date_parser

from brisk.parser.flag_kind import FlagKind

TRUE_WORDS = frozenset({"true", "t", "1", "yes", "y", "on"})
FALSE_WORDS = frozenset({"false", "f", "0", "no", "n", "off"})

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_NUMBER = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?$")


def coerce_bool(value: Any) -> bool:
    """
    Convert a string to a boolean.

    Accepts 'true', 'yes', '1', 'on' and their negative counterparts,
    case-insensitively.

    Args:
        value (Any): The input string or boolean.

    Returns:
        bool: Parsed boolean result.

    Raises:
        ValueError: If the text is not a recognized boolean word.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if not isinstance(value, str):
        raise ValueError(f"{value!r} is not a boolean")
    normalized = value.strip().lower()
    if normalized in TRUE_WORDS:
        return True
    if normalized in FALSE_WORDS:
        return False
    raise ValueError(f"'{value}' is not one of true/false, yes/no, on/off, 1/0")


def coerce_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("booleans are not integers")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value!r} has a fractional part")
        return int(value)
    return int(str(value).strip(), 10)


def coerce_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("booleans are not numbers")
    if isinstance(value, (int, float)):
        return float(value)
    return float(str(value).strip())


def coerce_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        raise ValueError(f"{type(value).__name__} is not a string")
    return str(value)


def coerce_duration(value: Any) -> timedelta:
    """
    Convert a duration literal to a `timedelta`.

    Accepts sequences of number/unit pairs (`1h30m`, `1.5s`, `250ms`) with an
    optional sign, the bare literal `0`, and plain numbers from configuration
    files, which are read as seconds.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError("booleans are not durations")
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)
    text = str(value).strip()
    sign = 1
    if text[:1] in ("-", "+"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError("empty duration")
    seconds = 0.0
    position = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()
    if position != len(text):
        raise ValueError(f"'{value}' is not a duration like 1h30m, 90s or 250ms")
    return timedelta(seconds=seconds * sign)


def coerce_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return date_parser.parse(str(value))
    except (ValueError, OverflowError) as error:
        raise ValueError(str(error)) from error


COERCERS: dict[FlagKind, Callable[[Any], Any]] = {
    FlagKind.STRING: coerce_string,
    FlagKind.INTEGER: coerce_integer,
    FlagKind.FLOAT: coerce_float,
    FlagKind.BOOLEAN: coerce_bool,
    FlagKind.DURATION: coerce_duration,
    FlagKind.DATETIME: coerce_datetime,
}


def coerce_value(value: Any, kind: FlagKind) -> Any:
    """
    Convert a literal to the Python value of `kind`.

    Args:
        value (Any): Raw literal from the command line, environment or config.
        kind (FlagKind): Target kind.

    Returns:
        Any: The coerced value.

    Raises:
        ValueError: If the literal is not a valid value of `kind`.
    """
    if value is None:
        raise ValueError("no value")
    return COERCERS[kind](value)


def looks_like_number(token: str) -> bool:
    """Return True for numeric literals such as `-5`, `-0.25` or `1e3`."""
    return bool(_NUMBER.match(token))
