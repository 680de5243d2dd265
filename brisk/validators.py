# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Input validators for Brisk prompts and flags.

A validator is a predicate-with-reason: it receives a candidate value and returns
`None` (or `True`) when the value is acceptable, or a reason string (or `False`)
when it is not. The same validators can be attached to a `Flag` or passed to a
prompt through `PromptSpec.validator`.

Included Validators:
- not_empty: Rejects blank text.
- contains: Requires a substring (e.g. "@" for e-mail addresses).
- matches: Requires a regular expression match.
- int_range: Requires an integer within bounds.
- one_of: Requires one of a fixed set of words (case-insensitive).

`run_validator` is the single place validators are invoked. A validator that
raises is treated as a rejection with a generic reason; the error is logged.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Sequence

from brisk.logger import logger

Validator = Callable[[Any], "str | bool | None"]

GENERIC_REASON = "Invalid input."


def run_validator(validator: Validator | None, value: Any) -> str | None:
    """Apply `validator` to `value` and return the rejection reason, if any."""
    if validator is None:
        return None
    try:
        outcome = validator(value)
    except Exception as error:
        logger.debug(
            "Validator %s raised %s for %r: %s",
            getattr(validator, "__name__", validator),
            type(error).__name__,
            value,
            error,
        )
        return GENERIC_REASON
    if outcome is None or outcome is True:
        return None
    if outcome is False:
        return GENERIC_REASON
    return str(outcome) or GENERIC_REASON


def not_empty(message: str = "A value is required.") -> Validator:
    """Validator for non-blank text."""

    def validate(text: Any) -> str | None:
        if not str(text).strip():
            return message
        return None

    return validate


def contains(fragment: str, message: str | None = None) -> Validator:
    """Validator requiring `fragment` to appear in the text."""

    def validate(text: Any) -> str | None:
        if fragment not in str(text):
            return message or f"Value must contain '{fragment}'."
        return None

    return validate


def matches(pattern: str, message: str | None = None) -> Validator:
    """Validator requiring the whole text to match `pattern`."""
    compiled = re.compile(pattern)

    def validate(text: Any) -> str | None:
        if not compiled.fullmatch(str(text)):
            return message or f"Value must match {pattern}."
        return None

    return validate


def int_range(minimum: int, maximum: int) -> Validator:
    """Validator for integer ranges."""

    def validate(value: Any) -> str | None:
        try:
            number = int(value)
        except (TypeError, ValueError):
            return f"Invalid input. Enter a number between {minimum} and {maximum}."
        if not minimum <= number <= maximum:
            return f"Invalid input. Enter a number between {minimum} and {maximum}."
        return None

    return validate


def one_of(words: Sequence[str], message: str | None = None) -> Validator:
    """Validator for specific word inputs."""
    allowed = {word.upper() for word in words}

    def validate(text: Any) -> str | None:
        if str(text).strip().upper() not in allowed:
            return message or f"Invalid input. Choices: {{{', '.join(words)}}}."
        return None

    return validate
