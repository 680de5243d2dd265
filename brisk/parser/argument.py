# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Argument` dataclass, a positional input declared on a command.

Arguments are filled in declaration order from positional tokens, or by name
with `name=value` tokens. A required argument that is still missing is asked for
interactively through the application's prompter.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from brisk.exceptions import InvalidArgumentError
from brisk.utils import title_label


@dataclass
class Argument:
    """
    Represents a positional command argument.

    Attributes:
        name (str): Identifier used for `name=value` tokens and context lookups.
        prompt (str): Label shown when the value is asked for interactively.
        required (bool): True if a value must be supplied or prompted for.
        default (Any): Value used when an optional argument is absent.
        help (str): Help text for the argument.
    """

    name: str
    prompt: str = ""
    required: bool = False
    default: Any = None
    help: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidArgumentError("Argument name must be a non-empty string")
        if self.name.startswith("-") or "=" in self.name or " " in self.name:
            raise InvalidArgumentError(
                f"Argument name '{self.name}' must not start with '-' "
                "or contain '=' or spaces"
            )
        if self.required and self.default is not None:
            raise InvalidArgumentError(
                f"Argument '{self.name}' cannot be required and have a default value"
            )

    @property
    def key(self) -> str:
        """Normalized name used to match `name=value` tokens."""
        return self.name.replace("-", "_")

    @property
    def label(self) -> str:
        """Prompt label, derived from the name when no prompt is set."""
        return self.prompt or title_label(self.name)

    def get_positional_text(self) -> str:
        """Usage text for the argument: `<name>` or `[name]`."""
        if self.required:
            return f"<{self.name}>"
        return f"[{self.name}]"
