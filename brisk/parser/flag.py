# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Flag` dataclass describing one named, typed configuration value.

A flag can be set on the command line (`--name value`, `--name=value`, `-s value`),
from environment variables, from a configuration mapping, or by its default.
The `dest` attribute names the key the resolved value is stored under in the
`ResolvedContext`; hooks read it from there.

Key Attributes:
- `name`: Long form, used as `--name`
- `short`: Optional single-character form, used as `-s`
- `kind`: `FlagKind` deciding how literals are coerced
- `default`: Fallback literal, coerced like any other source
- `env_var` / `env_vars`: Environment variables consulted in order
- `required`: Resolution fails when no source provides a value
- `positional`: May also be filled by a leftover positional token
- `dest`: Key under which the resolved value is stored
- `choices`: Allowed values, if restricted
- `validator`: Predicate-with-reason applied to the resolved value
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from brisk.exceptions import InvalidFlagError
from brisk.parser.flag_kind import FlagKind
from brisk.parser.utils import coerce_value
from brisk.utils import env_key
from brisk.validators import Validator


@dataclass
class Flag:
    """
    Represents a command-line flag.

    Attributes:
        name (str): Long name, without leading dashes.
        short (str | None): Single-character short form, without the dash.
        kind (FlagKind): Value kind; strings are accepted and coerced to FlagKind.
        default (Any): Literal used when no other source applies.
        env_var (str | None): Primary environment variable.
        env_vars (tuple[str, ...]): Further environment variables, tried in order.
        required (bool): True if some source must provide a value.
        positional (bool): True if a leftover positional token may fill it.
        dest (str): Key in the resolved values. Defaults to `name` with `_`.
        help (str): Help text for the flag.
        choices (Sequence[Any] | None): Allowed values after coercion.
        validator (Validator | None): Extra check on the resolved value.
        hidden (bool): Omit from help output.
    """

    name: str
    short: str | None = None
    kind: FlagKind = FlagKind.STRING
    default: Any = None
    env_var: str | None = None
    env_vars: Sequence[str] = field(default_factory=tuple)
    required: bool = False
    positional: bool = False
    dest: str = ""
    help: str = ""
    choices: Sequence[Any] | None = None
    validator: Validator | None = None
    hidden: bool = False

    def __post_init__(self) -> None:
        try:
            self.kind = FlagKind(self.kind)
        except ValueError as error:
            raise InvalidFlagError(str(error)) from error
        self.env_vars = tuple(self.env_vars)
        self._validate_name()
        self._validate_short()
        if not self.dest:
            self.dest = self.name.replace("-", "_")
        if not self.dest.isidentifier():
            raise InvalidFlagError(
                f"dest '{self.dest}' for flag '{self.name}' must be a valid identifier"
            )
        if self.required and self.has_default:
            raise InvalidFlagError(
                f"Flag '{self.name}' cannot be required and have a default value"
            )
        if self.kind is FlagKind.BOOLEAN and (self.required or self.positional):
            raise InvalidFlagError(
                f"Boolean flag '{self.name}' cannot be required or positional"
            )
        if self.validator is not None and not callable(self.validator):
            raise InvalidFlagError(f"validator for flag '{self.name}' must be callable")
        if self.choices is not None:
            self.choices = tuple(self._coerce_literal(choice) for choice in self.choices)
        if self.has_default:
            self._coerce_literal(self.default)

    def _validate_name(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidFlagError("Flag name must be a non-empty string")
        if self.name.startswith("-"):
            raise InvalidFlagError(
                f"Flag name '{self.name}' must not start with '-', use the bare name"
            )
        if any(char.isspace() or char == "=" for char in self.name):
            raise InvalidFlagError(
                f"Flag name '{self.name}' must not contain whitespace or '='"
            )
        if self.kind is FlagKind.BOOLEAN and self.name.startswith("no-"):
            raise InvalidFlagError(
                f"Boolean flag '{self.name}' must not start with 'no-', "
                "the negated form is generated automatically"
            )

    def _validate_short(self) -> None:
        if self.short is None or self.short == "":
            self.short = None
            return
        if len(self.short) != 1 or self.short in "-=" or self.short.isspace():
            raise InvalidFlagError(
                f"Short form '{self.short}' for flag '{self.name}' must be a single character"
            )

    def _coerce_literal(self, literal: Any) -> Any:
        try:
            return coerce_value(literal, self.kind)
        except ValueError as error:
            raise InvalidFlagError(
                f"Literal {literal!r} for flag '{self.name}' is not a valid {self.kind}: {error}"
            ) from error

    @property
    def has_default(self) -> bool:
        return self.default is not None and self.default != ""

    @property
    def long_flag(self) -> str:
        return f"--{self.name}"

    @property
    def short_flag(self) -> str | None:
        return f"-{self.short}" if self.short else None

    def env_names(self, prefix: str | None = None) -> list[str]:
        """Environment variables consulted for this flag, highest priority first."""
        names: list[str] = []
        if self.env_var:
            names.append(self.env_var)
        names.extend(self.env_vars)
        if prefix:
            names.append(env_key(prefix, self.name))
        return list(dict.fromkeys(names))

    def get_flag_text(self) -> str:
        """Flag forms for help output, e.g. `-p, --port <integer>`."""
        forms = [self.long_flag]
        if self.short_flag:
            forms.insert(0, self.short_flag)
        text = ", ".join(forms)
        if self.kind is FlagKind.BOOLEAN:
            return f"{text}, --no-{self.name}"
        if self.choices:
            return f"{text} {{{','.join(str(choice) for choice in self.choices)}}}"
        return f"{text} <{self.kind}>"

    def __str__(self) -> str:
        return (
            f"Flag(name={self.name!r}, short={self.short!r}, kind={self.kind}, "
            f"required={self.required}, dest={self.dest!r})"
        )
