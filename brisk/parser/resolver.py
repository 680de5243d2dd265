# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ValueResolver`, which turns a merged flag registry and the tokens left
after command dispatch into typed flag values.

Tokens are scanned left to right:
- `--name value`, `--name=value`, `-s value` and `-s=value` set value flags.
- Boolean flags are set by presence, `--name=<bool>` or `--no-name`. The last
  occurrence wins.
- `-abc` expands to `-a -b -c` when every letter is a boolean short flag.
- `--` ends flag parsing. `-` and numeric literals such as `-5` are positional.
- Any other token starting with `-` must name a known flag.

Each flag then takes its value from the first available source:
command line, environment (`env_var`, `env_vars`, then `<PREFIX>_<NAME>`),
configuration mapping, default. Every literal is coerced by the flag's kind.

The resolver never prompts; missing required flags are errors.
"""
from __future__ import annotations

import os
from typing import Any, Mapping, NoReturn, Sequence

from brisk.exceptions import (
    BundledValueFlagError,
    InvalidValueError,
    MissingRequiredValueError,
    MissingValueError,
    UnknownFlagError,
)
from brisk.logger import logger
from brisk.parser.flag import Flag
from brisk.parser.flag_kind import FlagKind
from brisk.parser.parser_types import ResolvedValues, ValueSource
from brisk.parser.registry import FlagRegistry
from brisk.parser.utils import coerce_value, looks_like_number
from brisk.validators import run_validator


class ValueResolver:
    """
    Resolves flag values with command line > environment > config > default
    precedence.

    Args:
        environ (Mapping[str, str] | None): Environment lookup. Defaults to `os.environ`.
        config (Mapping[str, Any] | None): Configuration values keyed by flag name
            or dest.
        env_prefix (str | None): Application prefix for `<PREFIX>_<NAME>` lookups.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        config: Mapping[str, Any] | None = None,
        env_prefix: str | None = None,
    ) -> None:
        self.environ: Mapping[str, str] = os.environ if environ is None else environ
        self.config: Mapping[str, Any] = config or {}
        self.env_prefix = env_prefix

    def resolve(
        self,
        registry: FlagRegistry,
        tokens: Sequence[str],
        path: Sequence[str] = (),
    ) -> ResolvedValues:
        """
        Parse `tokens` against `registry` and resolve every flag.

        Args:
            registry (FlagRegistry): Merged registry for the matched command path.
            tokens (Sequence[str]): Tokens remaining after command dispatch.
            path (Sequence[str]): Matched command names, attached to errors.

        Returns:
            ResolvedValues: Values and sources by dest, plus unconsumed positionals.

        Raises:
            UnknownFlagError: A flag-like token names no flag.
            MissingValueError: A value flag is the last token.
            InvalidValueError: A literal does not coerce, or fails choices/validator.
            MissingRequiredValueError: A required flag has no source.
        """
        command_line, positionals = self._parse_tokens(registry, list(tokens), path)
        self._consume_positional_flags(registry, command_line, positionals)

        result = ResolvedValues(remaining=positionals)
        for flag in registry:
            literal, source = self._lookup(flag, command_line)
            if source is ValueSource.NONE:
                if flag.required:
                    raise MissingRequiredValueError(flag.name, path)
                value = flag.kind.empty_value
            else:
                value = self._coerce(flag, literal, path)
            result.values[flag.dest] = value
            result.sources[flag.dest] = source
            logger.debug("Flag '--%s' resolved from %s: %r", flag.name, source, value)
        return result

    def _parse_tokens(
        self, registry: FlagRegistry, tokens: list[str], path: Sequence[str]
    ) -> tuple[dict[str, Any], list[str]]:
        command_line: dict[str, Any] = {}
        positionals: list[str] = []
        i = 0
        while i < len(tokens):
            token = tokens[i]
            if token == "--":
                positionals.extend(tokens[i + 1 :])
                break
            if not self._is_flag_token(registry, token):
                positionals.append(token)
                i += 1
                continue

            name_part, has_inline, inline = token.partition("=")
            if name_part.startswith("--"):
                flag = registry.get(name_part[2:])
                if flag is None:
                    negated = self._negated_boolean(registry, name_part[2:])
                    if negated is not None and not has_inline:
                        command_line[negated.name] = False
                        i += 1
                        continue
                    self._raise_unknown_flag(registry, token, name_part, path)
            else:
                letters = name_part[1:]
                if len(letters) > 1:
                    if has_inline:
                        self._raise_unknown_flag(registry, token, name_part, path)
                    for flag in self._expand_posix_bundling(registry, token, path):
                        command_line[flag.name] = True
                    i += 1
                    continue
                flag = registry.get_short(letters)
                if flag is None:
                    self._raise_unknown_flag(registry, token, name_part, path)
            if flag.kind is FlagKind.BOOLEAN:
                command_line[flag.name] = inline if has_inline else True
                i += 1
                continue
            if has_inline:
                command_line[flag.name] = inline
                i += 1
                continue
            if i + 1 >= len(tokens):
                raise MissingValueError(name_part, path)
            command_line[flag.name] = tokens[i + 1]
            i += 2
        return command_line, positionals

    def _is_flag_token(self, registry: FlagRegistry, token: str) -> bool:
        if not token.startswith("-") or token == "-":
            return False
        if looks_like_number(token):
            return registry.get_short(token[1:]) is not None
        return True

    def _negated_boolean(self, registry: FlagRegistry, name: str) -> Flag | None:
        if not name.startswith("no-"):
            return None
        flag = registry.get(name[3:])
        if flag is not None and flag.kind is FlagKind.BOOLEAN:
            return flag
        return None

    def _expand_posix_bundling(
        self, registry: FlagRegistry, token: str, path: Sequence[str]
    ) -> list[Flag]:
        """Expand POSIX-style bundled boolean short flags, e.g. `-abc`."""
        expanded = []
        for char in token[1:]:
            flag = registry.get_short(char)
            if flag is None:
                self._raise_unknown_flag(registry, token, f"-{char}", path)
            if flag.kind is not FlagKind.BOOLEAN:
                raise BundledValueFlagError(f"-{char}", token, path)
            expanded.append(flag)
        return expanded

    def _raise_unknown_flag(
        self, registry: FlagRegistry, token: str, name_part: str, path: Sequence[str]
    ) -> NoReturn:
        suggestions = [
            text for text in registry.flag_texts() if text.startswith(name_part)
        ]
        if not suggestions and name_part.startswith("--") and len(name_part) > 3:
            suggestions = [
                text
                for text in registry.flag_texts()
                if text.startswith(name_part[:4])
            ]
        raise UnknownFlagError(token, suggestions, path)

    def _consume_positional_flags(
        self,
        registry: FlagRegistry,
        command_line: dict[str, Any],
        positionals: list[str],
    ) -> None:
        """Fill positional-capable flags not set by name from leftover tokens."""
        for flag in registry:
            if not positionals:
                return
            if flag.positional and flag.name not in command_line:
                command_line[flag.name] = positionals.pop(0)

    def _lookup(
        self, flag: Flag, command_line: Mapping[str, Any]
    ) -> tuple[Any, ValueSource]:
        if flag.name in command_line:
            return command_line[flag.name], ValueSource.CLI
        for env_name in flag.env_names(self.env_prefix):
            value = self.environ.get(env_name)
            if value is not None and value != "":
                return value, ValueSource.ENV
        for key in dict.fromkeys((flag.name, flag.dest)):
            if key in self.config and self.config[key] is not None:
                return self.config[key], ValueSource.CONFIG
        if flag.has_default:
            return flag.default, ValueSource.DEFAULT
        return None, ValueSource.NONE

    def _coerce(self, flag: Flag, literal: Any, path: Sequence[str]) -> Any:
        try:
            value = coerce_value(literal, flag.kind)
        except ValueError as error:
            raise InvalidValueError(
                flag.name, literal, str(flag.kind), str(error), path
            ) from error
        if flag.choices is not None and value not in flag.choices:
            choices = ", ".join(str(choice) for choice in flag.choices)
            raise InvalidValueError(
                flag.name, literal, str(flag.kind), f"choose from {choices}", path
            )
        reason = run_validator(flag.validator, value)
        if reason:
            raise InvalidValueError(flag.name, literal, str(flag.kind), reason, path)
        return value
