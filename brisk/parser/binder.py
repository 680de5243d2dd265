# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentBinder`, which assigns positional tokens to a command's declared
arguments.

Binding order:
1. `name=value` tokens whose name matches a declared argument (`-` and `_` are
   interchangeable) bind by name.
2. Remaining tokens fill the still unbound arguments in declaration order.
3. Tokens left over after every argument is bound are an error.
4. Optional arguments without a token take their default.
5. Required arguments without a token are asked for through the prompter. With
   no prompter the invocation fails instead; the binder never prompts into a
   non-interactive stream.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from brisk.exceptions import (
    InvalidArgumentError,
    MissingArgumentError,
    TooManyArgumentsError,
)
from brisk.logger import logger
from brisk.parser.argument import Argument
from brisk.prompt.spec import PromptKind, PromptSpec

if TYPE_CHECKING:
    from brisk.prompt.prompter import Prompter


def validate_arguments(arguments: Sequence[Argument]) -> None:
    """
    Check a declaration list for duplicate names and required-after-optional order.

    Raises:
        InvalidArgumentError: If the declarations cannot be bound unambiguously.
    """
    seen: set[str] = set()
    optional_seen: str | None = None
    for argument in arguments:
        if argument.key in seen:
            raise InvalidArgumentError(f"Argument '{argument.name}' is declared twice")
        seen.add(argument.key)
        if not argument.required:
            optional_seen = optional_seen or argument.name
        elif optional_seen:
            raise InvalidArgumentError(
                f"Required argument '{argument.name}' cannot follow "
                f"optional argument '{optional_seen}'"
            )


class ArgumentBinder:
    """
    Binds positional tokens to `Argument` declarations.

    Args:
        prompter (Prompter | None): Used for missing required arguments.
    """

    def __init__(self, prompter: Prompter | None = None) -> None:
        self.prompter = prompter

    def _split_named(
        self, arguments: Sequence[Argument], tokens: Sequence[str]
    ) -> tuple[dict[str, str], list[str]]:
        by_key = {argument.key: argument for argument in arguments}
        named: dict[str, str] = {}
        positional: list[str] = []
        for token in tokens:
            key, has_value, value = token.partition("=")
            if has_value and not key.startswith("-"):
                argument = by_key.get(key.replace("-", "_"))
                if argument is not None:
                    named[argument.name] = value
                    continue
            positional.append(token)
        return named, positional

    async def bind(
        self,
        arguments: Sequence[Argument],
        tokens: Sequence[str],
        path: Sequence[str] = (),
    ) -> dict[str, Any]:
        """
        Bind `tokens` to `arguments`.

        Returns:
            dict[str, Any]: Values by argument name, in declaration order.

        Raises:
            TooManyArgumentsError: More positional tokens than free arguments.
            MissingArgumentError: A required argument is absent and no prompter
                is configured.
            CancelSignal: The user or the input stream cancelled a prompt.
        """
        named, positional = self._split_named(arguments, tokens)
        free = [argument for argument in arguments if argument.name not in named]
        if len(positional) > len(free):
            raise TooManyArgumentsError(positional[len(free) :], path)
        supplied = dict(named)
        for argument, token in zip(free, positional):
            supplied[argument.name] = token

        values: dict[str, Any] = {}
        for argument in arguments:
            if argument.name in supplied:
                values[argument.name] = supplied[argument.name]
            elif not argument.required:
                values[argument.name] = argument.default
            else:
                values[argument.name] = await self._prompt_for(argument, path)
        return values

    async def _prompt_for(self, argument: Argument, path: Sequence[str]) -> Any:
        if self.prompter is None:
            raise MissingArgumentError(argument.name, path)
        logger.debug("Prompting for missing argument '%s'", argument.name)
        spec = PromptSpec(label=argument.label, kind=PromptKind.TEXT)
        return await self.prompter.prompt(spec)
