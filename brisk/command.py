# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the Command class, a node in a Brisk command tree.

A command has:

- a name and aliases, unique among its siblings
- its own `FlagRegistry` and ordered `Argument` declarations
- optional `pre`, `run` and `post` hooks receiving a `ResolvedContext`
- child commands

A command without a `run` hook is a router: it only dispatches to its children
and must have at least one. Sibling name/alias clashes, cycles and out-of-order
argument declarations are rejected when the tree is built, so dispatch can
assume a valid tree.

Dispatch is a greedy walk: starting at the root, each token that exactly equals
(case-sensitive) a child's name or alias descends one level. The walk stops at
the first token that names no child, or at `--`. The matched path is returned as
an explicit list of commands; nodes keep no reference to their parent.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Iterator, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from brisk.debug import register_debug_hooks
from brisk.exceptions import (
    BriskError,
    CommandAlreadyExistsError,
    InvalidHookError,
)
from brisk.hook_manager import HookManager
from brisk.logger import logger
from brisk.parser.argument import Argument
from brisk.parser.binder import validate_arguments
from brisk.parser.flag import Flag
from brisk.parser.registry import FlagRegistry
from brisk.utils import ensure_async

CommandHook = Callable[..., Any] | Callable[..., Awaitable[Any]]


class Command(BaseModel):
    """
    Represents one command in a Brisk command tree.

    Attributes:
        name (str): Token that selects this command.
        short (str): One-line description for command listings.
        long (str): Full description for the command's help page.
        aliases (list[str]): Alternate tokens that select this command.
        hidden (bool): Omit from help listings.
        pre (CommandHook | None): Runs before `run`; a failure aborts the command.
        run (CommandHook | None): The command body. Absent for routers.
        post (CommandHook | None): Runs after a successful `run`.
        flags (FlagRegistry): Flags owned by this command.
        arguments (list[Argument]): Positional arguments, in binding order.
        children (list[Command]): Subcommands.
        hooks (HookManager): Observers for this command's execution.
        logging_hooks (bool): Register debug logging observers.

    Methods:
        add_command(): Attach a child, enforcing sibling uniqueness.
        add_flag(), add_argument(): Declare inputs.
        resolve(): Walk the tree for a token sequence.
    """

    name: str
    short: str = ""
    long: str = ""
    aliases: list[str] = Field(default_factory=list)
    hidden: bool = False
    pre: CommandHook | None = None
    run: CommandHook | None = None
    post: CommandHook | None = None
    flags: FlagRegistry = Field(default_factory=FlagRegistry)
    arguments: list[Argument] = Field(default_factory=list)
    children: list[Command] = Field(default_factory=list)
    hooks: HookManager = Field(default_factory=HookManager)
    logging_hooks: bool = False

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, name: str) -> str:
        if not name or name.startswith("-") or any(char.isspace() for char in name):
            raise BriskError(
                f"Command name {name!r} must be non-empty, "
                "contain no whitespace and not start with '-'"
            )
        return name

    @field_validator("pre", "run", "post", mode="before")
    @classmethod
    def wrap_callable_as_async(cls, hook: Any) -> Any:
        if hook is None:
            return None
        if not callable(hook):
            raise InvalidHookError(f"Command hook must be callable, got {hook!r}")
        return ensure_async(hook)

    def model_post_init(self, _: Any) -> None:
        """Validate declared arguments and re-attach children through add_command."""
        for alias in self.aliases:
            self.validate_name(alias)
        if len(set(self.names)) != len(self.names):
            raise CommandAlreadyExistsError(
                f"Command '{self.name}' repeats a name in its aliases: {self.aliases}"
            )
        validate_arguments(self.arguments)
        children, self.children = list(self.children), []
        for child in children:
            self.add_command(child)
        if self.logging_hooks:
            register_debug_hooks(self.hooks)

    @property
    def names(self) -> list[str]:
        return [self.name, *self.aliases]

    @property
    def is_router(self) -> bool:
        return self.run is None

    def _contains(self, other: Command) -> bool:
        return any(child is other or child._contains(other) for child in self.children)

    def add_command(self, command: Command) -> Command:
        """
        Attach `command` as a child.

        Raises:
            CommandAlreadyExistsError: A sibling already uses one of its names.
            BriskError: Attaching it would create a cycle.
        """
        if not isinstance(command, Command):
            raise BriskError(f"Expected a Command, got {type(command).__name__}")
        if command is self or command._contains(self):
            raise BriskError(
                f"Adding '{command.name}' under '{self.name}' would create a cycle"
            )
        taken = {name: child for child in self.children for name in child.names}
        for name in command.names:
            if name in taken:
                raise CommandAlreadyExistsError(
                    f"'{name}' is already used by command '{taken[name].name}' "
                    f"under '{self.name}'"
                )
        self.children.append(command)
        logger.debug("Registered command '%s' under '%s'", command.name, self.name)
        return command

    def command(self, name: str, **kwargs: Any) -> Command:
        """Create, attach and return a child command."""
        return self.add_command(Command(name=name, **kwargs))

    def add_flag(self, name: str, **kwargs: Any) -> Flag:
        """Declare a flag on this command. See `FlagRegistry.add_flag`."""
        return self.flags.add_flag(name, **kwargs)

    def add_argument(
        self,
        name: str,
        prompt: str = "",
        required: bool = False,
        default: Any = None,
        help: str = "",
    ) -> Argument:
        """
        Declare the next positional argument.

        Raises:
            InvalidArgumentError: The name is taken, or a required argument
                follows an optional one.
        """
        argument = Argument(
            name=name, prompt=prompt, required=required, default=default, help=help
        )
        validate_arguments([*self.arguments, argument])
        self.arguments.append(argument)
        return argument

    def find_child(self, token: str) -> Command | None:
        """Child whose name or alias equals `token` exactly."""
        for child in self.children:
            if token == child.name or token in child.aliases:
                return child
        return None

    def resolve(self, tokens: Sequence[str]) -> tuple[list[Command], list[str]]:
        """
        Walk the tree from this command along `tokens`.

        Returns:
            tuple[list[Command], list[str]]: The matched path (this command first,
            matched command last) and the unconsumed tokens.
        """
        path = [self]
        index = 0
        while index < len(tokens):
            token = tokens[index]
            if token == "--":
                break
            child = path[-1].find_child(token)
            if child is None:
                break
            path.append(child)
            index += 1
        return path, list(tokens[index:])

    def visible_children(self) -> list[Command]:
        return [child for child in self.children if not child.hidden]

    def walk(self, path: tuple[Command, ...] = ()) -> Iterator[tuple[Command, ...]]:
        """Yield the path to every command in the subtree, depth first."""
        path = (*path, self)
        yield path
        for child in self.children:
            yield from child.walk(path)

    def check(self) -> None:
        """
        Validate the subtree before dispatch.

        Raises:
            InvalidHookError: A command has neither a run hook nor children.
            FlagAlreadyExistsError: Flags along a path share a short form or dest.
        """
        for path in self.walk():
            node = path[-1]
            if node.is_router and not node.children:
                raise InvalidHookError(
                    f"Command '{' '.join(c.name for c in path)}' has no run hook "
                    "and no subcommands"
                )
            FlagRegistry.merge([command.flags for command in path])

    def __str__(self) -> str:
        return (
            f"Command(name={self.name!r}, aliases={self.aliases}, "
            f"children={[child.name for child in self.children]}, "
            f"router={self.is_router})"
        )
