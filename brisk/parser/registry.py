# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `FlagRegistry`, the ordered set of flags owned by one command.

Each command owns a registry; the root command's registry holds the global flags.
Before resolution, the registries of every command on the matched path are merged
root first. A descendant that defines a flag with the same name replaces the
ancestor's definition entirely, including its short form.

Names, short forms and destinations are unique within a registry and within
every merged set. Violations raise `FlagAlreadyExistsError` at registration or
merge time.
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, Sequence

from brisk.exceptions import FlagAlreadyExistsError
from brisk.parser.flag import Flag
from brisk.parser.flag_kind import FlagKind
from brisk.validators import Validator


class FlagRegistry:
    """
    Ordered collection of `Flag` definitions with name, short and dest indexes.

    Methods:
        add_flag(): Declare a new flag from keyword arguments.
        register(): Add an existing `Flag` instance.
        get(), get_short(): Look a flag up by long name or short character.
        merge(): Combine registries root first with descendant shadowing.
    """

    def __init__(self, flags: Iterable[Flag] = ()) -> None:
        self._flags: dict[str, Flag] = {}
        self._short_map: dict[str, Flag] = {}
        self._dest_map: dict[str, Flag] = {}
        for flag in flags:
            self.register(flag)

    def add_flag(
        self,
        name: str,
        short: str | None = None,
        kind: FlagKind | str = FlagKind.STRING,
        default: Any = None,
        env_var: str | None = None,
        env_vars: Sequence[str] = (),
        required: bool = False,
        positional: bool = False,
        dest: str = "",
        help: str = "",
        choices: Sequence[Any] | None = None,
        validator: Validator | None = None,
        hidden: bool = False,
    ) -> Flag:
        """
        Declare a flag on this registry.

        Args:
            name (str): Long name without dashes, e.g. `port`.
            short (str | None): Single character short form, e.g. `p`.
            kind (FlagKind | str): Value kind, e.g. `FlagKind.INTEGER` or `"int"`.
            default (Any): Literal used when no other source provides a value.
            env_var (str | None): Primary environment variable.
            env_vars (Sequence[str]): Fallback environment variables, in order.
            required (bool): Fail resolution when no source provides a value.
            positional (bool): Allow a leftover positional token to fill it.
            dest (str): Key for the resolved value. Defaults to `name`.
            help (str): Help text.
            choices (Sequence[Any] | None): Allowed values.
            validator (Validator | None): Predicate-with-reason for the value.
            hidden (bool): Omit from help output.

        Returns:
            Flag: The registered flag.

        Raises:
            InvalidFlagError: If the definition is inconsistent.
            FlagAlreadyExistsError: If the name, short form or dest is taken.
        """
        flag = Flag(
            name=name,
            short=short,
            kind=kind,  # type: ignore[arg-type]
            default=default,
            env_var=env_var,
            env_vars=tuple(env_vars),
            required=required,
            positional=positional,
            dest=dest,
            help=help,
            choices=choices,
            validator=validator,
            hidden=hidden,
        )
        return self.register(flag)

    def register(self, flag: Flag) -> Flag:
        """Add `flag`, rejecting duplicate names, short forms and destinations."""
        if flag.name in self._flags:
            raise FlagAlreadyExistsError(f"Flag '--{flag.name}' is already registered")
        if flag.short and flag.short in self._short_map:
            other = self._short_map[flag.short]
            raise FlagAlreadyExistsError(
                f"Short flag '-{flag.short}' for '--{flag.name}' "
                f"is already used by '--{other.name}'"
            )
        if flag.dest in self._dest_map:
            other = self._dest_map[flag.dest]
            raise FlagAlreadyExistsError(
                f"Destination '{flag.dest}' for '--{flag.name}' "
                f"is already used by '--{other.name}'"
            )
        self._flags[flag.name] = flag
        if flag.short:
            self._short_map[flag.short] = flag
        self._dest_map[flag.dest] = flag
        return flag

    def _remove(self, name: str) -> None:
        flag = self._flags.pop(name)
        if flag.short:
            self._short_map.pop(flag.short, None)
        self._dest_map.pop(flag.dest, None)

    def get(self, name: str) -> Flag | None:
        return self._flags.get(name)

    def get_short(self, short: str) -> Flag | None:
        return self._short_map.get(short)

    def get_dest(self, dest: str) -> Flag | None:
        return self._dest_map.get(dest)

    def flag_texts(self) -> list[str]:
        """All spellings accepted on the command line, for suggestions."""
        texts: list[str] = []
        for flag in self._flags.values():
            texts.append(flag.long_flag)
            if flag.kind is FlagKind.BOOLEAN:
                texts.append(f"--no-{flag.name}")
            if flag.short_flag:
                texts.append(flag.short_flag)
        return texts

    @classmethod
    def merge(cls, registries: Sequence[FlagRegistry]) -> FlagRegistry:
        """
        Merge registries ordered from the root to the matched command.

        A flag redefined by a later (deeper) registry replaces the earlier
        definition entirely.

        Raises:
            FlagAlreadyExistsError: If a surviving short form or dest collides.
        """
        merged = cls()
        for registry in registries:
            for flag in registry:
                if flag.name in merged._flags:
                    merged._remove(flag.name)
                merged.register(flag)
        return merged

    def __iter__(self) -> Iterator[Flag]:
        return iter(self._flags.values())

    def __len__(self) -> int:
        return len(self._flags)

    def __contains__(self, name: object) -> bool:
        return name in self._flags

    def __str__(self) -> str:
        names = ", ".join(flag.long_flag for flag in self._flags.values())
        return f"FlagRegistry({names})"
