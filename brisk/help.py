# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Help rendering for Brisk command trees.

`HelpRenderer.render(path)` prints the help page of the last command in `path`:

    usage: app deploy [flags] <service> [region]

    Deploy a service.

    commands:
      status, st                     Show deployment status
    positional:
      <service>                      Service to deploy
    options:
      -f, --force, --no-force        Skip confirmation
    global options:
      -h, --help, --no-help          Show help and exit

Flags are the merged registry of the path. Flags declared on the root are
listed under "global options" unless the command itself redefines them.
"""
from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.markup import escape

from brisk.command import Command
from brisk.console import console as default_console
from brisk.exceptions import UsageError
from brisk.parser.flag import Flag
from brisk.parser.registry import FlagRegistry
from brisk.themes import stylize

COLUMN = 30


class HelpRenderer:
    """Renders usage and help pages for a command path with rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def get_usage(self, path: Sequence[Command], plain_text: bool = False) -> str:
        """Usage line for the last command in `path`."""
        command = path[-1]
        parts = [node.name for node in path]
        if command.visible_children():
            parts.append("[command]" if command.run else "<command>")
        if len(FlagRegistry.merge([node.flags for node in path])):
            parts.append("[flags]")
        parts.extend(argument.get_positional_text() for argument in command.arguments)
        usage = " ".join(parts)
        return usage if plain_text else escape(usage)

    def _line(self, text: str, help_text: str) -> None:
        line = f"  {escape(text):<{COLUMN}} "
        if help_text and len(text) > COLUMN:
            help_text = f"\n{'':<{COLUMN + 3}}{help_text}"
        self.console.print(f"{line}{escape(help_text)}".rstrip())

    def _flag_help(self, flag: Flag) -> str:
        help_text = flag.help or ""
        extras = []
        if flag.required:
            extras.append("required")
        if flag.has_default and flag.kind.takes_value:
            extras.append(f"default: {flag.default}")
        if extras:
            help_text = f"{help_text} ({', '.join(extras)})".strip()
        return help_text

    def _split_flags(self, path: Sequence[Command]) -> tuple[list[Flag], list[Flag]]:
        merged = FlagRegistry.merge([node.flags for node in path])
        root_flags = {id(flag) for flag in path[0].flags}
        local: list[Flag] = []
        global_: list[Flag] = []
        for flag in merged:
            if flag.hidden:
                continue
            if len(path) > 1 and id(flag) in root_flags:
                global_.append(flag)
            else:
                local.append(flag)
        return local, global_

    def render(self, path: Sequence[Command]) -> None:
        """Print the help page for the last command in `path`."""
        command = path[-1]
        self.console.print(f"{stylize('usage:', 'help.usage')} {self.get_usage(path)}\n")

        description = command.long or command.short
        if description:
            self.console.print(escape(description) + "\n")

        children = command.visible_children()
        if children:
            self.console.print(stylize("commands:", "help.heading"))
            for child in children:
                self._line(", ".join(child.names), child.short)

        if command.arguments:
            self.console.print(stylize("positional:", "help.heading"))
            for argument in command.arguments:
                self._line(argument.get_positional_text(), argument.help)

        local, global_ = self._split_flags(path)
        if local:
            self.console.print(stylize("options:", "help.heading"))
            for flag in local:
                self._line(flag.get_flag_text(), self._flag_help(flag))
        if global_:
            self.console.print(stylize("global options:", "help.heading"))
            for flag in global_:
                self._line(flag.get_flag_text(), self._flag_help(flag))

    def render_error(self, error: UsageError, program: str = "") -> None:
        """Print a usage error followed by a hint pointing at --help."""
        self.console.print(f"{stylize('error:', 'error')} {escape(str(error))}")
        where = " ".join(error.path) or program
        if where:
            hint = f"Run '{where} --help' for usage."
        else:
            hint = "Run with --help for usage."
        self.console.print(stylize(hint, "help.dim"))
