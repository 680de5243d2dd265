# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Main class for building and running Brisk command-line applications.

An `App` owns the root `Command` of a command tree and runs one invocation at a
time:

1. Dispatch: walk the tree along the leading tokens.
2. Merge: collect the flags declared from the root down to the matched command.
3. Resolve: give every flag a value from the command line, the environment,
   the configuration or its default.
4. Bind: assign positional tokens to the command's arguments, prompting for
   missing required ones when a prompter is available.
5. Execute: run the command's `pre`, `run` and `post` hooks.

Global flags (`--help/-h`, `--version`, `--format/-f`) are declared on the root
and apply to every command.

`App.run()` returns the run hook's result or raises. `App.main()` is the process
boundary: it translates outcomes into exit codes.

Example:
    app = App("greeter", version="1.0.0")
    hello = app.command("hello", aliases=["hi"], run=greet)
    hello.add_argument("name", required=True)
    sys.exit(app.main())
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence, TextIO

from rich.console import Console

from brisk.command import Command
from brisk.config import ConfigStore, load_config
from brisk.config import config_file as default_config_file
from brisk.console import console as default_console
from brisk.context import ResolvedContext
from brisk.debug import register_debug_hooks
from brisk.exceptions import (
    BriskError,
    CommandRequiredError,
    ConfigError,
    UnknownCommandError,
    UsageError,
)
from brisk.formatter import OutputFormat
from brisk.help import HelpRenderer
from brisk.hook_manager import Hook, HookManager, HookType
from brisk.logger import logger
from brisk.parser.binder import ArgumentBinder
from brisk.parser.flag import Flag
from brisk.parser.flag_kind import FlagKind
from brisk.parser.registry import FlagRegistry
from brisk.parser.resolver import ValueResolver
from brisk.pipeline import ExecutionPipeline
from brisk.prompt.prompter import Prompter, default_prompter
from brisk.signals import CancelSignal, HelpSignal
from brisk.themes import get_brisk_theme, stylize
from brisk.utils import get_program_invocation
from brisk.version import __version__

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 130


class App:
    """
    A Brisk command-line application.

    Args:
        name (str): Program name, also the root command's name.
        description (str): Shown on the root help page.
        version (str): Printed by `--version`.
        env_prefix (str | None): Prefix for `<PREFIX>_<FLAG>` environment lookups.
            Defaults to the upper-cased program name. Pass "" to disable.
        config (Mapping[str, Any] | None): Configuration values keyed by flag name.
        config_file (Path | str | None): YAML or TOML file loaded at run time.
            Values from `config` take priority over the file.
        environ (Mapping[str, str] | None): Environment lookup. Defaults to
            `os.environ`.
        prompter (Prompter | None): Used for missing required arguments. Defaults
            to a terminal prompter when stdin is a TTY.
        stdin (TextIO | None): Input handle. Defaults to `sys.stdin`.
        stdout (TextIO | None): Output handle. Defaults to `sys.stdout`.
        console (Console | None): Console for help, errors and output.
        logging_hooks (bool): Register debug logging observers.
        config_command (bool): Add the built-in `config` command (`config`, `config get`,
            `config set`, `config reset`). Without `config_file` it manages
            `$XDG_CONFIG_HOME/<name>/config.yaml`.

    Methods:
        command(), add_command(), add_flag(): Build the tree.
        validate(): Check the tree once before dispatch.
        run(argv): Execute one invocation.
        main(argv): Execute and return an exit code.
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        *,
        version: str = __version__,
        env_prefix: str | None = None,
        config: Mapping[str, Any] | None = None,
        config_file: Path | str | None = None,
        environ: Mapping[str, str] | None = None,
        prompter: Prompter | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        console: Console | None = None,
        logging_hooks: bool = False,
        config_command: bool = False,
    ) -> None:
        self.name = name
        self.version = version
        self.env_prefix = name.upper() if env_prefix is None else env_prefix
        self.config: dict[str, Any] = dict(config or {})
        self.config_file = Path(config_file) if config_file else None
        self.environ = environ
        self.stdin: TextIO = stdin or sys.stdin
        self.stdout: TextIO = stdout or sys.stdout
        if console is not None:
            self.console = console
        elif stdout is not None:
            self.console = Console(file=stdout, theme=get_brisk_theme(), highlight=False)
        else:
            self.console = default_console
        self.prompter = prompter if prompter is not None else default_prompter(self.stdin)
        self.hooks = HookManager()
        if logging_hooks:
            register_debug_hooks(self.hooks)
        self.help_renderer = HelpRenderer(self.console)
        self.root = Command(name=name, long=description)
        self._add_global_flags()
        if config_command:
            if self.config_file is None:
                self.config_file = default_config_file(name)
            self.root.add_command(self._get_config_command())
        self._validated = False

    def _add_global_flags(self) -> None:
        self.root.add_flag("help", short="h", kind="bool", help="Show help and exit.")
        self.root.add_flag("version", kind="bool", help="Show the version and exit.")
        self.root.add_flag(
            "format",
            short="f",
            default=OutputFormat.TEXT.value,
            choices=[output_format.value for output_format in OutputFormat],
            help="Output format.",
        )

    def _config_store(self) -> ConfigStore:
        if self.config_file is None:
            raise ConfigError("No configuration file is set for this application.")
        return ConfigStore(self.config_file).load()

    def _get_config_command(self) -> Command:
        """Returns the `config` command group backed by `config_file`."""

        async def show(ctx: ResolvedContext) -> dict[str, Any]:
            values = self._config_store().values()
            ctx.output(values)
            return values

        async def get(ctx: ResolvedContext) -> Any:
            key = ctx.arg("key")
            store = self._config_store()
            if key not in store:
                raise ConfigError(f"Configuration key not found: {key}")
            value = store.get(key)
            ctx.console.print(str(value), markup=False, highlight=False)
            return value

        async def set_value(ctx: ResolvedContext) -> None:
            key, value = ctx.arg("key"), ctx.arg("value")
            store = self._config_store()
            store.set(key, value)
            store.save()
            ctx.console.print(f"{key} updated", markup=False, highlight=False)

        async def reset(ctx: ResolvedContext) -> bool:
            if not ctx.flag("force"):
                if ctx.prompter is None:
                    raise ConfigError("Use --force to reset the configuration.")
                if not await ctx.prompter.confirm("Reset configuration?", default=False):
                    ctx.console.print("Aborted")
                    return False
            store = self._config_store()
            store.reset()
            store.save()
            ctx.console.print("Configuration cleared")
            return True

        config = Command(name="config", short="Manage CLI configuration", run=show)
        get_command = config.command("get", short="Print a configuration value", run=get)
        get_command.add_argument("key", prompt="Configuration key", required=True)
        set_command = config.command(
            "set", short="Update a configuration value", run=set_value
        )
        set_command.add_argument("key", prompt="Configuration key", required=True)
        set_command.add_argument("value", prompt="Value", required=True)
        reset_command = config.command(
            "reset", short="Clear all configuration values", run=reset
        )
        reset_command.add_flag("force", kind="bool", help="Do not ask for confirmation.")
        return config

    def add_command(self, command: Command) -> Command:
        self._validated = False
        return self.root.add_command(command)

    def command(self, name: str, **kwargs: Any) -> Command:
        """Create a top-level command. See `Command` for the accepted fields."""
        self._validated = False
        return self.root.command(name, **kwargs)

    def add_flag(self, name: str, **kwargs: Any) -> Flag:
        """Declare a global flag, visible to every command."""
        self._validated = False
        return self.root.add_flag(name, **kwargs)

    def register_hook(self, hook_type: HookType | str, hook: Hook) -> None:
        """Observe every command executed by this app."""
        self.hooks.register(hook_type, hook)

    def validate(self) -> None:
        """Check the command tree. Runs automatically before the first dispatch."""
        if not self._validated:
            self.root.check()
            self._validated = True

    def _load_config(self) -> dict[str, Any]:
        config: dict[str, Any] = {}
        if self.config_file is not None:
            config.update(load_config(self.config_file))
        config.update(self.config)
        return config

    def _output_format(self, value: Any) -> OutputFormat:
        """A command may shadow `format` with its own values; those render as text."""
        if not value:
            return OutputFormat.TEXT
        try:
            return OutputFormat(value)
        except ValueError:
            logger.debug("Format %r is not an output format, using text.", value)
            return OutputFormat.TEXT

    def _wants_help(self, flags: FlagRegistry, tokens: Sequence[str]) -> bool:
        help_flag = flags.get("help")
        if help_flag is None:
            return False
        spellings = {help_flag.long_flag}
        if help_flag.short_flag:
            spellings.add(help_flag.short_flag)
        i = 0
        while i < len(tokens):
            token = tokens[i]
            if token == "--":
                return False
            if token in spellings:
                return True
            i += 2 if self._consumes_next(flags, token) else 1
        return False

    def _consumes_next(self, flags: FlagRegistry, token: str) -> bool:
        """True when `token` is a value flag whose value is the next token."""
        if "=" in token:
            return False
        if token.startswith("--"):
            flag = flags.get(token[2:])
        elif token.startswith("-") and len(token) == 2:
            flag = flags.get_short(token[1:])
        else:
            return False
        return flag is not None and flag.kind is not FlagKind.BOOLEAN

    async def run(self, argv: Sequence[str] | None = None) -> Any:
        """
        Dispatch, resolve, bind and execute one invocation.

        Args:
            argv (Sequence[str] | None): Tokens after the program name. Defaults to
                `sys.argv[1:]`.

        Returns:
            Any: The run hook's result, or None for help and version requests.

        Raises:
            HelpSignal: Help was rendered.
            UsageError: The tokens do not form a valid invocation.
            CancelSignal: A prompt was cancelled.
            Exception: Whatever a command hook raised.
        """
        tokens = list(sys.argv[1:] if argv is None else argv)
        self.validate()

        path, remaining = self.root.resolve(tokens)
        command = path[-1]
        names = tuple(node.name for node in path)
        logger.debug("Dispatched %s to '%s' with %s", tokens, " ".join(names), remaining)

        flags = FlagRegistry.merge([node.flags for node in path])
        if self._wants_help(flags, remaining):
            self.help_renderer.render(path)
            raise HelpSignal()

        if command.is_router and remaining and not remaining[0].startswith("-"):
            raise UnknownCommandError(remaining[0], names)

        resolver = ValueResolver(
            environ=self.environ, config=self._load_config(), env_prefix=self.env_prefix
        )
        resolved = resolver.resolve(flags, remaining, names)

        if resolved.values.get("help") is True:
            self.help_renderer.render(path)
            raise HelpSignal()
        if resolved.values.get("version") is True:
            self.console.print(f"{self.name} {self.version}", highlight=False)
            return None

        if command.is_router:
            if resolved.remaining:
                raise UnknownCommandError(resolved.remaining[0], names)
            raise CommandRequiredError(
                names, [child.name for child in command.visible_children()]
            )

        binder = ArgumentBinder(self.prompter)
        args = await binder.bind(command.arguments, resolved.remaining, names)

        context = ResolvedContext(
            path=names,
            command=command,
            flags=resolved.values,
            sources=resolved.sources,
            args=args,
            positionals=tuple(args.values()),
            stdin=self.stdin,
            stdout=self.stdout,
            console=self.console,
            prompter=self.prompter,
            output_format=self._output_format(resolved.values.get("format")),
        )
        pipeline = ExecutionPipeline([self.hooks])
        return await pipeline.execute(command, context)

    def main(self, argv: Sequence[str] | None = None) -> int:
        """
        Run one invocation and return the process exit code.

        Exit codes:
            0: Success, help or version.
            1: Usage error, configuration error or a failing hook.
            130: The user cancelled or the input stream ended during a prompt.
        """
        try:
            asyncio.run(self.run(argv))
        except HelpSignal:
            return EXIT_OK
        except UsageError as error:
            logger.debug("Usage error: %s", error)
            self.help_renderer.render_error(error, self.program)
            return EXIT_ERROR
        except CancelSignal as signal:
            logger.info("[CancelSignal]. <- %s (%s)", signal, signal.reason)
            self.console.print(stylize("Cancelled.", "warning"))
            return EXIT_CANCELLED
        except BriskError as error:
            self.console.print(f"{stylize('error:', 'error')} {stylize(str(error), 'error')}")
            return EXIT_ERROR
        except Exception as error:
            logger.debug("Command failed", exc_info=error)
            self.console.print(f"{stylize('error:', 'error')} {stylize(str(error), 'error')}")
            return EXIT_ERROR
        return EXIT_OK

    @property
    def program(self) -> str:
        return self.name or get_program_invocation()

    def __str__(self) -> str:
        return f"App(name={self.name!r}, version={self.version!r}, root={self.root})"
