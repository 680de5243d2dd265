# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Structured output rendering for command results.

`render_output` prints a mapping, a sequence of mappings or a plain value in the
format selected with the global `--format` flag:

- text: `key = value` lines sorted by key, one line per sequence item
- json: indented JSON
- yaml: block-style YAML
- table: a Rich table

The renderer only presents data it is given; it makes no decisions for the
command that produced it.
"""
from __future__ import annotations

import json
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Mapping, Sequence

import yaml
from rich import box
from rich.console import Console
from rich.table import Table

from brisk.console import console as default_console
from brisk.themes import OneColors


class OutputFormat(Enum):
    """Supported output formats."""

    TEXT = "text"
    JSON = "json"
    YAML = "yaml"
    TABLE = "table"

    @classmethod
    def choices(cls) -> list[OutputFormat]:
        return list(cls)

    @classmethod
    def _missing_(cls, value: object) -> OutputFormat:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        aliases = {"yml": "yaml", "txt": "text", "plain": "text"}
        normalized = aliases.get(normalized, normalized)
        for member in cls:
            if member.value == normalized:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


def to_plain(data: Any) -> Any:
    """Convert values to JSON/YAML friendly builtins."""
    if isinstance(data, Mapping):
        return {str(key): to_plain(value) for key, value in data.items()}
    if isinstance(data, (list, tuple, set, frozenset)):
        return [to_plain(item) for item in data]
    if isinstance(data, (datetime, date)):
        return data.isoformat()
    if isinstance(data, timedelta):
        return str(data)
    if isinstance(data, Enum):
        return data.value
    return data


def _text_value(value: Any) -> str:
    plain = to_plain(value)
    if isinstance(plain, (dict, list)):
        return json.dumps(plain)
    if plain is None:
        return ""
    return str(plain)


def format_text(data: Any) -> str:
    if isinstance(data, Mapping):
        return "\n".join(
            f"{key} = {_text_value(data[key])}" for key in sorted(data, key=str)
        )
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        if data and all(isinstance(item, Mapping) for item in data):
            return "\n\n".join(format_text(item) for item in data)
        return "\n".join(_text_value(item) for item in data)
    return _text_value(data)


def format_json(data: Any) -> str:
    return json.dumps(to_plain(data), indent=2)


def format_yaml(data: Any) -> str:
    return yaml.safe_dump(
        to_plain(data), sort_keys=False, default_flow_style=False
    ).rstrip("\n")


def build_table(data: Any, title: str = "") -> Table:
    table = Table(
        title=title or None,
        box=box.SIMPLE,
        header_style=OneColors.LIGHT_YELLOW_b,
        highlight=True,
    )
    if isinstance(data, Mapping):
        table.add_column("Key", style=OneColors.CYAN)
        table.add_column("Value")
        for key in sorted(data, key=str):
            table.add_row(str(key), _text_value(data[key]))
        return table
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        rows = list(data)
    else:
        rows = [data]
    if rows and all(isinstance(row, Mapping) for row in rows):
        columns: list[str] = []
        for row in rows:
            for key in row:
                if str(key) not in columns:
                    columns.append(str(key))
        for column in columns:
            table.add_column(column)
        for row in rows:
            plain = {str(key): value for key, value in row.items()}
            table.add_row(*(_text_value(plain.get(column)) for column in columns))
        return table
    table.add_column("Value")
    for row in rows:
        table.add_row(_text_value(row))
    return table


def render_output(
    data: Any,
    output_format: OutputFormat | str = OutputFormat.TEXT,
    console: Console | None = None,
) -> None:
    """Print `data` to `console` in `output_format`."""
    console = console or default_console
    output_format = OutputFormat(output_format)
    if output_format is OutputFormat.TABLE:
        console.print(build_table(data))
        return
    if output_format is OutputFormat.JSON:
        rendered = format_json(data)
    elif output_format is OutputFormat.YAML:
        rendered = format_yaml(data)
    else:
        rendered = format_text(data)
    console.print(rendered, markup=False, highlight=False, soft_wrap=True)
