from types import MappingProxyType

import pytest
from pydantic import ValidationError

from brisk.context import ResolvedContext
from brisk.parser.parser_types import ValueSource


def test_defaults_build_empty_mappings():
    context = ResolvedContext(path=("app",))
    assert isinstance(context.flags, MappingProxyType)
    assert dict(context.flags) == {}
    assert dict(context.sources) == {}
    assert dict(context.args) == {}
    assert context.flag("missing", "fallback") == "fallback"
    assert context.source("missing") is ValueSource.NONE


def test_default_mappings_are_not_shared():
    first = ResolvedContext(path=("app",))
    second = ResolvedContext(path=("app",))
    assert first.flags is not second.flags
    assert first.cancel_event is not second.cancel_event


def test_dicts_are_frozen():
    values = {"port": 8080}
    context = ResolvedContext(
        path=("app", "serve"),
        flags=values,
        sources={"port": ValueSource.ENV},
        args={"name": "web"},
    )
    values["port"] = 1
    assert context.flag("port") == 8080
    assert context.source("port") is ValueSource.ENV
    assert context.arg("name") == "web"
    with pytest.raises(TypeError):
        context.flags["port"] = 9090


def test_context_is_frozen():
    context = ResolvedContext(path=("app",))
    with pytest.raises(ValidationError):
        context.path = ("other",)
