from datetime import datetime, timedelta

import pytest

from brisk.exceptions import (
    BundledValueFlagError,
    InvalidValueError,
    MissingRequiredValueError,
    MissingValueError,
    UnknownFlagError,
)
from brisk.parser import FlagRegistry, ValueResolver, ValueSource


def build_registry() -> FlagRegistry:
    registry = FlagRegistry()
    registry.add_flag("port", short="p", kind="int", default=8080, env_var="PORT")
    registry.add_flag("verbose", short="v", kind="bool")
    registry.add_flag("name", short="n")
    return registry


def test_resolution_is_deterministic():
    registry = build_registry()
    resolver = ValueResolver(environ={"PORT": "9000"}, config={"name": "cfg"})
    tokens = ["-v", "--port", "7000", "extra"]
    first = resolver.resolve(registry, tokens)
    second = resolver.resolve(registry, tokens)
    assert first == second


def test_command_line_beats_environment():
    resolver = ValueResolver(environ={"PORT": "9000"})
    resolved = resolver.resolve(build_registry(), ["--port", "7000"])
    assert resolved.values["port"] == 7000
    assert resolved.sources["port"] is ValueSource.CLI


def test_environment_beats_default():
    resolver = ValueResolver(environ={"PORT": "9090"})
    resolved = resolver.resolve(build_registry(), [])
    assert resolved.values["port"] == 9090
    assert resolved.sources["port"] is ValueSource.ENV


def test_default_when_no_other_source():
    resolved = ValueResolver(environ={}).resolve(build_registry(), [])
    assert resolved.values["port"] == 8080
    assert resolved.sources["port"] is ValueSource.DEFAULT


def test_config_between_environment_and_default():
    registry = build_registry()
    resolved = ValueResolver(environ={}, config={"port": 6000}).resolve(registry, [])
    assert resolved.values["port"] == 6000
    assert resolved.sources["port"] is ValueSource.CONFIG

    resolved = ValueResolver(environ={"PORT": "5000"}, config={"port": 6000}).resolve(
        registry, []
    )
    assert resolved.values["port"] == 5000


def test_config_by_dest():
    registry = FlagRegistry()
    registry.add_flag("log-level")
    resolved = ValueResolver(environ={}, config={"log_level": "debug"}).resolve(
        registry, []
    )
    assert resolved.values["log_level"] == "debug"


def test_empty_environment_value_is_ignored():
    resolved = ValueResolver(environ={"PORT": ""}).resolve(build_registry(), [])
    assert resolved.values["port"] == 8080


def test_env_aliases_and_prefix_fallback():
    registry = FlagRegistry()
    registry.add_flag("token", env_var="APP_TOKEN", env_vars=["LEGACY_TOKEN"])
    registry.add_flag("region")

    resolver = ValueResolver(
        environ={"LEGACY_TOKEN": "old", "MYAPP_REGION": "eu-west-1"},
        env_prefix="myapp",
    )
    resolved = resolver.resolve(registry, [])
    assert resolved.values["token"] == "old"
    assert resolved.values["region"] == "eu-west-1"

    resolver = ValueResolver(
        environ={"APP_TOKEN": "new", "LEGACY_TOKEN": "old", "MYAPP_TOKEN": "prefixed"},
        env_prefix="MYAPP",
    )
    assert resolver.resolve(registry, []).values["token"] == "new"


def test_required_flag_missing():
    registry = FlagRegistry()
    registry.add_flag("token", required=True)
    with pytest.raises(MissingRequiredValueError) as excinfo:
        ValueResolver(environ={}).resolve(registry, [], path=("app", "deploy"))
    assert excinfo.value.flag == "token"
    assert excinfo.value.path == ("app", "deploy")
    assert "--token" in str(excinfo.value)


def test_required_flag_from_environment():
    registry = FlagRegistry()
    registry.add_flag("token", required=True, env_var="TOKEN")
    resolved = ValueResolver(environ={"TOKEN": "abc"}).resolve(registry, [])
    assert resolved.values["token"] == "abc"


def test_empty_values_for_unset_flags():
    resolved = ValueResolver(environ={}).resolve(build_registry(), [])
    assert resolved.values["verbose"] is False
    assert resolved.values["name"] is None
    assert resolved.sources["name"] is ValueSource.NONE


def test_boolean_presence_negation_and_last_wins():
    registry = build_registry()
    resolver = ValueResolver(environ={})
    assert resolver.resolve(registry, ["--verbose"]).values["verbose"] is True
    assert resolver.resolve(registry, ["--no-verbose"]).values["verbose"] is False
    assert (
        resolver.resolve(registry, ["--verbose", "--no-verbose"]).values["verbose"]
        is False
    )
    assert (
        resolver.resolve(registry, ["--no-verbose", "--verbose"]).values["verbose"]
        is True
    )
    assert resolver.resolve(registry, ["--verbose=false"]).values["verbose"] is False
    assert resolver.resolve(registry, ["-v=yes"]).values["verbose"] is True


def test_inline_values():
    resolved = ValueResolver(environ={}).resolve(
        build_registry(), ["--port=81", "-n=alice"]
    )
    assert resolved.values["port"] == 81
    assert resolved.values["name"] == "alice"


def test_value_flag_consumes_next_token():
    resolved = ValueResolver(environ={}).resolve(
        build_registry(), ["-p", "82", "file.txt"]
    )
    assert resolved.values["port"] == 82
    assert resolved.remaining == ["file.txt"]


def test_missing_value_at_end():
    with pytest.raises(MissingValueError) as excinfo:
        ValueResolver(environ={}).resolve(build_registry(), ["--name"])
    assert excinfo.value.flag == "--name"


def test_double_dash_terminates_flags():
    resolved = ValueResolver(environ={}).resolve(
        build_registry(), ["-v", "--", "--port", "-n"]
    )
    assert resolved.values["verbose"] is True
    assert resolved.values["port"] == 8080
    assert resolved.remaining == ["--port", "-n"]


def test_bundled_short_booleans():
    registry = FlagRegistry()
    registry.add_flag("all", short="a", kind="bool")
    registry.add_flag("brief", short="b", kind="bool")
    registry.add_flag("color", short="c", kind="bool")
    resolved = ValueResolver(environ={}).resolve(registry, ["-abc"])
    assert resolved.values == {"all": True, "brief": True, "color": True}


def test_bundle_with_value_flag_is_rejected():
    registry = build_registry()
    with pytest.raises(BundledValueFlagError) as excinfo:
        ValueResolver(environ={}).resolve(registry, ["-vp"])
    assert excinfo.value.flag == "-p"
    assert "cannot be bundled in '-vp'" in str(excinfo.value)


def test_bundle_with_unknown_letter_is_unknown_flag():
    with pytest.raises(UnknownFlagError) as excinfo:
        ValueResolver(environ={}).resolve(build_registry(), ["-vx"])
    assert excinfo.value.token == "-vx"


def test_negative_numbers_are_positional():
    resolved = ValueResolver(environ={}).resolve(build_registry(), ["-5", "-2.5", "-"])
    assert resolved.remaining == ["-5", "-2.5", "-"]


def test_negative_number_as_flag_value():
    registry = FlagRegistry()
    registry.add_flag("offset", kind="int")
    resolved = ValueResolver(environ={}).resolve(registry, ["--offset", "-3"])
    assert resolved.values["offset"] == -3


def test_unknown_flag_suggestions():
    with pytest.raises(UnknownFlagError) as excinfo:
        ValueResolver(environ={}).resolve(build_registry(), ["--verb"])
    assert excinfo.value.token == "--verb"
    assert "--verbose" in excinfo.value.suggestions
    assert "Did you mean" in str(excinfo.value)


def test_unknown_flag_without_suggestions():
    with pytest.raises(UnknownFlagError) as excinfo:
        ValueResolver(environ={}).resolve(build_registry(), ["--zzz"])
    assert excinfo.value.suggestions == ()
    assert "--help" in str(excinfo.value)


def test_unknown_short_flag():
    with pytest.raises(UnknownFlagError):
        ValueResolver(environ={}).resolve(build_registry(), ["-x"])


def test_integer_is_never_truncated():
    with pytest.raises(InvalidValueError) as excinfo:
        ValueResolver(environ={}).resolve(build_registry(), ["--port", "3.5"])
    assert excinfo.value.flag == "port"
    assert excinfo.value.literal == "3.5"
    assert excinfo.value.kind == "integer"


def test_invalid_environment_literal():
    with pytest.raises(InvalidValueError):
        ValueResolver(environ={"PORT": "eighty"}).resolve(build_registry(), [])


def test_choices_violation():
    registry = FlagRegistry()
    registry.add_flag("level", choices=["low", "high"])
    with pytest.raises(InvalidValueError) as excinfo:
        ValueResolver(environ={}).resolve(registry, ["--level", "mid"])
    assert "choose from low, high" in str(excinfo.value)


def test_validator_rejection():
    registry = FlagRegistry()
    registry.add_flag(
        "email", validator=lambda value: None if "@" in value else "must contain '@'"
    )
    with pytest.raises(InvalidValueError) as excinfo:
        ValueResolver(environ={}).resolve(registry, ["--email", "bob"])
    assert excinfo.value.reason == "must contain '@'"


def test_positional_flags_take_leftovers():
    registry = FlagRegistry()
    registry.add_flag("source", positional=True)
    registry.add_flag("target", positional=True)
    resolver = ValueResolver(environ={})

    resolved = resolver.resolve(registry, ["a.txt", "b.txt", "c.txt"])
    assert resolved.values["source"] == "a.txt"
    assert resolved.values["target"] == "b.txt"
    assert resolved.remaining == ["c.txt"]

    resolved = resolver.resolve(registry, ["--source", "x", "y"])
    assert resolved.values["source"] == "x"
    assert resolved.values["target"] == "y"
    assert resolved.sources["target"] is ValueSource.CLI


def test_duration_and_datetime_kinds():
    registry = FlagRegistry()
    registry.add_flag("timeout", kind="duration", default="30s")
    registry.add_flag("since", kind="datetime")
    resolved = ValueResolver(environ={}).resolve(
        registry, ["--since", "2024-05-01T10:00:00"]
    )
    assert resolved.values["timeout"] == timedelta(seconds=30)
    assert resolved.values["since"] == datetime(2024, 5, 1, 10, 0, 0)
