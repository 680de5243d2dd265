import pytest

from brisk.exceptions import FlagAlreadyExistsError, InvalidFlagError
from brisk.parser import Flag, FlagKind, FlagRegistry


def test_kind_aliases():
    assert FlagKind("int") is FlagKind.INTEGER
    assert FlagKind("INT64") is FlagKind.INTEGER
    assert FlagKind("bool") is FlagKind.BOOLEAN
    assert FlagKind("number") is FlagKind.FLOAT
    assert FlagKind("date") is FlagKind.DATETIME
    with pytest.raises(ValueError):
        FlagKind("complex")


def test_flag_defaults():
    flag = Flag("dry-run", kind="bool")
    assert flag.kind is FlagKind.BOOLEAN
    assert flag.dest == "dry_run"
    assert flag.long_flag == "--dry-run"
    assert flag.short_flag is None


def test_flag_text():
    assert Flag("port", short="p", kind="int").get_flag_text() == "-p, --port <integer>"
    assert Flag("verbose", short="v", kind="bool").get_flag_text() == (
        "-v, --verbose, --no-verbose"
    )
    assert Flag("level", choices=["a", "b"]).get_flag_text() == "--level {a,b}"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": ""},
        {"name": "--port"},
        {"name": "my port"},
        {"name": "a=b"},
        {"name": "no-color", "kind": "bool"},
        {"name": "port", "short": "pp"},
        {"name": "port", "kind": "complex"},
        {"name": "port", "dest": "not valid"},
        {"name": "port", "required": True, "default": "80"},
        {"name": "verbose", "kind": "bool", "required": True},
        {"name": "verbose", "kind": "bool", "positional": True},
        {"name": "port", "kind": "int", "default": "eighty"},
        {"name": "port", "kind": "int", "choices": ["one"]},
    ],
)
def test_invalid_flag_definitions(kwargs):
    with pytest.raises(InvalidFlagError):
        Flag(**kwargs)


def test_choices_are_coerced():
    flag = Flag("level", kind="int", choices=["1", "2"])
    assert flag.choices == (1, 2)


def test_env_names_order():
    flag = Flag("api-key", env_var="API_KEY", env_vars=["TOKEN", "API_KEY"])
    assert flag.env_names("MYAPP") == ["API_KEY", "TOKEN", "MYAPP_API_KEY"]
    assert flag.env_names() == ["API_KEY", "TOKEN"]


def test_registry_rejects_duplicates():
    registry = FlagRegistry()
    registry.add_flag("port", short="p")
    with pytest.raises(FlagAlreadyExistsError):
        registry.add_flag("port")
    with pytest.raises(FlagAlreadyExistsError):
        registry.add_flag("profile", short="p")
    with pytest.raises(FlagAlreadyExistsError):
        registry.add_flag("other", dest="port")


def test_registry_lookup():
    registry = FlagRegistry()
    flag = registry.add_flag("log-level", short="l")
    assert registry.get("log-level") is flag
    assert registry.get_short("l") is flag
    assert registry.get_dest("log_level") is flag
    assert "log-level" in registry
    assert len(registry) == 1


def test_merge_descendant_shadows_ancestor():
    root = FlagRegistry()
    root.add_flag("output", short="o", help="root output")
    root.add_flag("verbose", short="v", kind="bool")
    child = FlagRegistry()
    child.add_flag("output", kind="int", help="child output")

    merged = FlagRegistry.merge([root, child])

    assert merged.get("output").help == "child output"
    assert merged.get("output").kind is FlagKind.INTEGER
    assert merged.get_short("o") is None
    assert merged.get_short("v") is root.get("verbose")
    assert [flag.name for flag in merged] == ["verbose", "output"]


def test_merge_detects_short_collision():
    root = FlagRegistry()
    root.add_flag("verbose", short="v", kind="bool")
    child = FlagRegistry()
    child.add_flag("version", short="v", kind="bool")
    with pytest.raises(FlagAlreadyExistsError):
        FlagRegistry.merge([root, child])
