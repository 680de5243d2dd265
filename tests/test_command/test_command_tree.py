import pytest

from brisk.command import Command
from brisk.exceptions import (
    BriskError,
    CommandAlreadyExistsError,
    FlagAlreadyExistsError,
    InvalidArgumentError,
    InvalidHookError,
)


async def noop(ctx):
    return None


def build_tree() -> Command:
    root = Command(name="app")
    greet = root.command("greet", short="Greetings")
    greet.command("hello", aliases=["hi"], run=noop)
    greet.command("bye", run=noop)
    root.command("status", run=noop)
    return root


def names(path):
    return [command.name for command in path]


def test_resolve_walks_deepest_match():
    root = build_tree()
    path, remaining = root.resolve(["greet", "hello", "Alice"])
    assert names(path) == ["app", "greet", "hello"]
    assert remaining == ["Alice"]


def test_resolve_by_alias():
    path, remaining = build_tree().resolve(["greet", "hi"])
    assert names(path) == ["app", "greet", "hello"]
    assert remaining == []


def test_resolve_is_case_sensitive():
    path, remaining = build_tree().resolve(["greet", "Hello"])
    assert names(path) == ["app", "greet"]
    assert remaining == ["Hello"]


def test_resolve_stops_at_flags_and_double_dash():
    root = build_tree()
    path, remaining = root.resolve(["greet", "--loud", "hello"])
    assert names(path) == ["app", "greet"]
    assert remaining == ["--loud", "hello"]

    path, remaining = root.resolve(["--", "status"])
    assert names(path) == ["app"]
    assert remaining == ["--", "status"]


def test_resolve_is_deterministic():
    root = build_tree()
    assert root.resolve(["greet", "bye", "x"]) == root.resolve(["greet", "bye", "x"])


def test_duplicate_sibling_names():
    root = build_tree()
    with pytest.raises(CommandAlreadyExistsError):
        root.command("status", run=noop)
    greet = root.find_child("greet")
    with pytest.raises(CommandAlreadyExistsError):
        greet.command("howdy", aliases=["hi"], run=noop)


def test_same_name_under_different_parents_is_allowed():
    root = build_tree()
    root.command("hello", run=noop)
    assert root.find_child("hello") is not None


def test_children_passed_at_construction_are_checked():
    with pytest.raises(CommandAlreadyExistsError):
        Command(
            name="app",
            children=[Command(name="a", run=noop), Command(name="a", run=noop)],
        )


def test_cycle_is_rejected():
    root = build_tree()
    greet = root.find_child("greet")
    with pytest.raises(BriskError):
        greet.add_command(root)
    with pytest.raises(BriskError):
        root.add_command(root)


def test_invalid_names():
    with pytest.raises(BriskError):
        Command(name="")
    with pytest.raises(BriskError):
        Command(name="two words")
    with pytest.raises(BriskError):
        Command(name="-x")
    with pytest.raises(BriskError):
        Command(name="ok", aliases=["bad alias"])


def test_non_callable_hook():
    with pytest.raises(InvalidHookError):
        Command(name="x", run="not callable")


def test_sync_hooks_are_wrapped():
    command = Command(name="x", run=lambda ctx: 42)
    assert not command.is_router


def test_arguments_order_enforced():
    command = Command(name="copy", run=noop)
    command.add_argument("src", required=False)
    with pytest.raises(InvalidArgumentError):
        command.add_argument("dst", required=True)


def test_check_rejects_empty_router():
    root = Command(name="app")
    root.command("empty")
    with pytest.raises(InvalidHookError):
        root.check()


def test_check_detects_flag_collisions_on_a_path():
    root = Command(name="app")
    root.add_flag("verbose", short="v", kind="bool")
    child = root.command("deploy", run=noop)
    child.add_flag("version", short="v", kind="bool")
    with pytest.raises(FlagAlreadyExistsError):
        root.check()


def test_visible_children_and_walk():
    root = build_tree()
    root.command("secret", hidden=True, run=noop)
    assert [child.name for child in root.visible_children()] == ["greet", "status"]
    walked = [" ".join(c.name for c in path) for path in root.walk()]
    assert walked == [
        "app",
        "app greet",
        "app greet hello",
        "app greet bye",
        "app status",
        "app secret",
    ]
