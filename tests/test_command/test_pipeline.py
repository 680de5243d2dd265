import pytest

from brisk.command import Command
from brisk.context import ResolvedContext
from brisk.exceptions import CommandRequiredError, InvalidHookError
from brisk.hook_manager import HookManager, HookType
from brisk.pipeline import ExecutionPipeline


def recorder(calls, name, result=None, error=None):
    async def hook(ctx):
        calls.append(name)
        if error is not None:
            raise error
        return result

    return hook


def make_context(command: Command) -> ResolvedContext:
    return ResolvedContext(path=("app", command.name), command=command)


@pytest.mark.asyncio
async def test_pre_run_post_order():
    calls = []
    command = Command(
        name="deploy",
        pre=recorder(calls, "pre"),
        run=recorder(calls, "run", result="done"),
        post=recorder(calls, "post"),
    )
    pipeline = ExecutionPipeline()
    result = await pipeline.execute(command, make_context(command))
    assert result == "done"
    assert calls == ["pre", "run", "post"]
    assert pipeline.last_context.success
    assert pipeline.last_context.result == "done"


@pytest.mark.asyncio
async def test_pre_failure_aborts():
    calls = []
    command = Command(
        name="deploy",
        pre=recorder(calls, "pre", error=RuntimeError("no")),
        run=recorder(calls, "run"),
        post=recorder(calls, "post"),
    )
    with pytest.raises(RuntimeError, match="no"):
        await ExecutionPipeline().execute(command, make_context(command))
    assert calls == ["pre"]


@pytest.mark.asyncio
async def test_run_failure_skips_post():
    calls = []
    command = Command(
        name="deploy",
        run=recorder(calls, "run", error=ValueError("bad")),
        post=recorder(calls, "post"),
    )
    pipeline = ExecutionPipeline()
    with pytest.raises(ValueError):
        await pipeline.execute(command, make_context(command))
    assert calls == ["run"]
    assert pipeline.last_context.phase == "run"
    assert isinstance(pipeline.last_context.exception, ValueError)


@pytest.mark.asyncio
async def test_post_failure_keeps_run_result():
    calls = []
    command = Command(
        name="deploy",
        run=recorder(calls, "run", result=7),
        post=recorder(calls, "post", error=KeyError("post")),
    )
    pipeline = ExecutionPipeline()
    with pytest.raises(KeyError):
        await pipeline.execute(command, make_context(command))
    assert calls == ["run", "post"]
    assert pipeline.last_context.result == 7


@pytest.mark.asyncio
async def test_sync_hooks_run():
    command = Command(name="add", run=lambda ctx: 1 + 1)
    assert await ExecutionPipeline().execute(command, make_context(command)) == 2


@pytest.mark.asyncio
async def test_router_cannot_execute():
    command = Command(name="group", children=[Command(name="leaf", run=lambda ctx: 1)])
    with pytest.raises(CommandRequiredError) as excinfo:
        await ExecutionPipeline().execute(command, make_context(command))
    assert excinfo.value.choices == ("leaf",)


@pytest.mark.asyncio
async def test_observer_hooks():
    seen = []
    app_hooks = HookManager()
    app_hooks.register(HookType.BEFORE, lambda context: seen.append(("before", context.name)))
    app_hooks.register("success", lambda context: seen.append(("success", context.result)))
    app_hooks.register(HookType.AFTER, lambda context: seen.append(("after", context.status)))

    def broken_observer(context):
        raise RuntimeError("observer failure")

    command = Command(name="deploy", run=lambda ctx: "ok")
    command.hooks.register(HookType.BEFORE, broken_observer)

    result = await ExecutionPipeline([app_hooks]).execute(command, make_context(command))
    assert result == "ok"
    assert seen == [("before", "app deploy"), ("success", "ok"), ("after", "OK")]


@pytest.mark.asyncio
async def test_error_observer():
    seen = []
    hooks = HookManager()
    hooks.register("error", lambda context: seen.append(type(context.exception)))
    hooks.register(HookType.AFTER, lambda context: seen.append(context.status))
    command = Command(name="deploy", run=recorder([], "run", error=OSError("disk")))
    with pytest.raises(OSError):
        await ExecutionPipeline([hooks]).execute(command, make_context(command))
    assert seen == [OSError, "ERROR"]


def test_register_rejects_non_callable():
    with pytest.raises(InvalidHookError):
        HookManager().register(HookType.BEFORE, "nope")
