import io

from brisk import App, StreamPrompter


def make_app(stdin_text: str = "") -> tuple[App, io.StringIO]:
    stdout = io.StringIO()
    app = App(
        "tool",
        environ={},
        stdin=io.StringIO(),
        stdout=stdout,
        prompter=StreamPrompter(stdin=io.StringIO(stdin_text), stdout=stdout),
    )

    def fail(ctx):
        raise RuntimeError("disk full")

    ask = app.command("ask", run=lambda ctx: ctx.arg("name"))
    ask.add_argument("name", required=True)
    app.command("fail", run=fail)
    app.command("ok", run=lambda ctx: "fine")
    return app, stdout


def test_success_exit_code():
    app, _ = make_app()
    assert app.main(["ok"]) == 0


def test_help_exit_code():
    app, stdout = make_app()
    assert app.main(["--help"]) == 0
    assert "usage:" in stdout.getvalue()


def test_version_exit_code():
    app, _ = make_app()
    assert app.main(["--version"]) == 0


def test_usage_error_exit_code_and_hint():
    app, stdout = make_app()
    assert app.main(["nope"]) == 1
    output = stdout.getvalue()
    assert "unknown command 'nope' for 'tool'" in output
    assert "Run 'tool --help' for usage." in output


def test_hook_error_exit_code():
    app, stdout = make_app()
    assert app.main(["fail"]) == 1
    assert "disk full" in stdout.getvalue()


def test_cancelled_prompt_exit_code():
    app, _ = make_app("")
    assert app.main(["ask"]) == 130


def test_prompted_argument_exit_code():
    app, _ = make_app("Alice\n")
    assert app.main(["ask"]) == 0


def test_invalid_tree_exit_code():
    app, _ = make_app()
    app.command("empty-router")
    assert app.main(["ok"]) == 1
