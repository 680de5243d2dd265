import io

from rich.console import Console

from brisk.command import Command
from brisk.exceptions import UnknownFlagError
from brisk.help import HelpRenderer


def make_renderer() -> tuple[HelpRenderer, io.StringIO]:
    stream = io.StringIO()
    return HelpRenderer(Console(file=stream, width=100)), stream


def build_tree() -> Command:
    root = Command(name="app", long="Application root.")
    root.add_flag("help", short="h", kind="bool", help="Show help and exit.")
    deploy = root.command("deploy", short="Deploy a service", run=lambda ctx: None)
    deploy.add_flag("force", kind="bool", help="Skip confirmation")
    deploy.add_flag("replicas", short="r", kind="int", default=2, help="Replica count")
    deploy.add_flag("secret", hidden=True)
    deploy.add_argument("service", required=True, help="Service to deploy")
    deploy.add_argument("region")
    root.command("internal", hidden=True, run=lambda ctx: None)
    return root


def test_root_help_lists_commands():
    renderer, stream = make_renderer()
    root = build_tree()
    renderer.render([root])
    output = stream.getvalue()
    assert "usage: app <command> [flags]" in output
    assert "Application root." in output
    assert "commands:" in output
    assert "Deploy a service" in output
    assert "internal" not in output
    assert "options:" in output
    assert "global options:" not in output


def test_leaf_help_lists_arguments_and_flags():
    renderer, stream = make_renderer()
    root = build_tree()
    path, _ = root.resolve(["deploy"])
    renderer.render(path)
    output = stream.getvalue()
    assert "usage: app deploy [flags] <service> [region]" in output
    assert "positional:" in output
    assert "Service to deploy" in output
    assert "--force, --no-force" in output
    assert "-r, --replicas <integer>" in output
    assert "default: 2" in output
    assert "--secret" not in output
    assert "global options:" in output
    assert "-h, --help" in output


def test_usage_plain_text():
    renderer, _ = make_renderer()
    path, _ = build_tree().resolve(["deploy"])
    assert renderer.get_usage(path, plain_text=True) == (
        "app deploy [flags] <service> [region]"
    )


def test_render_error():
    renderer, stream = make_renderer()
    renderer.render_error(UnknownFlagError("--forse", ["--force"], ("app", "deploy")))
    output = stream.getvalue()
    assert "error:" in output
    assert "Did you mean one of: --force?" in output
    assert "Run 'app deploy --help' for usage." in output
