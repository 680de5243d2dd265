"""
Deployment example with interactive prompts and structured output.

    python examples/deploy.py deploy web --replicas 3
    python examples/deploy.py deploy web -f json
    DEPLOY_REGION=eu-west-1 python examples/deploy.py status
    python examples/deploy.py deploy --help
"""
import sys
from datetime import datetime

from brisk import App, HookType
from brisk.prompt import SelectOption, words_source
from brisk.validators import matches

SERVICES = ["web", "worker", "scheduler", "webhooks"]


async def confirm_deploy(ctx):
    if ctx.prompter is None or ctx.flag("yes"):
        return
    if not await ctx.prompter.confirm(f"Deploy {ctx.arg('service')}?", default=True):
        ctx.cancel()


async def deploy(ctx):
    if ctx.cancelled:
        ctx.console.print("Nothing deployed.")
        return None
    environment = ctx.flag("environment")
    if environment is None and ctx.prompter is not None:
        environment = await ctx.prompter.select(
            "Environment",
            [SelectOption("Staging", "stage"), SelectOption("Production", "prod")],
        )
    checks = []
    if ctx.prompter is not None:
        checks = await ctx.prompter.multiselect(
            "Checks to run", ["lint", "unit", "smoke"], default=["unit"]
        )
    summary = {
        "service": ctx.arg("service"),
        "environment": environment,
        "replicas": ctx.flag("replicas"),
        "timeout": ctx.flag("timeout"),
        "checks": checks,
        "started": datetime.now(),
    }
    ctx.output(summary)
    return summary


async def status(ctx):
    ctx.output(
        [
            {"service": service, "region": ctx.flag("region"), "healthy": True}
            for service in SERVICES
        ]
    )


async def new_service(ctx):
    if ctx.prompter is None:
        ctx.console.print("Run this command in a terminal.")
        return
    name = await ctx.prompter.text(
        "Service name",
        validator=matches(r"[a-z][a-z0-9-]*", "Use lowercase letters, digits and '-'"),
        completion_source=words_source(SERVICES),
    )
    ctx.console.print(f"Created {name}.")


def report(context):
    context.context.console.print(context.to_log_line(), style="dim", markup=False)


def build_app() -> App:
    app = App("deploy", description="Ship services.", version="2.0.0")
    app.add_flag("region", default="us-east-1", help="Cloud region")
    app.register_hook(HookType.AFTER, report)

    command = app.command(
        "deploy",
        short="Deploy a service",
        long="Deploy a service, asking for anything not given on the command line.",
        pre=confirm_deploy,
        run=deploy,
    )
    command.add_argument("service", prompt="Service", required=True)
    command.add_flag("replicas", short="r", kind="int", default=1, help="Replica count")
    command.add_flag("timeout", kind="duration", default="5m", help="Rollout timeout")
    command.add_flag(
        "environment", short="e", choices=["stage", "prod"], help="Target environment"
    )
    command.add_flag("yes", short="y", kind="bool", help="Skip confirmation")

    app.command("status", aliases=["st"], short="Show service status", run=status)
    app.command("new", short="Create a service", run=new_service)
    return app


if __name__ == "__main__":
    sys.exit(build_app().main())
