"""
Greeter example.

    python examples/greet.py greet hello Alice
    python examples/greet.py greet hi --shout
    GREETER_SHOUT=yes python examples/greet.py greet hello name=Bob
    python examples/greet.py --help
"""
import sys

from brisk import App
from brisk.utils import setup_logging


async def hello(ctx):
    greeting = f"Hello, {ctx.arg('name')}!"
    if ctx.flag("shout"):
        greeting = greeting.upper()
    ctx.console.print(greeting)
    return greeting


async def bye(ctx):
    ctx.console.print(f"Goodbye, {ctx.arg('name')}.")


def build_app() -> App:
    app = App("greeter", description="Say hello and goodbye.", logging_hooks=True)
    greet = app.command("greet", short="Greetings")
    greet.add_flag("shout", short="s", kind="bool", help="Shout the greeting")

    hello_command = greet.command("hello", aliases=["hi"], short="Say hello", run=hello)
    hello_command.add_argument("name", prompt="Who should I greet?", required=True)

    bye_command = greet.command("bye", short="Say goodbye", run=bye)
    bye_command.add_argument("name", default="friend")
    return app


if __name__ == "__main__":
    setup_logging(log_filename=None)
    sys.exit(build_app().main())
