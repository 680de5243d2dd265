import io

import pytest

from brisk.prompt import PromptSpec, StreamPrompter, default_prompter
from brisk.signals import CancelReason, CancelSignal
from brisk.validators import contains


def make_prompter(text: str) -> tuple[StreamPrompter, io.StringIO]:
    stdout = io.StringIO()
    return StreamPrompter(stdin=io.StringIO(text), stdout=stdout), stdout


@pytest.mark.asyncio
async def test_text_reprompts_on_empty_line():
    prompter, stdout = make_prompter("\nAlice\n")
    assert await prompter.text("Name") == "Alice"
    output = stdout.getvalue()
    assert output.count("Name") == 2
    assert "A value is required." in output


@pytest.mark.asyncio
async def test_text_validator_reprompt():
    prompter, stdout = make_prompter("bob\nbob@example.com\n")
    result = await prompter.text("Email", validator=contains("@", "Enter an e-mail"))
    assert result == "bob@example.com"
    assert "Enter an e-mail" in stdout.getvalue()


@pytest.mark.asyncio
async def test_text_default_on_empty_line():
    prompter, stdout = make_prompter("\n")
    assert await prompter.text("Region", default="eu") == "eu"
    assert "[eu]" in stdout.getvalue()


@pytest.mark.asyncio
async def test_confirm():
    prompter, _ = make_prompter("what\nY\n")
    assert await prompter.confirm("Continue?") is True


@pytest.mark.asyncio
async def test_select_by_number_and_label():
    prompter, stdout = make_prompter("2\n")
    assert await prompter.select("Env", ["dev", "prod"]) == "prod"
    assert "1. dev" in stdout.getvalue()

    prompter, _ = make_prompter("DEV\n")
    assert await prompter.select("Env", ["dev", "prod"]) == "dev"


@pytest.mark.asyncio
async def test_multiselect_line_mode():
    prompter, stdout = make_prompter("1 3\n1\ndone\n")
    result = await prompter.multiselect("Pick", ["a", "b", "c"])
    assert result == ["c"]
    assert "[x] c" in stdout.getvalue()


@pytest.mark.asyncio
async def test_end_of_input_cancels():
    prompter, _ = make_prompter("")
    with pytest.raises(CancelSignal) as excinfo:
        await prompter.text("Name")
    assert excinfo.value.reason is CancelReason.END_OF_INPUT


@pytest.mark.asyncio
async def test_read_error_cancels():
    stdin = io.StringIO("Alice\n")
    stdin.close()
    prompter = StreamPrompter(stdin=stdin, stdout=io.StringIO())
    with pytest.raises(CancelSignal) as excinfo:
        await prompter.prompt(PromptSpec(label="Name"))
    assert excinfo.value.reason is CancelReason.READ_ERROR


def test_default_prompter_requires_tty():
    assert default_prompter(io.StringIO()) is None
