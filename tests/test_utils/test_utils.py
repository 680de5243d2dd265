import logging

import pytest
from rich.logging import RichHandler

from brisk.utils import ensure_async, env_key, setup_logging, title_label


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.asyncio
async def test_ensure_async_wraps_sync_function():
    wrapped = ensure_async(lambda x: x * 2)
    assert await wrapped(4) == 8


@pytest.mark.asyncio
async def test_ensure_async_keeps_coroutine_function():
    async def double(x):
        return x * 2

    assert ensure_async(double) is double
    assert await double(3) == 6


def test_ensure_async_rejects_non_callable():
    with pytest.raises(TypeError):
        ensure_async(42)


def test_env_key():
    assert env_key("myapp", "log-level") == "MYAPP_LOG_LEVEL"
    assert env_key("my-app", "port") == "MY_APP_PORT"
    assert env_key("", "dry_run") == "DRY_RUN"
    assert env_key(None, "port") == "PORT"


def test_title_label():
    assert title_label("first-name") == "First Name"
    assert title_label("service_id") == "Service Id"
    assert title_label("") == "Value"


def test_setup_logging_cli_mode(restore_root_logger):
    setup_logging(mode="cli", log_filename=None)
    assert any(isinstance(h, RichHandler) for h in restore_root_logger.handlers)


def test_setup_logging_json_mode_writes_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "brisk.log"
    setup_logging(mode="json", log_filename=str(log_file), json_log_to_file=True)
    logging.getLogger("brisk").info("hello from brisk")
    for handler in restore_root_logger.handlers:
        handler.flush()
    assert '"message": "hello from brisk"' in log_file.read_text()


def test_setup_logging_invalid_mode(restore_root_logger):
    with pytest.raises(ValueError):
        setup_logging(mode="xml", log_filename=None)
