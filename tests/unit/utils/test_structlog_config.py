import logging
import os
import subprocess
import sys

import pytest
import structlog
from structlog.testing import capture_logs

from querycoder import QueryCoder, QueryHandler
from querycoder.constants import LogFormat, LogLevel
from querycoder.settings import Settings
from querycoder.utils.structlog_config import (
    LOGGER_NAMESPACE,
    StructlogConfig,
    configure_structlog,
    get_logger,
    structlog_config,
)


@pytest.fixture
def _restore_structlog():
    yield
    configure_structlog(Settings.load())


@pytest.mark.unit
@pytest.mark.usefixtures("_restore_structlog")
def test_configure_structlog_applies_settings() -> None:
    settings = Settings(QUERYCODER_LOG_LEVEL="debug", QUERYCODER_LOG_FORMAT="json")

    configure_structlog(settings)

    assert structlog_config.settings is settings
    assert logging.getLogger(LOGGER_NAMESPACE).level == logging.DEBUG
    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)


@pytest.mark.unit
def test_structlog_config_is_idempotent_without_force() -> None:
    config = StructlogConfig()
    first = Settings(QUERYCODER_LOG_LEVEL="error")

    config.configure(first)
    config.configure(Settings(QUERYCODER_LOG_LEVEL="debug"))

    assert config.settings is first
    assert config.settings.log_level is LogLevel.ERROR
    configure_structlog(Settings.load())


@pytest.mark.unit
def test_console_renderer_is_default() -> None:
    settings = Settings.load()

    assert settings.log_format is LogFormat.CONSOLE
    assert isinstance(StructlogConfig._get_renderer(settings), structlog.dev.ConsoleRenderer)


@pytest.mark.unit
def test_decode_logs_unresolved_and_ignored_keys() -> None:
    coder = QueryCoder(
        {
            "game": QueryHandler(query="game"),
            "wow": QueryHandler(query="dungeon", decode_condition={"game": "Wow"}),
            "lost_ark": QueryHandler(query="dungeon", decode_condition={"game": "LostArk"}),
        },
    )

    with capture_logs() as logs:
        coder.decode("game=Diablo&dungeon=X&extra=1")

    events = {entry["event"]: entry for entry in logs}
    assert events["query_key_unresolved"]["query_key"] == "dungeon"
    assert events["query_key_unresolved"]["candidates"] == 2
    assert events["query_keys_ignored"]["query_keys"] == ["extra"]


@pytest.mark.unit
@pytest.mark.usefixtures("_restore_structlog")
def test_get_logger_leaves_host_configuration_untouched() -> None:
    host_processors = [structlog.processors.KeyValueRenderer()]
    structlog.configure(processors=host_processors)

    get_logger("querycoder.host")
    QueryCoder({"game": QueryHandler(query="game")}).decode("game=Wow")

    assert structlog.get_config()["processors"] == host_processors


@pytest.mark.unit
@pytest.mark.parametrize("log_level", ["verbose", "DEBUG"])
def test_import_does_not_configure_logging_or_read_settings(log_level) -> None:
    script = (
        "import structlog\n"
        "host = [structlog.processors.KeyValueRenderer()]\n"
        "structlog.configure(processors=host)\n"
        "import querycoder\n"
        "coder = querycoder.QueryCoder({'game': querycoder.QueryHandler(query='game')})\n"
        "assert coder.decode('game=Wow') == {'game': 'Wow'}\n"
        "assert structlog.get_config()['processors'] == host\n"
    )
    env = {**os.environ, "QUERYCODER_LOG_LEVEL": log_level}

    completed = subprocess.run(
        [sys.executable, "-c", script],
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )

    assert completed.returncode == 0, completed.stderr
