"""Tests for logging configuration."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from javardry_spoiler.core.exceptions import ConfigurationError
from javardry_spoiler.core.logging import (
    MAX_VALUE_LENGTH,
    bind_context,
    clear_context,
    close_log_file,
    configure_logging,
    get_logger,
    level_number,
    tool_context,
    truncate_long_values,
)


class TestLevelNumber:
    """Tests for level name conversion."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("Warning", logging.WARNING),
        ],
    )
    def test_known_levels(self, name: str, expected: int) -> None:
        """Test level names are case-insensitive."""
        assert level_number(name) == expected

    def test_unknown_level(self) -> None:
        """Test an unknown name is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            level_number("verbose")

        assert exc_info.value.details["config_key"] == "log_level"


class TestProcessors:
    """Tests for the custom event processors."""

    def test_truncate_long_values(self) -> None:
        """Test long strings are cut and short ones kept."""
        raw = "x" * (MAX_VALUE_LENGTH + 40)
        event = truncate_long_values(None, "info", {"event": "e", "raw": raw, "key": "Item0"})

        assert event["key"] == "Item0"
        assert event["raw"].startswith("x" * MAX_VALUE_LENGTH + "...")
        assert event["raw"].endswith(f"({MAX_VALUE_LENGTH + 40} chars)")

    def test_event_name_never_truncated(self) -> None:
        """Test the event message itself is left alone."""
        message = "m" * (MAX_VALUE_LENGTH * 2)

        assert truncate_long_values(None, "info", {"event": message})["event"] == message

    def test_tool_context(self) -> None:
        """Test the tool key is added without overriding an explicit one."""
        add_tool = tool_context("javardry-spoil")

        assert add_tool(None, "info", {"event": "e"})["tool"] == "javardry-spoil"
        assert add_tool(None, "info", {"event": "e", "tool": "other"})["tool"] == "other"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test JSON events carry level, tool and bound context."""
        configure_logging(level="INFO", json_format=True, tool="javardry-decrypt")
        clear_context()
        bind_context(source_file="gameData.dat")

        get_logger(__name__).info("Scenario loaded", items=3)
        clear_context()

        captured = capsys.readouterr()
        assert captured.out == ""
        event = json.loads(captured.err.strip().splitlines()[-1])
        assert event["event"] == "Scenario loaded"
        assert event["level"] == "info"
        assert event["tool"] == "javardry-decrypt"
        assert event["source_file"] == "gameData.dat"
        assert event["items"] == 3

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test events below the configured level are dropped."""
        configure_logging(level="WARNING", json_format=True)

        get_logger(__name__).info("hidden")
        get_logger(__name__).warning("shown")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err

    def test_log_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test events go to the log file instead of stderr."""
        log_file = tmp_path / "spoil.log"
        configure_logging(level="DEBUG", json_format=True, log_file=log_file)

        get_logger(__name__).debug("Decoded entity sequence", entity="item", count=2)

        assert "Decoded entity sequence" not in capsys.readouterr().err
        event = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert event["entity"] == "item"
        assert event["count"] == 2

    def test_reconfigure_closes_previous_file(self, tmp_path: Path) -> None:
        """Test each configuration closes the log file opened by the one before."""
        from javardry_spoiler.core import logging as spoiler_logging

        configure_logging(log_file=tmp_path / "first.log")
        first = spoiler_logging._log_file
        configure_logging(log_file=tmp_path / "second.log")
        second = spoiler_logging._log_file
        configure_logging()

        assert first is not None and first.closed
        assert second is not None and second.closed
        assert spoiler_logging._log_file is None

    def test_stdlib_shares_log_file(self, tmp_path: Path) -> None:
        """Test stdlib records and structlog events land in one file, once each."""
        log_file = tmp_path / "shared.log"
        configure_logging(level="INFO", json_format=True, log_file=log_file)

        logging.getLogger("third.party").warning("stdlib record")
        get_logger(__name__).info("structlog event")
        close_log_file()

        text = log_file.read_text(encoding="utf-8")
        assert text.count("stdlib record") == 1
        assert text.count("structlog event") == 1

    def test_unknown_level_rejected(self) -> None:
        """Test configuration fails before touching any logger."""
        with pytest.raises(ConfigurationError):
            configure_logging(level="loud")
