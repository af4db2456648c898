"""Tests for structured logging configuration."""

from __future__ import annotations

import json

import pytest
import structlog

from aquarium_arena.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults and context after each test."""
    yield
    clear_context()
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging and the context helpers."""

    def test_json_output(self, capsys) -> None:
        """Test JSON mode emits one parseable record with app context."""
        configure_logging(level="INFO", json_format=True)

        get_logger("aquarium_arena.test").info("Shop rerolled", cost=2)

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "Shop rerolled"
        assert record["cost"] == 2
        assert record["level"] == "info"
        assert record["app"] == "aquarium_arena"
        assert "timestamp" in record

    def test_level_filters(self, capsys) -> None:
        """Test records below the configured level are dropped."""
        configure_logging(level="WARNING", json_format=True)

        get_logger("aquarium_arena.test").info("Command rejected")

        assert "Command rejected" not in capsys.readouterr().out

    def test_bound_context(self, capsys) -> None:
        """Test bound context appears until cleared."""
        configure_logging(level="INFO", json_format=True)
        logger = get_logger("aquarium_arena.test")

        bind_context(campaign_round=4)
        logger.info("Round complete")
        clear_context()
        logger.info("Campaign finished")

        lines = [json.loads(line) for line in capsys.readouterr().out.strip().splitlines()]
        assert lines[-2]["campaign_round"] == 4
        assert "campaign_round" not in lines[-1]

    def test_defaults_from_settings(self, tmp_path, monkeypatch, capsys) -> None:
        """Test level and format fall back to the application settings."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("AQUARIUM_ARENA_LOG_LEVEL", "WARNING")

        configure_logging()
        logger = get_logger("aquarium_arena.test")
        logger.info("Shop rerolled")
        logger.warning("Drafting for a non-opponent side")

        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "Drafting for a non-opponent side"

    def test_debug_selects_console_output(self, tmp_path, monkeypatch, capsys) -> None:
        """Test debug mode renders for the console instead of JSON."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("AQUARIUM_ARENA_DEBUG", "true")

        configure_logging()
        get_logger("aquarium_arena.test").info("Battle started")

        output = capsys.readouterr().out
        assert "Battle started" in output
        assert not output.lstrip().startswith("{")
