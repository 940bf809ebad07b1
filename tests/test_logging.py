"""
Tests for versiongate.logging module.
"""

from __future__ import annotations

import io

from versiongate.logging import (
    DefaultLogger,
    SilentLogger,
    get_global_logger,
    get_logger,
    set_global_logger,
)


class TestDefaultLogger:
    """Tests for DefaultLogger output levels."""

    def test_step_always_printed(self, capsys):
        """Test step lines are printed without verbose."""
        DefaultLogger().step(2, 3, "Selecting requirement...")
        assert capsys.readouterr().out == "[2/3] Selecting requirement...\n"

    def test_verbose_only_when_enabled(self, capsys):
        """Test verbose lines need verbose mode."""
        DefaultLogger().verbose("DECISION", "hidden")
        DefaultLogger(verbose=True).verbose("DECISION", "shown")
        assert capsys.readouterr().out == "[DECISION] shown\n"

    def test_debug_implies_verbose(self, capsys):
        """Test debug mode prints both debug and verbose lines."""
        logger = DefaultLogger(debug=True)
        logger.verbose("FETCH", "GET url")
        logger.debug("ROLLOUT", "position=00")
        assert capsys.readouterr().out == "[FETCH] GET url\n[ROLLOUT] position=00\n"

    def test_verbose_hides_debug(self, capsys):
        """Test verbose mode alone does not print debug lines."""
        DefaultLogger(verbose=True).debug("ROLLOUT", "position=00")
        assert capsys.readouterr().out == ""

    def test_custom_stream(self, capsys):
        """Test output can be sent to another stream."""
        stream = io.StringIO()
        logger = get_logger(verbose=True, stream=stream)
        logger.step(1, 1, "Loading...")
        logger.verbose("BUILD", "version=v1.0.0")
        assert stream.getvalue() == "[1/1] Loading...\n[BUILD] version=v1.0.0\n"
        assert capsys.readouterr().out == ""


class TestGlobalLogger:
    """Tests for the global logger."""

    def test_default_is_silent(self):
        """Test the global logger is silent unless configured."""
        assert isinstance(get_global_logger(), SilentLogger)

    def test_set_global_logger(self):
        """Test the global logger can be replaced."""
        logger = get_logger(verbose=True)
        set_global_logger(logger)
        assert get_global_logger() is logger

    def test_silent_logger_prints_nothing(self, capsys):
        """Test SilentLogger produces no output."""
        logger = SilentLogger()
        logger.step(1, 2, "x")
        logger.verbose("X", "x")
        logger.debug("X", "x")
        assert capsys.readouterr().out == ""
