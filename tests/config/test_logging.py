"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from vaultbridge.config.logging import batch_context, configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("vaultbridge").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("vaultbridge").level == logging.WARNING

    def test_quiet_raises_threshold(self) -> None:
        configure_logging(quiet=True)
        assert logging.getLogger("vaultbridge").level == logging.ERROR

    def test_verbose_wins_over_quiet(self) -> None:
        configure_logging(verbose=True, quiet=True)
        assert logging.getLogger("vaultbridge").level == logging.DEBUG

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("vaultbridge.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "vaultbridge.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("vaultbridge.domain.resolve_import").debug("Import resolution: 1")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Import resolution: 1"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "vaultbridge.domain.resolve_import"

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("urllib3").debug("noise")
        assert capfd.readouterr().err == ""

    def test_quiet_mode_drops_debug(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("vaultbridge.domain.indices").debug("Not indexing A.md")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1


class TestBatchContext:
    def test_binds_direction_and_size(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)

        with batch_context("import", 3):
            logging.getLogger("vaultbridge.domain.resolve_import").warning("Unresolved link")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Unresolved link"
        assert parsed["direction"] == "import"
        assert parsed["documents"] == 3

    def test_context_cleared_on_exit(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)

        with batch_context("export", 1):
            pass
        logging.getLogger("vaultbridge.services").warning("after")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert "direction" not in parsed
