"""Tests for logging infrastructure."""
import logging

import pytest

from roster.utils.logging_setup import (
    RunLogger,
    TRACE,
    get_logger,
    level_number,
    log_check,
    log_function_call,
    setup_logging,
    verbosity_level,
)


@pytest.fixture
def roster_logger():
    """Yield setup_logging and close whatever handlers it attached."""
    yield setup_logging
    for handler in list(logging.getLogger("roster").handlers):
        handler.close()
        logging.getLogger("roster").removeHandler(handler)


class TestLoggingSetup:
    """Handler wiring of setup_logging."""

    def test_console_and_file(self, tmp_path, roster_logger):
        logger = roster_logger(level="DEBUG", log_file=str(tmp_path / "run.log"))
        assert logger.name == "roster"
        assert len(logger.handlers) == 2

    def test_log_directory_created(self, tmp_path, roster_logger):
        path = tmp_path / "logs" / "run.log"
        roster_logger(level="DEBUG", log_file=str(path)).info("Roster started")
        assert "Roster started" in path.read_text(encoding="utf-8")

    def test_console_only(self, roster_logger):
        assert len(roster_logger(level="INFO").handlers) == 1

    def test_repeated_setup_replaces_handlers(self, tmp_path, roster_logger):
        roster_logger(log_file=str(tmp_path / "a.log"))
        logger = roster_logger(log_file=str(tmp_path / "b.log"))
        assert len(logger.handlers) == 2

    def test_trace_level_name_accepted(self, roster_logger):
        assert roster_logger(level="TRACE").handlers[0].level == TRACE

    def test_unknown_level_falls_back_to_info(self, roster_logger):
        assert roster_logger(level="chatty").handlers[0].level == logging.INFO

    def test_level_helpers(self):
        assert logging.getLevelName(TRACE) == "TRACE"
        assert level_number("trace") == TRACE
        assert verbosity_level(0) == "WARNING"
        assert verbosity_level(2) == "DEBUG"
        assert verbosity_level(5) == "TRACE"

    def test_get_logger(self):
        assert get_logger("roster.engine.ratio").name == "roster.engine.ratio"

    def test_file_rotation(self, tmp_path, roster_logger):
        logger = roster_logger(level="DEBUG", log_file=str(tmp_path / "run.log"), max_bytes=1000, backup_count=2)
        for i in range(100):
            logger.info(f"Day {i}: " + "x" * 50)
        assert list(tmp_path.glob("run.log.*"))


class TestLogFunctionCall:
    """Tests for the function call decorator."""

    def test_decorator_logs_entry_exit(self, caplog):
        @log_function_call
        def add(a, b):
            return a + b

        with caplog.at_level(TRACE):
            assert add(1, 2) == 3

        assert "→ add(1, 2)" in caplog.text
        assert "← add returned: 3" in caplog.text

    def test_decorator_logs_exceptions(self, caplog):
        @log_function_call
        def fail():
            raise ValueError("test error")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(ValueError):
                fail()

        assert "fail raised: ValueError: test error" in caplog.text

    def test_decorator_preserves_function_name(self):
        @log_function_call
        def my_function():
            """Docstring."""

        assert my_function.__name__ == "my_function"
        assert my_function.__doc__ == "Docstring."


class TestLogCheck:
    def test_satisfied(self, caplog):
        logger = logging.getLogger("test")
        with caplog.at_level(logging.DEBUG):
            log_check(logger, "min_headcount", True, "2026-01-05")
        assert "✓" in caplog.text
        assert "min_headcount" in caplog.text

    def test_violated_goes_out_as_warning(self, caplog):
        logger = logging.getLogger("test")
        with caplog.at_level(logging.WARNING):
            log_check(logger, "never_assign", False, "p0 on 2026-01-07")
        assert "✗" in caplog.text
        assert caplog.records[-1].levelno == logging.WARNING


class TestRunLogger:
    def test_phase_logging(self, caplog):
        rlog = RunLogger("test.run")
        with caplog.at_level(logging.INFO):
            rlog.phase("Ratio strategy")
        assert "Ratio strategy" in caplog.text
        assert "=" in caplog.text

    def test_step_logging(self, caplog):
        rlog = RunLogger("test.run")
        with caplog.at_level(logging.INFO):
            rlog.step("Scoring offsets")
        assert "▸" in caplog.text

    def test_section(self, caplog):
        rlog = RunLogger("test.run")
        with caplog.at_level(logging.DEBUG):
            with rlog.section("Person p0"):
                rlog.detail("offset", 3)
                assert rlog.depth == 1
        assert "┌─ Person p0" in caplog.text
        assert "    offset: 3" in caplog.text
        assert "└─ Person p0" in caplog.text
        assert rlog.depth == 0

    def test_section_unwinds_on_error(self):
        rlog = RunLogger("test.run")
        with pytest.raises(RuntimeError):
            with rlog.section("failing"):
                raise RuntimeError("boom")
        assert rlog.depth == 0

    def test_check(self, caplog):
        rlog = RunLogger("test.run")
        with caplog.at_level(logging.INFO):
            rlog.check("minimum headcount", False, "2 day(s) below 3")
        assert caplog.records[-1].levelno == logging.WARNING
        assert "[✗] minimum headcount: 2 day(s) below 3" in caplog.text

    def test_generate_logs_phases(self, caplog):
        from datetime import date

        from roster.engine.generate import generate_roster
        from roster.models.person import Person

        with caplog.at_level(logging.INFO, logger="roster"):
            generate_roster(date(2026, 1, 5), date(2026, 1, 8), [Person(id="a")])
        assert "Roster 2026-01-05 .. 2026-01-08" in caplog.text
        assert "Running ratio strategy" in caplog.text

