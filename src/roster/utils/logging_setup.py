"""
Roster Engine: Logging Infrastructure
=====================================
Console and rotating-file logging for the ``roster`` logger hierarchy,
plus the helpers the engine uses to narrate a run.

Levels:
    TRACE (5): Function entry/exit with arguments
    DEBUG (10): Offsets, scores, repair moves
    INFO (20): Progress, key decisions
    WARNING (30): Broken constraints, infeasible floors
    ERROR (40): Configuration failures, exceptions
"""
import functools
import logging
import sys
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

ROOT_LOGGER = "roster"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def trace(self, message, *args, **kwargs):
    """Log at TRACE level."""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


logging.Logger.trace = trace

CONSOLE_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"

# -v count on the command line -> console level
VERBOSITY_LEVELS = {0: "WARNING", 1: "INFO", 2: "DEBUG"}


class ColoredFormatter(logging.Formatter):
    """Level-colored console output; plain text when stderr is not a terminal."""

    COLORS = {
        TRACE: "\033[90m",
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        message = super().format(record)
        color = self.COLORS.get(record.levelno)
        if color and sys.stderr.isatty():
            return f"{color}{message}{self.RESET}"
        return message


def level_number(name: str) -> int:
    """Level number for a name, TRACE included; INFO when unknown."""
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else logging.INFO


def verbosity_level(count: int) -> str:
    """Console level name for a number of -v flags."""
    return VERBOSITY_LEVELS.get(count, "TRACE" if count > 2 else "WARNING")


def _console_handler(level: int) -> logging.Handler:
    # stderr, so JSON printed on stdout stays parseable
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    return handler


def _file_handler(path: Path, level: int, max_bytes: int, backup_count: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console_level: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,  # 5 MB
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure the ``roster`` logger. Calling it again replaces the handlers.

    Args:
        level: Minimum log level for file output
        log_file: Path to log file (None = no file logging)
        console_level: Console log level (defaults to level)
        max_bytes: Max size before rotation
        backup_count: Number of backup files to keep

    Returns:
        The ``roster`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(TRACE)  # Handlers filter
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    console = level_number(console_level or level)
    logger.addHandler(_console_handler(console))

    if log_file:
        logger.addHandler(_file_handler(Path(log_file), level_number(level), max_bytes, backup_count))

    logger.debug(
        f"Logging initialized: console={logging.getLevelName(console)}, "
        f"file={log_file or 'disabled'}"
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Dotted logger name (e.g., "roster.engine.ratio")
    """
    return logging.getLogger(name)


def _short(value: Any, limit: int) -> str:
    text = repr(value)
    return text if len(text) <= limit else text[:limit - 3] + "..."


def log_function_call(func: Callable) -> Callable:
    """
    Log entry, exit and exceptions of an engine entry point at TRACE level.

    Usage:
        @log_function_call
        def compute_task_floor(tasks):
            ...
    """
    logger = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if logger.isEnabledFor(TRACE):
            shown = [_short(a, 50) for a in args[:3]]
            shown += [f"{k}={_short(v, 30)}" for k, v in list(kwargs.items())[:3]]
            logger.log(TRACE, f"→ {func.__name__}({', '.join(shown)})")

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"✖ {func.__name__} raised: {type(e).__name__}: {e}")
            raise

        logger.log(TRACE, f"← {func.__name__} returned: {_short(result, 100)}")
        return result

    return wrapper


def log_check(
    logger: logging.Logger,
    name: str,
    ok: bool,
    details: str = "",
    level: int = logging.INFO,
):
    """Log the outcome of a roster check; failures go out as warnings."""
    msg = f"[{'✓' if ok else '✗'}] {name}"
    if details:
        msg += f": {details}"
    logger.log(level if ok else logging.WARNING, msg)


class RunLogger:
    """Narrates the phases of a roster run."""

    def __init__(self, name: str = "roster.engine"):
        self.logger = logging.getLogger(name)
        self.depth = 0

    def _indent(self) -> str:
        return "  " * self.depth

    def phase(self, title: str):
        self.logger.info(f"{'=' * 20} {title} {'=' * 20}")

    def step(self, description: str):
        self.logger.info(f"{self._indent()}▸ {description}")

    def detail(self, key: str, value: Any):
        self.logger.debug(f"{self._indent()}  {key}: {value}")

    def check(self, name: str, ok: bool, details: str = ""):
        log_check(self.logger, name, ok, details)

    @contextmanager
    def section(self, title: str) -> Iterator["RunLogger"]:
        """Indent everything logged inside the block."""
        self.logger.debug(f"{self._indent()}┌─ {title}")
        self.depth += 1
        try:
            yield self
        finally:
            self.depth -= 1
            self.logger.debug(f"{self._indent()}└─ {title}")
