"""Utilities package for the roster engine."""
from .logging_setup import (
    TRACE,
    RunLogger,
    get_logger,
    log_check,
    log_function_call,
    setup_logging,
    verbosity_level,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_function_call",
    "log_check",
    "verbosity_level",
    "RunLogger",
    "TRACE",
]
