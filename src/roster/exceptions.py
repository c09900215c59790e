"""Exceptions raised by the roster engine."""


class RosterError(Exception):
    """Base class for all roster engine errors."""

    pass


class ConfigurationError(RosterError, ValueError):
    """Raised when a run cannot start: missing tasks, unresolvable rotation, bad dates or mode."""

    pass


class InputValidationError(RosterError):
    """Raised when a request payload fails validation at the loader boundary."""

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = errors or []
