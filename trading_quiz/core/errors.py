"""Domain errors raised by the service layer."""

from __future__ import annotations


class QuizError(Exception):
    """Base class; ``status_code`` is the HTTP status the API answers with."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(QuizError):
    """A referenced user or chart does not exist."""

    status_code = 404


class InvalidInput(QuizError):
    """Malformed direction or out-of-range value."""

    status_code = 400


class NotAvailable(QuizError):
    """Nothing to select from."""

    status_code = 404


class Conflict(QuizError):
    """Duplicate record, or a rating row that vanished mid-update."""

    status_code = 409


__all__ = ["Conflict", "InvalidInput", "NotAvailable", "NotFound", "QuizError"]
