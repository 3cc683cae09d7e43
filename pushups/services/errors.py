"""Errors raised by the domain services and translated at the API/CLI edge."""


class PushupError(Exception):
    """Base class for service errors; ``message`` is a short human-readable reason."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(PushupError):
    """Malformed or out-of-range input (count, date, goal, target)."""


class AuthorizationError(PushupError):
    """Name/secret mismatch. Never says which of the two was wrong."""


class UniquenessError(PushupError):
    """Duplicate user name or secret."""


class NotFoundError(PushupError):
    """Named user does not exist."""
