"""Custom exception hierarchy for the books service."""


class AppError(Exception):
    """Base application error."""


class ServerStartupError(AppError):
    """Raised when the listening socket cannot be bound."""
