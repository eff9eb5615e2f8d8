"""Domain exceptions for linkwatch.

These exceptions represent invalid use of the domain layer. They should be
caught at the application boundary (CLI) and converted to appropriate
user-facing error messages. Ordinary connectivity loss is modeled as state,
never as an exception.
"""


class LinkwatchDomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class ManagerClosedError(LinkwatchDomainError):
    """Raised when a closed NetworkManager is asked to tick."""

    pass
