"""Error kinds raised by the card services.

The API blueprint maps each of these to a JSON response; nothing here is
retried or swallowed.
"""


class CardwallError(Exception):
    """Base class for all service-level errors."""


class NotFound(CardwallError, LookupError):
    """Referenced entity is absent or soft-deleted.

    Callers cannot tell a deleted row from one that never existed.
    """


class ValidationFailure(CardwallError, ValueError):
    """Malformed input. ``errors`` is a list of {"field", "message"} dicts."""

    def __init__(self, errors, message="Validation error"):
        super().__init__(message)
        self.errors = errors


class TransactionFailure(CardwallError, RuntimeError):
    """A multi-statement write failed and was rolled back."""
