"""Application error kinds that Protean does not already provide.

Input problems raise ``protean.exceptions.ValidationError``. The classes below
cover the remaining kinds and, like Protean's ``ValidationError``, carry a dict
of messages keyed by field name.
"""


class CanteenError(Exception):
    def __init__(self, messages: dict[str, list[str]] | None = None):
        self.messages = messages or {}
        super().__init__(messages)


class NotFoundError(CanteenError):
    """A referenced record does not exist, or is not visible to the caller."""


class ConflictError(CanteenError):
    """A business rule rejected the request (duplicate, unavailable, referenced)."""


class AuthError(CanteenError):
    """Missing, invalid or expired credentials."""


class ForbiddenError(CanteenError):
    """Authenticated, but the role lacks access to the route."""


class DependencyError(CanteenError):
    """An external collaborator (image store, email transport) failed."""
