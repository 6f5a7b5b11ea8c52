"""Exceptions raised by the domain layer.

Each exception carries a dictionary of messages keyed by field name (or
``_entity`` for errors that concern the whole object). The HTTP layer maps
them to status codes in ``shared.http``.
"""


class StorefrontError(Exception):
    """Base class for all domain errors."""

    default_message = "Request failed"

    def __init__(self, messages=None, message=None):
        if isinstance(messages, str):
            messages = {"_entity": [messages]}
        self.messages = messages or {}
        self.message = message or self._first_message() or self.default_message
        super().__init__(self.message)

    def _first_message(self):
        for errors in self.messages.values():
            if errors:
                return errors[0] if isinstance(errors, list) else str(errors)
        return None


class ValidationError(StorefrontError):
    """Input or state violates a business rule."""

    default_message = "Validation failed"


class ConflictError(ValidationError):
    """A unique key (email, SKU, slug, order number) is already taken."""

    default_message = "Resource already exists"


class ObjectNotFoundError(StorefrontError):
    """The requested record does not exist or is not visible to the caller."""

    default_message = "Resource not found"


class AuthenticationError(StorefrontError):
    """Missing, invalid or insufficient credentials."""

    default_message = "Authentication required"
