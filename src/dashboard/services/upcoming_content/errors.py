"""Errors raised by the upcoming content registry."""


class UpcomingContentError(Exception):
    """Base exception for upcoming content operations.

    ``message`` is None when neither the caller nor the error kind supplied
    one, so callers can substitute their own fallback text.
    """
    default_message = None

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message or "Upcoming content operation failed")


class CapacityExceededError(UpcomingContentError):
    """Raised when a create would grow the collection past its limit."""

    def __init__(self, max_items: int = 20, message: str = None):
        self.max_items = max_items
        super().__init__(message or (
            f"Maximum of {max_items} announcements allowed. "
            "Please delete some existing announcements first."
        ))


class ContentNotFoundError(UpcomingContentError):
    """Raised when an update references an id that does not exist."""
    default_message = "Upcoming content not found"

    def __init__(self, content_id: str = None, message: str = None):
        self.content_id = content_id
        super().__init__(message)


class InvalidContentOrderError(UpcomingContentError, ValueError):
    """Raised when the requested content order is not a non-negative integer."""
    default_message = "Content order must be a non-negative whole number"


class StoreFailureError(UpcomingContentError):
    """Raised when the underlying record store call fails.

    The store's own message is kept verbatim, and stays None when the store
    gave none. ``code`` and ``details`` mirror the PostgREST error payload
    when there is one.
    """

    def __init__(self, message: str = None, code: str = None, details: str = None):
        self.code = code
        self.details = details
        super().__init__(message)
