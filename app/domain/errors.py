"""
Domain Errors
Every error is recoverable by the user; each carries the HTTP status the API
answers with.
"""


class PublisherError(Exception):
    """Base class for publisher errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(PublisherError):
    """Missing or invalid form input. Nothing is dispatched."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class AuthorizationError(PublisherError):
    """Unauthenticated (401) or non-whitelisted (403) principal."""

    status_code = 403


class DispatchError(PublisherError):
    """Messaging endpoint unreachable or refused the message."""

    status_code = 502


class FormBusyError(PublisherError):
    """A send is already in flight for this form."""

    status_code = 409


class MarketDataError(PublisherError):
    """Upstream market data request failed."""

    status_code = 502
