"""Errors raised by the remote task store."""


class StoreError(Exception):
    """Base exception for any failed call to the task API.

    Transport failures carry no status code.
    """

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class ValidationFailed(StoreError):
    """The API rejected the request body (400)."""

    pass


class UnauthorizedError(StoreError):
    """No session, or the entity belongs to someone else (401)."""

    pass


class NotFoundError(StoreError):
    """The requested board or task does not exist (404)."""

    pass
