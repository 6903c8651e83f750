"""Sikka API Client - Exceptions"""

from typing import Optional


class SikkaError(Exception):
    """Base class for every error raised by the client."""


class NotAuthenticatedError(SikkaError):
    """An operation needs a request key but none is held."""

    def __init__(self, message: str = "Not authenticated. Call authenticate() first."):
        super().__init__(message)


class AuthenticationError(SikkaError):
    """The request_key endpoint rejected the credentials or the refresh key."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ApiRequestError(SikkaError):
    """A domain endpoint answered with a non-success status or was unreachable."""

    def __init__(
        self,
        message: str,
        endpoint: str,
        method: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.endpoint = endpoint
        self.method = method
        self.status_code = status_code
        self.reason = reason
        self.body = body


class ResponseDecodeError(SikkaError):
    """A success response could not be parsed into the expected shape."""

    def __init__(self, message: str, endpoint: str, body: Optional[str] = None):
        super().__init__(message)
        self.endpoint = endpoint
        self.body = body
