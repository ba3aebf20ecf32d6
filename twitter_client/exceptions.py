"""
Exceptions
Errors raised by the Twitter API client.
"""

from typing import Optional, Union


class TwitterError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(TwitterError):
    """Client was built from invalid input or is missing a required setting."""


class ScopeError(TwitterError):
    """Requested OAuth scopes are not all in the allowed scope set."""


class AuthenticationRequiredError(TwitterError):
    """An authenticated endpoint was called without an access token."""

    def __init__(self, endpoint: str):
        super().__init__(f"{endpoint} - This method requires an authenticated user's access token.")
        self.endpoint = endpoint


class PaginationUnsupportedError(TwitterError):
    """pagination() was given a response that has no `paging` member."""


class TransportError(TwitterError):
    """The HTTP request itself failed (connect, timeout, DNS, empty reply)."""

    def __init__(self, message: str, code: Optional[Union[int, str]] = None):
        super().__init__(f"Transport error ({code}): {message}" if code is not None else f"Transport error: {message}")
        self.code = code
        self.message = message


class ProtocolError(TwitterError):
    """The server replied, but the body could not be understood."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
