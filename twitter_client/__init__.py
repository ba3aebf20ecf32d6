"""
twitter_client - Twitter API v2 Client
A Python client for the Twitter OAuth2 flow and read-only v2 endpoints.
"""

__version__ = "0.1.0"
__author__ = "Developer"

from .client import TwitterClient
from .config import SCOPES, ClientConfig
from .exceptions import (
    AuthenticationRequiredError,
    ConfigurationError,
    PaginationUnsupportedError,
    ProtocolError,
    ScopeError,
    TransportError,
    TwitterError,
)

__all__ = [
    "TwitterClient",
    "ClientConfig",
    "SCOPES",
    "TwitterError",
    "ConfigurationError",
    "ScopeError",
    "AuthenticationRequiredError",
    "PaginationUnsupportedError",
    "TransportError",
    "ProtocolError",
]
