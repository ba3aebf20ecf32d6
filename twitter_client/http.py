"""
HTTP request execution.

Every API call goes through :func:`execute`: one blocking request, no
session reuse and no retries. Transport failures become
:class:`TransportError`; bodies that are not JSON become :class:`ProtocolError`.
"""
from typing import Any, Dict, Optional

import requests

from .exceptions import ProtocolError, TransportError
from .logger import logger

_BODY_EXCERPT = 200


def _error_code(exc: requests.RequestException):
    """errno when requests exposes one, else the exception class name (e.g. "ConnectTimeout")."""
    if exc.errno is not None:
        return exc.errno
    return type(exc).__name__


def execute(method: str, url: str, params: Optional[Dict[str, Any]] = None,
            headers: Optional[Dict[str, str]] = None, timeout: int = 90000,
            connect_timeout: int = 20000, verify: bool = True) -> Any:
    """Issue a single request and return the decoded JSON body.

    Args:
        method: "GET" or "POST"
        url: Absolute URL without query string
        params: Query parameters for GET, form fields for POST
        headers: Extra headers (the auth header)
        timeout: Total request timeout in milliseconds
        connect_timeout: Connect timeout in milliseconds
        verify: Verify the server's TLS certificate

    Returns:
        Decoded JSON payload, exactly as the server sent it
    """
    method = method.upper()
    request_headers = {"Accept": "application/json"}
    request_headers.update(headers or {})

    kwargs: Dict[str, Any] = {
        "headers": request_headers,
        "timeout": (connect_timeout / 1000.0, timeout / 1000.0),
        "verify": verify,
    }
    if params:
        if method == "GET":
            kwargs["params"] = params
        else:
            kwargs["data"] = params

    logger.debug("%s %s", method, url)
    try:
        response = requests.request(method, url, **kwargs)
    except requests.RequestException as e:
        code = _error_code(e)
        logger.error("Request to %s failed: %s", url, e)
        raise TransportError(str(e), code) from e

    if not response.content:
        logger.error("Empty response from %s (status %s)", url, response.status_code)
        raise TransportError(f"Empty reply from server (HTTP {response.status_code})", response.status_code)

    if not response.ok:
        logger.warning("%s %s returned HTTP %s", method, url, response.status_code)

    try:
        return response.json()
    except ValueError as e:
        body = response.text[:_BODY_EXCERPT]
        logger.error("Invalid JSON from %s (status %s)", url, response.status_code)
        raise ProtocolError(
            f"Invalid JSON in response from {url}: {e}",
            status_code=response.status_code,
            body=body,
        ) from e
