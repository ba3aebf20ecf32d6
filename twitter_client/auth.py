"""
Authentication Module
Build OAuth2 authorization URLs and HTTP authorization headers.
"""

import base64
from typing import Dict, Sequence
from urllib.parse import quote, quote_plus

from .config import API_OAUTH_URL, SCOPES
from .exceptions import ConfigurationError, ScopeError

# Placeholder PKCE pair; the same value is sent back as code_verifier.
CODE_CHALLENGE = 'challenge'
CODE_CHALLENGE_METHOD = 'plain'
DEFAULT_STATE = 'state'


def validate_scopes(scopes: Sequence[str]) -> None:
    """
    Check that every requested scope is in the allowed scope set.

    Raises:
        ScopeError: if `scopes` isn't a list/tuple or holds an unknown scope
    """
    if not isinstance(scopes, (list, tuple)):
        raise ScopeError("The scopes parameter isn't a list.")
    unknown = [scope for scope in scopes if scope not in SCOPES]
    if unknown:
        raise ScopeError(f"Invalid scope permissions used: {', '.join(map(str, unknown))}")


def build_login_url(client_id: str, redirect_uri: str, scopes: Sequence[str] = SCOPES, state: str = '') -> str:
    """
    Build the URL the user is sent to in order to authorize the app.

    Args:
        client_id: OAuth2 client id
        redirect_uri: Registered callback URL
        scopes: Requested scopes, a subset of SCOPES
        state: Opaque value echoed back on the callback; '' means "state"

    Returns:
        Authorization endpoint URL with all query parameters
    """
    validate_scopes(scopes)
    if not client_id or not redirect_uri:
        raise ConfigurationError("A client id and redirect URI are required to build the login URL.")

    return (
        f"{API_OAUTH_URL}?client_id={quote(client_id, safe='')}"
        f"&redirect_uri={quote_plus(redirect_uri)}"
        f"&scope={'%20'.join(scopes)}"
        f"&response_type=code"
        f"&code_challenge={CODE_CHALLENGE}"
        f"&code_challenge_method={CODE_CHALLENGE_METHOD}"
        f"&state={state if state != '' else DEFAULT_STATE}"
    )


def basic_auth_header(client_id: str, client_secret: str) -> Dict[str, str]:
    """Authorization header for the token endpoint."""
    if not client_id or not client_secret:
        raise ConfigurationError("Client credentials are required for the token endpoint.")
    token = base64.b64encode(f"{client_id}:{client_secret}".encode('utf-8')).decode('ascii')
    return {"Authorization": f"Basic {token}"}


def bearer_auth_header(access_token: str) -> Dict[str, str]:
    """Authorization header for user-context API calls."""
    return {"Authorization": f"Bearer {access_token}"}
