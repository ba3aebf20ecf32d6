"""
Twitter API Client
Main client for the Twitter API v2 OAuth2 flow and read endpoints.
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union
from urllib.parse import parse_qsl, urlsplit

from . import http
from .auth import CODE_CHALLENGE, basic_auth_header, bearer_auth_header, build_login_url
from .config import (
    API_OAUTH_TOKEN_URL,
    API_TOKEN_REFRESH_URL,
    API_URL,
    DEFAULT_CONNECT_TIMEOUT_MS,
    DEFAULT_EXPANSION_FIELDS,
    DEFAULT_MEDIA_FIELDS,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_TWEET_FIELDS,
    DEFAULT_USER_FIELDS,
    SCOPES,
    ClientConfig,
    validate_timeout,
)
from .exceptions import (
    AuthenticationRequiredError,
    ConfigurationError,
    PaginationUnsupportedError,
    ProtocolError,
)
from .logger import logger

Fields = Union[str, Iterable[str]]


def _join(value: Fields) -> str:
    if isinstance(value, str):
        return value
    return ','.join(str(item) for item in value)


class TwitterClient:
    """Twitter API v2 client using OAuth2 user-context bearer tokens.

    Build it either from a full configuration (needed for the OAuth
    authorization-code flow) or from a bare access token (read-only use
    against an account that is already authorized)::

        client = TwitterClient({"clientId": ..., "clientSecret": ..., "redirectUri": ...})
        client = TwitterClient("access-token")
    """

    def __init__(self, config: Union[ClientConfig, Mapping[str, Any], str, None] = None):
        """
        Initialize the client.

        Args:
            config: ClientConfig or mapping for full mode, access token string for token-only mode

        Raises:
            ConfigurationError: for any other input or a mapping missing required keys
        """
        self._client_id: Optional[str] = None
        self._client_secret: Optional[str] = None
        self._redirect_uri: Optional[str] = None
        self._access_token: Optional[str] = None
        self._timeout = DEFAULT_TIMEOUT_MS
        self._connect_timeout = DEFAULT_CONNECT_TIMEOUT_MS
        self._verify_ssl = True

        self._user_fields = DEFAULT_USER_FIELDS
        self._tweet_fields = DEFAULT_TWEET_FIELDS
        self._media_fields = DEFAULT_MEDIA_FIELDS
        self._expansion_fields = DEFAULT_EXPANSION_FIELDS

        if isinstance(config, ClientConfig):
            self._apply_config(config)
        elif isinstance(config, Mapping):
            self._apply_config(ClientConfig.from_mapping(config))
        elif isinstance(config, str) and config:
            self._access_token = config
        else:
            raise ConfigurationError("Configuration data is missing.")

    @classmethod
    def from_config(cls, config: ClientConfig) -> 'TwitterClient':
        """Client for the full OAuth flow."""
        if not isinstance(config, ClientConfig):
            raise ConfigurationError(f"Expected ClientConfig, got {type(config).__name__}")
        return cls(config)

    @classmethod
    def from_token(cls, access_token: str) -> 'TwitterClient':
        """Read-only client for an already authorized account."""
        if not isinstance(access_token, str) or not access_token:
            raise ConfigurationError("An access token string is required.")
        return cls(access_token)

    def _apply_config(self, config: ClientConfig):
        self._client_id = config.client_id
        self._client_secret = config.client_secret
        self._redirect_uri = config.redirect_uri
        self._timeout = config.timeout
        self._connect_timeout = config.connect_timeout
        self._verify_ssl = config.verify_ssl
        if not config.verify_ssl:
            logger.warning("TLS certificate verification is disabled for this client")

    def get_login_url(self, scopes: Sequence[str] = SCOPES, state: str = '') -> str:
        """
        Build the authorization URL to send the user to.

        Args:
            scopes: Requested scopes, each one of SCOPES
            state: Value echoed back to the redirect URI ('' becomes "state")

        Returns:
            Login URL

        Raises:
            ScopeError: if a requested scope isn't allowed
        """
        return build_login_url(self._client_id, self._redirect_uri, scopes, state)

    def get_oauth_token(self, code: str, token_only: bool = False) -> Union[Dict[str, Any], str]:
        """
        Exchange an authorization code for tokens.

        The stored access token is left untouched; pass the result to
        `access_token` yourself.

        Args:
            code: `code` query parameter received on the redirect URI
            token_only: Return only the access token string

        Returns:
            Decoded token response, or the access token when token_only is set
        """
        params = {
            'grant_type': 'authorization_code',
            'redirect_uri': self._redirect_uri,
            'code': code,
            'code_verifier': CODE_CHALLENGE,
        }
        result = self._make_oauth_call(API_OAUTH_TOKEN_URL, params)
        return self._token_result(result, token_only)

    def refresh_token(self, refresh_token: str, token_only: bool = False) -> Union[Dict[str, Any], str]:
        """
        Get a new access token from a refresh token (needs the offline-access scope).

        Args:
            refresh_token: Refresh token from an earlier exchange
            token_only: Return only the access token string

        Returns:
            Decoded token response, or the access token when token_only is set
        """
        params = {
            'client_id': self._client_id,
            'grant_type': 'refresh_token',
            'refresh_token': refresh_token,
        }
        result = self._make_oauth_call(API_TOKEN_REFRESH_URL, params)
        return self._token_result(result, token_only)

    @staticmethod
    def _token_result(result: Any, token_only: bool):
        if not token_only:
            return result
        if not isinstance(result, Mapping) or 'access_token' not in result:
            raise ProtocolError("Token response has no access_token", body=str(result)[:200])
        return result['access_token']

    def get_user_profile(self, id: Union[int, str, None] = 0) -> Any:
        """Get a user's profile; id 0 (the default) means the authenticated user."""
        if id in (0, None, ''):
            id = 'me'
        return self._make_call(f'users/{id}', {'user.fields': self._user_fields})

    def get_user_media(self, id: Union[int, str], limit: int = 0, next_token: Optional[str] = None) -> Any:
        """
        Get tweets (with media expansions) posted by a user.

        Args:
            id: User ID
            limit: max_results; 0 leaves it to the API default
            next_token: pagination_token from a previous page's meta

        Returns:
            Decoded response
        """
        params = self._media_params()
        if limit > 0:
            params['max_results'] = limit
        if next_token is not None:
            params['pagination_token'] = next_token
        return self._make_call(f'users/{id}/tweets', params)

    def get_search_media(self, query: str, limit: int = 0, next_token: Optional[str] = None) -> Any:
        """
        Search tweets from the last seven days.

        Args:
            query: Search query
            limit: max_results; 0 leaves it to the API default
            next_token: pagination_token from a previous page's meta

        Returns:
            Decoded response
        """
        params = {'query': query}
        params.update(self._media_params())
        if limit > 0:
            params['max_results'] = limit
        if next_token is not None:
            params['pagination_token'] = next_token
        return self._make_call('tweets/search/recent', params)

    def get_media(self, ids: Union[str, int, Iterable[Union[str, int]]]) -> Any:
        """Look up tweets by ID; `ids` is a comma-joined string or an iterable of IDs."""
        if isinstance(ids, int):
            ids = str(ids)
        params = {'ids': _join(ids)}
        params.update(self._media_params())
        return self._make_call('tweets', params)

    def pagination(self, response: Any) -> Optional[Any]:
        """
        Fetch the page that `response.paging.next` points to.

        Returns:
            Decoded next page, or None when there are no more pages

        Raises:
            PaginationUnsupportedError: if the response has no `paging` member
        """
        if not isinstance(response, Mapping) or response.get('paging') is None:
            raise PaginationUnsupportedError("This method doesn't support pagination.")

        paging = response['paging']
        next_url = paging.get('next') if isinstance(paging, Mapping) else None
        if not isinstance(next_url, str) or not next_url:
            return None

        parts = urlsplit(next_url)
        if '?' not in next_url or not parts.query:
            return None

        params = dict(parse_qsl(parts.query, keep_blank_values=True))
        # auth goes in the header
        params.pop('access_token', None)
        return self._make_call(self._endpoint_from_url(next_url), params)

    @staticmethod
    def _endpoint_from_url(url: str) -> str:
        """Strip scheme, host and the API version prefix: ".../2/tweets?x" -> "tweets"."""
        if url.startswith(API_URL):
            return url[len(API_URL):].split('?', 1)[0]
        path = urlsplit(url).path.lstrip('/')
        version = urlsplit(API_URL).path.strip('/') + '/'
        if path.startswith(version):
            path = path[len(version):]
        return path

    def _media_params(self) -> Dict[str, Any]:
        return {
            'expansions': self._expansion_fields,
            'media.fields': self._media_fields,
            'tweet.fields': self._tweet_fields,
            'user.fields': self._user_fields,
        }

    def _make_call(self, endpoint: str, params: Optional[Dict[str, Any]] = None, method: str = 'GET') -> Any:
        if not self._access_token:
            raise AuthenticationRequiredError(endpoint)

        return http.execute(
            method,
            API_URL + endpoint,
            params=params,
            headers=bearer_auth_header(self._access_token),
            timeout=self._timeout,
            connect_timeout=self._connect_timeout,
            verify=self._verify_ssl,
        )

    def _make_oauth_call(self, url: str, params: Dict[str, Any], method: str = 'POST') -> Any:
        return http.execute(
            method,
            url,
            params=params,
            headers=basic_auth_header(self._client_id, self._client_secret),
            timeout=self._timeout,
            connect_timeout=self._connect_timeout,
            verify=self._verify_ssl,
        )

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @access_token.setter
    def access_token(self, token: Optional[str]):
        self._access_token = token

    @property
    def client_id(self) -> Optional[str]:
        return self._client_id

    @client_id.setter
    def client_id(self, client_id: str):
        self._client_id = client_id

    @property
    def client_secret(self) -> Optional[str]:
        return self._client_secret

    @client_secret.setter
    def client_secret(self, client_secret: str):
        self._client_secret = client_secret

    @property
    def redirect_uri(self) -> Optional[str]:
        return self._redirect_uri

    @redirect_uri.setter
    def redirect_uri(self, redirect_uri: str):
        self._redirect_uri = redirect_uri

    @property
    def timeout(self) -> int:
        """Total request timeout in milliseconds."""
        return self._timeout

    @timeout.setter
    def timeout(self, timeout: int):
        self._timeout = validate_timeout('timeout', timeout)

    @property
    def connect_timeout(self) -> int:
        """Connect timeout in milliseconds."""
        return self._connect_timeout

    @connect_timeout.setter
    def connect_timeout(self, connect_timeout: int):
        self._connect_timeout = validate_timeout('connect_timeout', connect_timeout)

    @property
    def verify_ssl(self) -> bool:
        return self._verify_ssl

    @verify_ssl.setter
    def verify_ssl(self, verify: bool):
        if not verify:
            logger.warning("TLS certificate verification is disabled for this client")
        self._verify_ssl = verify

    @property
    def user_fields(self) -> str:
        return self._user_fields

    @user_fields.setter
    def user_fields(self, fields: Fields):
        self._user_fields = _join(fields)

    @property
    def tweet_fields(self) -> str:
        return self._tweet_fields

    @tweet_fields.setter
    def tweet_fields(self, fields: Fields):
        self._tweet_fields = _join(fields)

    @property
    def media_fields(self) -> str:
        return self._media_fields

    @media_fields.setter
    def media_fields(self, fields: Fields):
        self._media_fields = _join(fields)

    @property
    def expansion_fields(self) -> str:
        return self._expansion_fields

    @expansion_fields.setter
    def expansion_fields(self, fields: Fields):
        self._expansion_fields = _join(fields)
