"""
Configuration
Endpoints, default field selections and the client configuration holder.
"""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

API_URL = 'https://api.twitter.com/2/'
API_OAUTH_URL = 'https://twitter.com/i/oauth2/authorize'
API_OAUTH_TOKEN_URL = 'https://api.twitter.com/2/oauth2/token'
API_TOKEN_REFRESH_URL = 'https://api.twitter.com/2/oauth2/token'

SCOPES = ('read-tweets', 'read-users', 'offline-access')

DEFAULT_USER_FIELDS = (
    'created_at,description,entities,id,location,name,pinned_tweet_id,profile_image_url,'
    'protected,public_metrics,url,username,verified,verified_type,withheld'
)
DEFAULT_TWEET_FIELDS = (
    'id,text,attachments,author_id,created_at,entities,in_reply_to_user_id,'
    'public_metrics,referenced_tweets'
)
DEFAULT_MEDIA_FIELDS = (
    'duration_ms,height,media_key,preview_image_url,type,url,width,public_metrics,'
    'non_public_metrics,organic_metrics,promoted_metrics,alt_text,variants'
)
DEFAULT_EXPANSION_FIELDS = (
    'attachments.poll_ids,attachments.media_keys,author_id,edit_history_tweet_ids,'
    'entities.mentions.username,geo.place_id,in_reply_to_user_id,referenced_tweets.id,'
    'referenced_tweets.id.author_id'
)

DEFAULT_TIMEOUT_MS = 90000
DEFAULT_CONNECT_TIMEOUT_MS = 20000

# mapping key -> (attribute, required)
_MAPPING_KEYS = {
    'clientId': ('client_id', True),
    'clientSecret': ('client_secret', True),
    'redirectUri': ('redirect_uri', True),
    'timeout': ('timeout', False),
    'connectTimeout': ('connect_timeout', False),
    'verifySsl': ('verify_ssl', False),
}

_TRUTHY = ('1', 'true', 'yes')


def validate_timeout(name: str, value: Any) -> int:
    """Reject anything but a positive int of milliseconds."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive number of milliseconds, got {value!r}")
    return value


@dataclass(frozen=True)
class ClientConfig:
    """
    Settings needed for the OAuth flow and for every HTTP call.

    Attributes:
        client_id: OAuth2 client id of the registered app
        client_secret: OAuth2 client secret of the registered app
        redirect_uri: Callback URL registered with the app
        timeout: Total request timeout in milliseconds
        connect_timeout: Connect timeout in milliseconds
        verify_ssl: Verify the server's TLS certificate
    """

    client_id: str
    client_secret: str
    redirect_uri: str
    timeout: int = DEFAULT_TIMEOUT_MS
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT_MS
    verify_ssl: bool = True

    def __post_init__(self):
        missing = [
            name for name in ('client_id', 'client_secret', 'redirect_uri')
            if not isinstance(getattr(self, name), str) or not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(f"Configuration data is missing: {', '.join(missing)}")
        for name in ('timeout', 'connect_timeout'):
            validate_timeout(name, getattr(self, name))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'ClientConfig':
        """
        Build a config from a mapping.

        Both camelCase keys (`clientId`, `redirectUri`, ...) and the
        attribute names (`client_id`, `redirect_uri`, ...) are accepted.

        Raises:
            ConfigurationError: if `data` is not a mapping or a required key is missing
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Configuration must be a mapping, got {type(data).__name__}")

        kwargs = {}
        for key, (attr, required) in _MAPPING_KEYS.items():
            if key in data:
                kwargs[attr] = data[key]
            elif attr in data:
                kwargs[attr] = data[attr]
            elif required:
                raise ConfigurationError(f"Configuration data is missing: {key}")
        return cls(**kwargs)

    @classmethod
    def from_env(cls, prefix: str = 'TWITTER_', dotenv_path: Optional[str] = None) -> 'ClientConfig':
        """
        Build a config from environment variables, loading a .env file first.

        Reads ``<prefix>CLIENT_ID``, ``<prefix>CLIENT_SECRET``, ``<prefix>REDIRECT_URI``
        and optionally ``<prefix>TIMEOUT_MS``, ``<prefix>CONNECT_TIMEOUT_MS``,
        ``<prefix>VERIFY_SSL``.
        """
        load_dotenv(dotenv_path=dotenv_path)

        data = {
            'clientId': os.getenv(f'{prefix}CLIENT_ID'),
            'clientSecret': os.getenv(f'{prefix}CLIENT_SECRET'),
            'redirectUri': os.getenv(f'{prefix}REDIRECT_URI'),
        }
        try:
            data['timeout'] = int(os.getenv(f'{prefix}TIMEOUT_MS', str(DEFAULT_TIMEOUT_MS)))
            data['connectTimeout'] = int(os.getenv(f'{prefix}CONNECT_TIMEOUT_MS', str(DEFAULT_CONNECT_TIMEOUT_MS)))
        except ValueError as e:
            raise ConfigurationError(f"Invalid timeout in environment: {e}") from e
        data['verifySsl'] = os.getenv(f'{prefix}VERIFY_SSL', 'true').lower() in _TRUTHY
        return cls.from_mapping(data)
