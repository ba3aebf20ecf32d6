"""Tests for the login URL builder and auth headers."""

from urllib.parse import parse_qs, urlsplit

import pytest

from twitter_client import ConfigurationError, ScopeError, TwitterClient
from twitter_client.auth import basic_auth_header, bearer_auth_header, build_login_url
from twitter_client.config import API_OAUTH_URL, SCOPES


def test_login_url_default_state(client):
    url = client.get_login_url(["read-tweets"], "")

    assert url.startswith(API_OAUTH_URL + "?")
    assert "client_id=abc" in url
    assert "redirect_uri=https%3A%2F%2Fx%2Fcb" in url
    assert "scope=read-tweets" in url
    assert "response_type=code" in url
    assert "code_challenge=challenge" in url
    assert "code_challenge_method=plain" in url
    assert url.endswith("&state=state")


def test_login_url_custom_state(client):
    url = client.get_login_url(["read-tweets", "read-users"], "xyz")
    assert url.endswith("&state=xyz")
    assert "scope=read-tweets%20read-users" in url


def test_login_url_all_scopes_by_default(client):
    query = parse_qs(urlsplit(client.get_login_url()).query)
    assert query["scope"] == [" ".join(SCOPES)]
    assert query["redirect_uri"] == ["https://x/cb"]


@pytest.mark.parametrize("scopes", [
    ["tweet.write"],
    ["read-tweets", "write-tweets"],
    ["offline-access", "READ-USERS"],
    "read-tweets",
    None,
])
def test_login_url_rejects_unknown_scopes(client, scopes):
    with pytest.raises(ScopeError):
        client.get_login_url(scopes)


def test_login_url_needs_client_config():
    with pytest.raises(ConfigurationError):
        TwitterClient("token").get_login_url(["read-tweets"])


def test_build_login_url_uses_setters(client):
    client.client_id = "other"
    client.redirect_uri = "http://localhost:8080/callback?x=1"
    url = client.get_login_url(["read-users"], "s")
    assert "client_id=other" in url
    assert "redirect_uri=http%3A%2F%2Flocalhost%3A8080%2Fcallback%3Fx%3D1" in url


def test_build_login_url_function():
    url = build_login_url("id", "https://x/cb", ("read-tweets", "offline-access"), "abc")
    assert "scope=read-tweets%20offline-access" in url
    assert url.endswith("state=abc")


def test_basic_auth_header():
    assert basic_auth_header("abc", "s3cret") == {"Authorization": "Basic YWJjOnMzY3JldA=="}
    with pytest.raises(ConfigurationError):
        basic_auth_header(None, "s3cret")


def test_bearer_auth_header():
    assert bearer_auth_header("tok") == {"Authorization": "Bearer tok"}
