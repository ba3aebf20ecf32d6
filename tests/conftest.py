"""Shared fixtures: a stub for requests.request so no test touches the network."""

import json
import sys
from pathlib import Path

import pytest
import requests

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from twitter_client import TwitterClient  # noqa: E402


def make_response(body=None, status_code=200, raw=None):
    """Build a real requests.Response holding `body` encoded as JSON (or `raw` bytes)."""
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    if raw is not None:
        response._content = raw
    else:
        response._content = json.dumps(body).encode("utf-8")
    return response


class StubTransport:
    """Records every call to requests.request and replays queued responses."""

    def __init__(self):
        self.calls = []
        self.responses = []

    def queue(self, body=None, status_code=200, raw=None):
        self.responses.append(make_response(body, status_code, raw))

    def fail(self, exc):
        self.responses.append(exc)

    def __call__(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def transport(monkeypatch):
    stub = StubTransport()
    monkeypatch.setattr(requests, "request", stub)
    return stub


@pytest.fixture
def config():
    return {
        "clientId": "abc",
        "clientSecret": "s3cret",
        "redirectUri": "https://x/cb",
    }


@pytest.fixture
def client(config):
    return TwitterClient(config)


@pytest.fixture
def token_client():
    return TwitterClient("user-token")
