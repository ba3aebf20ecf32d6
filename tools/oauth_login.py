#!/usr/bin/env python3
"""Walk through the Twitter OAuth2 login flow from the command line."""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")

from twitter_client import SCOPES, ClientConfig, TwitterClient, TwitterError  # noqa: E402

logger = logging.getLogger("twitter_client.tools.oauth_login")


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_url(args) -> None:
    client = TwitterClient(ClientConfig.from_env())
    print(client.get_login_url(args.scope or list(SCOPES), args.state))


def cmd_exchange(args) -> None:
    client = TwitterClient(ClientConfig.from_env())
    _print_json(client.get_oauth_token(args.code))


def cmd_refresh(args) -> None:
    client = TwitterClient(ClientConfig.from_env())
    _print_json(client.refresh_token(args.refresh_token))


def cmd_me(args) -> None:
    token = args.token or os.getenv("TWITTER_ACCESS_TOKEN")
    if not token:
        raise SystemExit("No access token: pass --token or set TWITTER_ACCESS_TOKEN")
    _print_json(TwitterClient(token).get_user_profile())


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Twitter OAuth2 login helper")
    sub = parser.add_subparsers(dest="command", required=True)

    p_url = sub.add_parser("url", help="Print the authorization URL")
    p_url.add_argument("--scope", action="append", choices=SCOPES, help="Scope to request (repeatable, default: all)")
    p_url.add_argument("--state", default="", help="State value echoed back on the callback")
    p_url.set_defaults(func=cmd_url)

    p_exchange = sub.add_parser("exchange", help="Exchange an authorization code for tokens")
    p_exchange.add_argument("code", help="code parameter from the redirect URI")
    p_exchange.set_defaults(func=cmd_exchange)

    p_refresh = sub.add_parser("refresh", help="Refresh an access token")
    p_refresh.add_argument("refresh_token", help="Refresh token from an earlier exchange")
    p_refresh.set_defaults(func=cmd_refresh)

    p_me = sub.add_parser("me", help="Show the authenticated user's profile")
    p_me.add_argument("--token", help="Access token (default: TWITTER_ACCESS_TOKEN)")
    p_me.set_defaults(func=cmd_me)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, os.getenv("LOG_LEVEL", "WARNING").upper(), logging.WARNING))

    try:
        args.func(args)
    except TwitterError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
