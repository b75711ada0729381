"""GitHub App authentication and the two REST calls it needs."""

from ghremote.github.auth import create_app_jwt
from ghremote.github.client import create_installation_token, get_app

__all__ = ["create_app_jwt", "create_installation_token", "get_app"]
