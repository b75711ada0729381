"""Shared fixtures for the ghremote test suite.

RSA keys are generated once per session; generating 2048-bit keys per test
is the slowest thing the suite would otherwise do. GitHub is replaced by an
httpx.MockTransport so no test touches the network.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
import structlog
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from ghremote.core.config import Settings


def _pem(key: RSAPrivateKey, fmt=serialization.PrivateFormat.TraditionalOpenSSL) -> bytes:
    return key.private_bytes(
        serialization.Encoding.PEM,
        fmt,
        serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def rsa_key() -> RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def key_file(tmp_path: Path, rsa_key: RSAPrivateKey) -> Path:
    """PKCS#1 PEM file, the format GitHub hands out."""
    path = tmp_path / "app.private-key.pem"
    path.write_bytes(_pem(rsa_key))
    return path


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        github_api_url="https://api.github.com",
        github_api_version="2022-11-28",
        github_host="github.com",
        user_agent="gh-app-remote/test",
        github_app_client_id="",
        github_app_private_key_file="",
        github_app_installation_id="",
        debug=False,
    )


# ---------------------------------------------------------------------------
# Fake GitHub API
# ---------------------------------------------------------------------------


class FakeGitHub:
    """Routes (method, path) to canned responses and records requests."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, dict] | Exception] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, json=None, text=None) -> None:
        body = {"text": text} if text is not None else {"json": json}
        self.routes[(method, path)] = (status, body)

    def fail(self, method: str, path: str, exc: Exception) -> None:
        self.routes[(method, path)] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(route, Exception):
            raise route
        status, body = route
        return httpx.Response(status, **body)

    def client(self, settings: Settings) -> httpx.Client:
        return httpx.Client(
            transport=httpx.MockTransport(self.handler),
            base_url=settings.github_api_url,
            headers={"User-Agent": settings.user_agent},
        )


@pytest.fixture
def fake_github():
    fake = FakeGitHub()
    with patch("ghremote.github.client._http_client", side_effect=fake.client):
        yield fake


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo configure_structlog so later tests never write to a closed capture stream."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
