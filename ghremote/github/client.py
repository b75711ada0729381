"""GitHub API client for the App-level (JWT-authenticated) endpoints.

Uses a synchronous httpx client. Both calls authenticate with the App JWT
as a bearer token:

1. GET  /app                                        App metadata (owner login)
2. POST /app/installations/{id}/access_tokens       installation token

No retries: a failed call is reported once and the run ends. Non-2xx
responses and transport failures raise GitHubAPIError; a 2xx body missing
the field we need raises ResponseFieldError. Both keep the raw body.
"""

from typing import Optional, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from ghremote.core.config import Settings, get_settings
from ghremote.errors import GitHubAPIError, ResponseFieldError
from ghremote.github.schemas import AppInfo, InstallationToken

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_app(app_jwt: str, settings: Optional[Settings] = None) -> AppInfo:
    """GET /app. Returns the App metadata; ``owner.login`` is required."""
    settings = settings or get_settings()
    path = "/app"
    response = _send("GET", path, app_jwt, settings)
    return _parse(AppInfo, response, path, required_field="owner.login")


def create_installation_token(
    app_jwt: str,
    installation_id: int | str,
    settings: Optional[Settings] = None,
) -> InstallationToken:
    """Exchange a GitHub App JWT for an installation access token.

    Installation tokens are scoped to the repos the installation was
    granted and expire after 1 hour.
    """
    settings = settings or get_settings()
    path = f"/app/installations/{installation_id}/access_tokens"
    response = _send("POST", path, app_jwt, settings)
    return _parse(InstallationToken, response, path, required_field="token")


def _http_client(settings: Settings) -> httpx.Client:
    return httpx.Client(
        base_url=settings.github_api_url,
        timeout=settings.http_timeout,
        headers={"User-Agent": settings.user_agent},
    )


def _auth_headers(app_jwt: str, settings: Settings) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {app_jwt}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": settings.github_api_version,
    }


def _send(method: str, path: str, app_jwt: str, settings: Settings) -> httpx.Response:
    with _http_client(settings) as client:
        try:
            response = client.request(method, path, headers=_auth_headers(app_jwt, settings))
        except httpx.HTTPError as exc:
            logger.error("github_request_failed", method=method, path=path, error=str(exc))
            raise GitHubAPIError(method, path, cause=exc) from exc

    logger.info(
        "github_response",
        method=method,
        path=path,
        status_code=response.status_code,
        request_id=response.headers.get("x-github-request-id"),
    )

    if not response.is_success:
        raise GitHubAPIError(method, path, status_code=response.status_code, body=response.text)
    return response


def _parse(
    model: type[ModelT],
    response: httpx.Response,
    path: str,
    required_field: str,
) -> ModelT:
    body = response.text
    try:
        data = response.json()
    except ValueError as exc:
        raise ResponseFieldError(path, required_field, body=body) from exc

    if not isinstance(data, dict):
        raise ResponseFieldError(path, required_field, body=body)

    try:
        return model.model_validate({**data, "raw": body})
    except ValidationError as exc:
        loc = exc.errors()[0].get("loc", ())
        field = ".".join(str(part) for part in loc) or required_field
        raise ResponseFieldError(path, field, body=body) from exc
