"""Pydantic schemas for the two GitHub App API responses.

Only the fields the remote URL needs are required. Everything else GitHub
sends is ignored; ``raw`` keeps the body exactly as received.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class AppOwner(BaseModel):
    model_config = ConfigDict(extra="ignore")

    login: str
    type: Optional[str] = None


class AppInfo(BaseModel):
    """Body of GET /app."""

    model_config = ConfigDict(extra="ignore")

    owner: AppOwner
    id: Optional[int] = None
    slug: Optional[str] = None
    name: Optional[str] = None
    raw: str = ""


class InstallationToken(BaseModel):
    """Body of POST /app/installations/{id}/access_tokens."""

    model_config = ConfigDict(extra="ignore")

    token: str
    expires_at: Optional[str] = None
    permissions: dict[str, str] = {}
    repository_selection: Optional[str] = None
    raw: str = ""
