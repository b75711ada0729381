from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ghremote import __version__
from ghremote.errors import ConfigError


class Settings(BaseSettings):
    """Settings loaded from environment variables and an optional .env file.

    The three GitHub App credentials are fallbacks for the positional CLI
    arguments, so the CLI can run from CI secrets without arguments:

      GITHUB_APP_CLIENT_ID         Client ID (or numeric App ID)
      GITHUB_APP_PRIVATE_KEY_FILE  path to the PEM private key
      GITHUB_APP_INSTALLATION_ID   numeric installation ID
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub REST API
    github_api_url: str = "https://api.github.com"
    github_api_version: str = "2022-11-28"

    # Host used in the printed git remote URL.
    github_host: str = "github.com"

    # Seconds; applies to connect, read and write.
    http_timeout: float = 30.0

    user_agent: str = f"gh-app-remote/{__version__}"

    # Credential fallbacks
    github_app_client_id: str = ""
    github_app_private_key_file: str = ""
    github_app_installation_id: str = ""

    debug: bool = False

    @field_validator("github_api_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def get_settings() -> Settings:
    """Load settings; a malformed environment or .env value is a ConfigError."""
    try:
        return Settings()
    except ValidationError as exc:
        # Name the offending fields only; values may be secrets.
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()})
        raise ConfigError(f"Invalid configuration value for: {', '.join(fields)}") from exc
