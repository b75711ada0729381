from ghremote.core.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "GITHUB_API_URL",
            "GITHUB_API_VERSION",
            "GITHUB_HOST",
            "HTTP_TIMEOUT",
            "USER_AGENT",
            "DEBUG",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.github_api_url == "https://api.github.com"
        assert settings.github_api_version == "2022-11-28"
        assert settings.github_host == "github.com"
        assert settings.http_timeout == 30.0
        assert settings.debug is False
        assert settings.user_agent.startswith("gh-app-remote/")

    def test_credentials_from_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_APP_CLIENT_ID", "Iv1.abc")
        monkeypatch.setenv("GITHUB_APP_PRIVATE_KEY_FILE", "/secrets/app.pem")
        monkeypatch.setenv("github_app_installation_id", "12345")

        settings = Settings(_env_file=None)

        assert settings.github_app_client_id == "Iv1.abc"
        assert settings.github_app_private_key_file == "/secrets/app.pem"
        assert settings.github_app_installation_id == "12345"

    def test_api_url_trailing_slash_stripped(self, monkeypatch):
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3/")

        settings = Settings(_env_file=None)

        assert settings.github_api_url == "https://ghe.example.com/api/v3"

    def test_env_file_is_read(self, tmp_path, monkeypatch):
        monkeypatch.delenv("GITHUB_HOST", raising=False)
        monkeypatch.delenv("HTTP_TIMEOUT", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("GITHUB_HOST=ghe.example.com\nHTTP_TIMEOUT=5\n")

        settings = Settings(_env_file=env_file)

        assert settings.github_host == "ghe.example.com"
        assert settings.http_timeout == 5.0
