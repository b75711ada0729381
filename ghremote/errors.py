"""Exception hierarchy for the token/remote flow.

Every failure the CLI can report maps to exactly one class here, and each
class carries the process exit code the CLI returns for it:

  0  success (no exception)
  1  CredentialError       key file missing, unreadable or not an RSA key
  2  UsageError            a required argument or setting is empty or malformed
  3  SigningError          JWT encoding or RSA signing failed
  4  GitHubAPIError        non-2xx response or network failure
  5  ResponseFieldError    2xx response without the expected field
"""

from typing import Optional


class GhRemoteError(Exception):
    """Base class for all errors raised by ghremote."""

    exit_code = 1


class UsageError(GhRemoteError):
    """Raised when a required command-line argument is missing."""

    exit_code = 2


class ConfigError(UsageError):
    """Raised when an environment or .env setting does not validate."""


class CredentialError(GhRemoteError):
    """Raised when the App private key cannot be used."""

    exit_code = 1


class KeyFileNotFoundError(CredentialError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Private key file '{path}' not found or not readable")


class InvalidPrivateKeyError(CredentialError):
    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__("Invalid RSA private key")


class SigningError(GhRemoteError):
    """Raised when the App JWT cannot be encoded or signed."""

    exit_code = 3


class GitHubAPIError(GhRemoteError):
    """Raised on a non-2xx GitHub response or a transport failure.

    ``status_code`` is None when no response was received at all.
    ``body`` is the raw response text so callers can still show it.
    """

    exit_code = 4

    def __init__(
        self,
        method: str,
        path: str,
        status_code: Optional[int] = None,
        body: str = "",
        cause: Optional[Exception] = None,
    ):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body
        self.cause = cause
        if status_code is None:
            message = f"{method} {path} failed: {cause}"
        else:
            message = f"{method} {path} returned HTTP {status_code}"
        super().__init__(message)


class ResponseFieldError(GhRemoteError):
    """Raised when a successful response lacks a required field."""

    exit_code = 5

    def __init__(self, path: str, field: str, body: str = ""):
        self.path = path
        self.field = field
        self.body = body
        super().__init__(f"Response from {path} has no '{field}' field")
