"""GitHub App authentication.

Builds the JWT a GitHub App presents as its bearer credential.

GitHub App auth flow:
1. Generate a JWT signed with the App's private key (this module)
2. Exchange the JWT for a short-lived installation access token
3. Use the installation token for git operations on that installation

The token is a compact RS256 JWT: unpadded base64url header and payload
joined by ".", followed by an RSASSA-PKCS1-v1_5 SHA-256 signature over that
two-segment prefix. GitHub rejects tokens that are not byte-exact, so
encoding and signing are left to PyJWT rather than assembled by hand.
"""

import time
from typing import Callable

import jwt
import structlog
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from jwt.utils import base64url_decode as _b64url_decode
from jwt.utils import base64url_encode as _b64url_encode

from ghremote.errors import SigningError

logger = structlog.get_logger(__name__)

JWT_ALGORITHM = "RS256"

# GitHub accepts at most 10 minutes of validity. iat is backdated to absorb
# clock drift between this host and GitHub.
CLOCK_SKEW_SECONDS = 60
JWT_TTL_SECONDS = 600


def base64url_encode(data: bytes) -> str:
    """URL-safe base64 without "=" padding or line breaks."""
    return _b64url_encode(data).decode("ascii")


def base64url_decode(segment: str) -> bytes:
    """Inverse of base64url_encode; restores the padding itself."""
    return _b64url_decode(segment)


def create_app_jwt(
    client_id: str,
    private_key: RSAPrivateKey,
    *,
    clock: Callable[[], float] = time.time,
) -> str:
    """Create a JWT for authenticating as the GitHub App.

    ``client_id`` is used verbatim as the ``iss`` claim; GitHub accepts
    either the App's client ID or its numeric App ID there. ``clock`` returns
    the current Unix time and exists so tests can pin it.
    """
    now = int(clock())
    payload = {
        "iss": client_id,
        "iat": now - CLOCK_SKEW_SECONDS,
        "exp": now + JWT_TTL_SECONDS,
    }

    try:
        token = jwt.encode(
            payload,
            private_key,
            algorithm=JWT_ALGORITHM,
            headers={"typ": "JWT"},
        )
    except (jwt.PyJWTError, ValueError, TypeError) as exc:
        raise SigningError(f"Error generating signature: {exc}") from exc

    logger.debug("app_jwt_created", iss=client_id, iat=payload["iat"], exp=payload["exp"])
    return token
