"""Input validation for the GitHub App credentials.

Checks the three required arguments and turns the private key file into a
usable RSA key. Nothing here touches the network.
"""

from pathlib import Path

import structlog
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from ghremote.errors import InvalidPrivateKeyError, KeyFileNotFoundError, UsageError

logger = structlog.get_logger(__name__)

USAGE = "<client_id> <private_key_file> <installation_id> [<repo>]"


def require_arguments(client_id: str, private_key_file: str, installation_id: str) -> None:
    """Raise UsageError unless all three required arguments are non-blank."""
    missing = [
        name
        for name, value in (
            ("client_id", client_id),
            ("private_key_file", private_key_file),
            ("installation_id", installation_id),
        )
        if not value or not str(value).strip()
    ]
    if missing:
        raise UsageError(f"Missing required argument(s): {', '.join(missing)}")

    if not str(installation_id).strip().isdigit():
        raise UsageError(f"Installation ID must be numeric: '{installation_id}'")


def load_private_key(path: str | Path) -> RSAPrivateKey:
    """Read and parse a PEM-encoded RSA private key.

    Accepts both PKCS#1 (``BEGIN RSA PRIVATE KEY``, what GitHub hands out)
    and PKCS#8 (``BEGIN PRIVATE KEY``). Passphrase-protected keys are
    rejected since there is no way to supply the passphrase.
    """
    key_path = Path(path).expanduser()

    if not key_path.is_file():
        raise KeyFileNotFoundError(str(path))
    try:
        pem = key_path.read_bytes()
    except OSError as exc:
        logger.debug("key_file_unreadable", path=str(key_path), error=str(exc))
        raise KeyFileNotFoundError(str(path)) from exc

    try:
        key = serialization.load_pem_private_key(pem, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        # TypeError: key is encrypted. ValueError: not PEM, or corrupt.
        raise InvalidPrivateKeyError(str(path), reason=str(exc)) from exc

    if not isinstance(key, RSAPrivateKey):
        raise InvalidPrivateKeyError(
            str(path), reason=f"expected an RSA key, got {type(key).__name__}"
        )

    logger.debug("private_key_loaded", path=str(key_path), key_size=key.key_size)
    return key
