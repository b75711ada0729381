"""Command-line entry point.

    ghremote <client_id> <private_key_file> <installation_id> [<repo>]

Runs the whole flow once, front to back:
1. Validate arguments and load the RSA private key
2. Build and sign the App JWT
3. GET /app for the owner login, POST .../access_tokens for the token
4. Print the token-embedded remote URL and the remote setup commands

Operator output goes to stdout, diagnostics and logs to stderr. Exit codes
are defined on the exception classes in ghremote.errors.
"""

import argparse
import sys
import time
from typing import Callable, Optional, Sequence

import structlog

from ghremote import __version__
from ghremote.core.config import Settings, get_settings
from ghremote.core.logging import configure_structlog
from ghremote.credentials import USAGE, load_private_key, require_arguments
from ghremote.errors import (
    ConfigError,
    GhRemoteError,
    GitHubAPIError,
    ResponseFieldError,
    UsageError,
)
from ghremote.github import auth, client
from ghremote.remote import (
    build_remote_url,
    redact_remote_url,
    render_instructions,
    validate_host,
)

logger = structlog.get_logger(__name__)

PROG = "ghremote"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=(
            "Authenticate as a GitHub App, mint an installation access token "
            "and print a git remote URL that embeds it."
        ),
    )
    parser.add_argument(
        "client_id",
        nargs="?",
        help="GitHub App client ID (env GITHUB_APP_CLIENT_ID)",
    )
    parser.add_argument(
        "private_key_file",
        nargs="?",
        help="Path to the App's PEM private key (env GITHUB_APP_PRIVATE_KEY_FILE)",
    )
    parser.add_argument(
        "installation_id",
        nargs="?",
        help="Installation ID to mint a token for (env GITHUB_APP_INSTALLATION_ID)",
    )
    parser.add_argument(
        "repo",
        nargs="?",
        help="Repository name used in the remote URL",
    )
    parser.add_argument("--host", help="Git host in the remote URL (default: github.com)")
    parser.add_argument("--remote", default="origin", help="Remote name in the printed commands")
    parser.add_argument("--branch", default="main", help="Branch name in the printed push command")
    parser.add_argument(
        "--token-only",
        action="store_true",
        help="Print only the installation token",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose console logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(
    args: argparse.Namespace,
    settings: Settings,
    clock: Callable[[], float] = time.time,
) -> str:
    """Execute the flow for parsed ``args``; returns the remote URL."""
    client_id = args.client_id or settings.github_app_client_id
    key_file = args.private_key_file or settings.github_app_private_key_file
    installation_id = args.installation_id or settings.github_app_installation_id
    verbose = not args.token_only

    require_arguments(client_id, key_file, installation_id)
    client_id = client_id.strip()
    installation_id = installation_id.strip()
    host = validate_host(args.host or settings.github_host)
    structlog.contextvars.bind_contextvars(client_id=client_id, installation_id=installation_id)

    private_key = load_private_key(key_file)
    app_jwt = auth.create_app_jwt(client_id, private_key, clock=clock)

    if verbose:
        print("Generated JWT:")
        print(app_jwt)
        print()

    app_info = _echo_response(
        "GitHub API GET response:", verbose, lambda: client.get_app(app_jwt, settings)
    )
    installation = _echo_response(
        "GitHub API POST response:",
        verbose,
        lambda: client.create_installation_token(app_jwt, installation_id, settings),
    )

    url = build_remote_url(
        installation.token,
        app_info.owner.login,
        args.repo,
        host=host,
    )
    logger.info(
        "installation_token_issued",
        owner=app_info.owner.login,
        expires_at=installation.expires_at,
        remote_url=redact_remote_url(url),
    )

    if args.token_only:
        print(installation.token)
        return url

    print(f"Access token: {installation.token}")
    print(render_instructions(url, remote=args.remote, branch=args.branch))
    return url


def _echo_response(label: str, verbose: bool, call: Callable):
    """Run an API call and print its raw body, including error bodies."""
    try:
        result = call()
    except (GitHubAPIError, ResponseFieldError) as exc:
        if verbose and exc.body:
            print(label)
            print(exc.body)
        raise
    if verbose:
        print(label)
        print(result.raw)
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = get_settings()
    except ConfigError as exc:
        configure_structlog(debug=args.debug)
        print(f"Error: {exc}", file=sys.stderr)
        return exc.exit_code
    configure_structlog(debug=args.debug or settings.debug)

    try:
        run(args, settings)
    except UsageError as exc:
        print(f"Usage: {PROG} {USAGE}", file=sys.stderr)
        print(f"Error: {exc}", file=sys.stderr)
        return exc.exit_code
    except GhRemoteError as exc:
        logger.debug("run_failed", error_type=type(exc).__name__, exit_code=exc.exit_code)
        print(f"Error: {exc}", file=sys.stderr)
        return exc.exit_code
    finally:
        structlog.contextvars.clear_contextvars()
    return 0


if __name__ == "__main__":
    sys.exit(main())
