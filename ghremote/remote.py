"""Token-embedded git remote URLs and the operator guidance printed with them."""

import re
from urllib.parse import urlparse, urlunparse

from ghremote.errors import UsageError

REPO_PLACEHOLDER = "<repo>"
_HOST_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9.-]*[A-Za-z0-9])?(?::(?P<port>\d{1,5}))?$")
RULE = "=" * 87


def build_remote_url(
    token: str,
    owner: str,
    repo: str | None = None,
    host: str = "github.com",
) -> str:
    """Return https://x-access-token:<token>@<host>/<owner>/<repo>.git.

    Without a repo name the URL carries a literal ``<repo>`` for the
    operator to fill in.
    """
    name = repo.strip() if repo and repo.strip() else REPO_PLACEHOLDER
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return f"https://x-access-token:{token}@{host}/{owner}/{name}.git"


def validate_host(host: str) -> str:
    """Return ``host`` if it is a usable ``name[:port]``, else raise UsageError."""
    value = (host or "").strip()
    match = _HOST_RE.match(value)
    if not match or (match.group("port") and not 0 < int(match.group("port")) <= 65535):
        raise UsageError(f"Invalid git host: '{host}' (expected name or name:port)")
    return value


def redact_remote_url(url: str) -> str:
    """Return a remote URL safe to write into logs.

    Masks the embedded token while keeping user, host and path. The netloc
    is rewritten as text so an odd port never makes this raise.
    """
    parsed = urlparse(url)
    userinfo, sep, hostport = parsed.netloc.rpartition("@")
    if not sep or ":" not in userinfo:
        return url

    user = userinfo.split(":", 1)[0]
    return urlunparse(parsed._replace(netloc=f"{user}:***@{hostport}"))


def render_instructions(url: str, remote: str = "origin", branch: str = "main") -> str:
    """Guidance for the two errors people hit when wiring the remote up."""
    lines = [
        RULE,
        f"Run the following command if error is: No such remote '{remote}'",
        "git remote -v",
        f"git remote add {remote} {url}",
        f"git push {remote} {branch} --force (optional)",
        RULE,
        f"Run the following command if error is: remote {remote} already exists",
        f"git remote set-url {remote} {url}",
        "Option commands for this error:",
        f"git remote remove {remote}",
        f"git remote add {remote} {url}",
    ]
    return "\n".join(lines)
