"""Direct GitHub REST API client using httpx.

The token is passed in by the caller (the action's ``github-token`` input).
``GITHUB_API_URL`` overrides the API base URL, as set by runners on GitHub
Enterprise Server.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_GITHUB_API_URL = "https://api.github.com"
_TIMEOUT = 30.0


# ---------------------------------------------------------------------------
# Error types
# ---------------------------------------------------------------------------


class GitHubError(Exception):
    """Raised when a GitHub API call fails."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubAuthError(GitHubError):
    """Raised when GitHub rejects the token."""

    def __init__(self, detail: str = "") -> None:
        msg = "GitHub rejected the token. Check the github-token input and its permissions (pull-requests: write)."
        if detail:
            msg = f"{detail}\n{msg}"
        super().__init__(msg, status_code=401)


# ---------------------------------------------------------------------------
# Repo parsing
# ---------------------------------------------------------------------------


def parse_repo(repo: str) -> tuple[str, str]:
    """Parse an ``owner/repo`` string into a ``(owner, repo_name)`` tuple.

    Raises:
        GitHubError: If the string is not in ``owner/repo`` format.
    """
    owner, _, repo_name = repo.partition("/")
    if not owner or not repo_name:
        msg = f"Invalid repo format {repo!r}. Expected 'owner/repo'."
        raise GitHubError(msg)
    return owner, repo_name


# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------


def api_url() -> str:
    """Return the REST API base URL without a trailing slash."""
    return (os.environ.get("GITHUB_API_URL") or _GITHUB_API_URL).rstrip("/")


def _headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }


_HTTP_UNAUTHORIZED = 401
_HTTP_FORBIDDEN = 403


def _raise_for_status(response: httpx.Response) -> None:
    """Raise appropriate :exc:`GitHubError` subclass for non-2xx responses."""
    if response.is_success:
        return

    if response.status_code == _HTTP_UNAUTHORIZED:
        raise GitHubAuthError

    try:
        body = response.json()
        msg = body.get("message", response.text)
    except Exception:
        msg = response.text

    if response.status_code == _HTTP_FORBIDDEN:
        if "rate limit" in msg.lower():
            msg = f"GitHub API rate limit exceeded: {msg}"
            raise GitHubError(msg, status_code=_HTTP_FORBIDDEN)
        msg = f"GitHub API access forbidden: {msg}"
        raise GitHubAuthError(msg)

    msg = f"GitHub API error {response.status_code}: {msg}"
    raise GitHubError(msg, status_code=response.status_code)


# ---------------------------------------------------------------------------
# REST
# ---------------------------------------------------------------------------


async def rest(endpoint: str, method: str = "GET", *, token: str, **kwargs: Any) -> Any:
    """Execute a GitHub REST API call.

    Generic over the HTTP method; :func:`request_reviewers` is the POST
    caller, and GET requests send ``kwargs`` as query parameters.

    Args:
        endpoint: REST API endpoint path (e.g. ``/repos/owner/repo/pulls``).
        method: HTTP method (default ``GET``).
        token: Token sent as a bearer credential.
        **kwargs: Query parameters (GET) or JSON body fields (non-GET).

    Returns:
        Parsed JSON response, or ``None`` for an empty body.

    Raises:
        GitHubError: On HTTP failure.
        GitHubAuthError: On authentication failure.
    """
    upper = method.upper()
    params = dict(kwargs) if upper == "GET" and kwargs else None
    json_body = dict(kwargs) if upper != "GET" and kwargs else None

    logger.debug("REST %s %s", upper, endpoint)
    async with httpx.AsyncClient(timeout=_TIMEOUT) as client:
        response = await client.request(upper, f"{api_url()}{endpoint}", headers=_headers(token), params=params, json=json_body)

    _raise_for_status(response)
    if not response.content:
        return None
    return response.json()


async def request_reviewers(owner: str, repo: str, pr_number: int, reviewers: list[str], *, token: str) -> Any:
    """Request reviews from *reviewers* on a pull request."""
    return await rest(
        f"/repos/{owner}/{repo}/pulls/{pr_number}/requested_reviewers",
        "POST",
        token=token,
        reviewers=reviewers,
    )
