"""Pull request context from the GitHub Actions event payload."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from reviewroulette.github_api import parse_repo
from reviewroulette.models import PullRequest

logger = logging.getLogger(__name__)


def _read_event(event_path: str) -> dict[str, Any]:
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.is_file():
        logger.debug("Event payload %s does not exist", path)
        return {}
    data = json.loads(path.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


def load_pull_request(event_path: str | None = None, repository: str | None = None) -> PullRequest | None:
    """Build the :class:`PullRequest` for the current workflow run.

    Args:
        event_path: Event payload JSON file. Defaults to ``GITHUB_EVENT_PATH``.
        repository: ``owner/repo``. Defaults to ``GITHUB_REPOSITORY``, then to
            the repository in the payload.

    Returns:
        The pull request, or ``None`` when the run was not triggered by a
        pull request event.
    """
    event = _read_event(event_path if event_path is not None else os.environ.get("GITHUB_EVENT_PATH", ""))
    pr = event.get("pull_request") or {}
    number = pr.get("number")
    if not number:
        logger.error("This action can only be run on pull request events")
        return None

    full_name = repository or os.environ.get("GITHUB_REPOSITORY", "") or (event.get("repository") or {}).get("full_name", "")
    owner, repo = parse_repo(full_name)
    return PullRequest(
        number=number,
        title=pr.get("title") or "",
        html_url=pr.get("html_url") or "",
        author=(pr.get("user") or {}).get("login") or "",
        owner=owner,
        repo=repo,
    )
