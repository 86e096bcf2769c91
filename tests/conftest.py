"""Global test fixtures for reviewroulette."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import pytest

from reviewroulette.actions import WorkflowCommandHandler
from reviewroulette.models import PullRequest

if TYPE_CHECKING:
    from pathlib import Path

_RUNNER_VARS = (
    "GITHUB_OUTPUT",
    "GITHUB_EVENT_PATH",
    "GITHUB_REPOSITORY",
    "GITHUB_API_URL",
    "RUNNER_DEBUG",
)


@pytest.fixture(autouse=True)
def _clean_runner_env(monkeypatch: pytest.MonkeyPatch):
    """Start every test outside a runner.

    The suite itself runs on GitHub Actions, where INPUT_* and GITHUB_*
    variables would otherwise leak into the code under test.
    """
    for key in list(os.environ):
        if key.startswith("INPUT_") or key in _RUNNER_VARS:
            monkeypatch.delenv(key, raising=False)
    yield
    root = logging.getLogger("reviewroulette")
    for handler in list(root.handlers):
        if isinstance(handler, WorkflowCommandHandler):
            root.removeHandler(handler)
    root.setLevel(logging.NOTSET)


@pytest.fixture
def pull_request() -> PullRequest:
    return PullRequest(
        number=42,
        title="Add reviewer roulette",
        html_url="https://github.com/owner/repo/pull/42",
        author="pr-author",
        owner="owner",
        repo="repo",
    )


@pytest.fixture
def pool_file(tmp_path: Path) -> Path:
    path = tmp_path / "reviewers.yml"
    path.write_text(
        """\
reviewers:
  - githubName: reviewer1
    slackMention: "<@U1>"
  - githubName: reviewer2
  - githubName: pr-author
fixedReviewers:
  - githubName: lead
    slackMention: "<@U9>"
""",
        encoding="utf-8",
    )
    return path

