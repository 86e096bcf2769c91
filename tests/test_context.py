"""Tests for reading the pull request from the event payload."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

from reviewroulette.context import load_pull_request
from reviewroulette.github_api import GitHubError

_EVENT = {
    "action": "opened",
    "pull_request": {
        "number": 7,
        "title": "Fix the thing",
        "html_url": "https://github.com/acme/widgets/pull/7",
        "user": {"login": "octocat"},
    },
    "repository": {"full_name": "acme/widgets"},
}


def _event_file(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "event.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestLoadPullRequest:
    def test_reads_payload_from_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GITHUB_EVENT_PATH", str(_event_file(tmp_path, _EVENT)))
        monkeypatch.setenv("GITHUB_REPOSITORY", "acme/widgets")
        pr = load_pull_request()
        assert pr is not None
        assert pr.number == 7
        assert pr.title == "Fix the thing"
        assert pr.html_url == "https://github.com/acme/widgets/pull/7"
        assert pr.author == "octocat"
        assert (pr.owner, pr.repo) == ("acme", "widgets")

    def test_explicit_arguments(self, tmp_path: Path):
        pr = load_pull_request(str(_event_file(tmp_path, _EVENT)), "other/repo")
        assert pr is not None
        assert (pr.owner, pr.repo) == ("other", "repo")

    def test_falls_back_to_payload_repository(self, tmp_path: Path):
        pr = load_pull_request(str(_event_file(tmp_path, _EVENT)))
        assert pr is not None
        assert (pr.owner, pr.repo) == ("acme", "widgets")

    def test_missing_author_is_empty(self, tmp_path: Path):
        payload = {"pull_request": {"number": 3}, "repository": {"full_name": "a/b"}}
        pr = load_pull_request(str(_event_file(tmp_path, payload)))
        assert pr is not None
        assert pr.author == ""

    def test_non_pr_event(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.ERROR, logger="reviewroulette")
        payload = {"ref": "refs/heads/main", "repository": {"full_name": "a/b"}}
        assert load_pull_request(str(_event_file(tmp_path, payload))) is None
        assert "This action can only be run on pull request events" in caplog.text

    def test_no_event_file(self, tmp_path: Path):
        assert load_pull_request(str(tmp_path / "missing.json"), "a/b") is None
        assert load_pull_request("", "a/b") is None

    def test_bad_repository_raises(self, tmp_path: Path):
        payload = {"pull_request": {"number": 3}}
        with pytest.raises(GitHubError, match="Invalid repo format"):
            load_pull_request(str(_event_file(tmp_path, payload)))
