"""Tests for the Slack webhook notifier."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import httpx
import pytest
import respx
from httpx import Response

if TYPE_CHECKING:
    from reviewroulette.models import PullRequest

from reviewroulette.models import Candidate, Language
from reviewroulette.notifier import compose_message, send_reviewer_notification

_WEBHOOK = "https://hooks.slack.com/services/T000/B000/XXXX"


class TestComposeMessage:
    def test_korean_with_mentions(self, pull_request: PullRequest):
        reviewers = [
            Candidate(github_name="reviewer1", slack_mention="<@U123>"),
            Candidate(github_name="reviewer2", slack_mention="<@U456>"),
        ]
        text = compose_message(reviewers, pull_request, Language.KO)
        assert text.startswith("<@U123> <@U456>\n리뷰어로 할당되었습니다!! \n")
        assert "• PR 제목: Add reviewer roulette\n" in text
        assert "• 담당자: pr-author\n" in text
        assert "• 리뷰어: reviewer1, reviewer2\n" in text
        assert text.endswith("• 리뷰하러 가기 >> https://github.com/owner/repo/pull/42")

    def test_no_mentions(self, pull_request: PullRequest):
        reviewers = [Candidate(github_name="reviewer1"), Candidate(github_name="reviewer2")]
        text = compose_message(reviewers, pull_request)
        assert text.startswith("리뷰어로 할당되었습니다!!")
        assert "<@" not in text

    def test_partial_mentions(self, pull_request: PullRequest):
        reviewers = [Candidate(github_name="a"), Candidate(github_name="b", slack_mention="<@U2>")]
        assert compose_message(reviewers, pull_request).startswith("<@U2>\n")

    def test_english(self, pull_request: PullRequest):
        text = compose_message([Candidate(github_name="alice")], pull_request, Language.EN)
        assert text == (
            "You have been assigned as reviewers!! \n"
            "• PR Title: Add reviewer roulette\n"
            "• Author: pr-author\n"
            "• Reviewers: alice\n"
            "• Review PR >> https://github.com/owner/repo/pull/42"
        )

    def test_accepts_plain_language_string(self, pull_request: PullRequest):
        assert "PR Title" in compose_message([Candidate(github_name="a")], pull_request, "en")  # type: ignore[arg-type]


class TestSendReviewerNotification:
    async def test_posts_payload(self, pull_request: PullRequest, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.INFO, logger="reviewroulette")
        reviewers = [Candidate(github_name="alice", slack_mention="<@U1>")]
        with respx.mock:
            route = respx.post(_WEBHOOK).mock(return_value=Response(200, text="ok"))
            result = await send_reviewer_notification(_WEBHOOK, reviewers, pull_request, Language.EN)

        assert result == "ok"
        request = route.calls.last.request
        assert request.headers["Content-Type"] == "application/json"
        payload = json.loads(request.content)
        assert set(payload) == {"text"}
        assert payload["text"].startswith("<@U1>\nYou have been assigned as reviewers!!")
        assert "Slack webhook notification sent successfully" in caplog.text

    async def test_http_error_is_warning(self, pull_request: PullRequest, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.INFO, logger="reviewroulette")
        with respx.mock:
            respx.post(_WEBHOOK).mock(return_value=Response(404, text="no_service"))
            result = await send_reviewer_notification(_WEBHOOK, [Candidate(github_name="a")], pull_request)

        assert result is None
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "Failed to send Slack webhook notification" in warnings[0].getMessage()

    async def test_network_error_is_warning(self, pull_request: PullRequest, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.INFO, logger="reviewroulette")
        with respx.mock:
            respx.post(_WEBHOOK).mock(side_effect=httpx.ConnectError("Connection refused"))
            result = await send_reviewer_notification(_WEBHOOK, [Candidate(github_name="a")], pull_request)

        assert result is None
        assert "Failed to send Slack webhook notification" in caplog.text
        assert "Connection refused" in caplog.text

    async def test_invalid_url_is_warning(self, pull_request: PullRequest, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.WARNING, logger="reviewroulette")
        result = await send_reviewer_notification("not a url", [Candidate(github_name="a")], pull_request)
        assert result is None
        assert "Failed to send Slack webhook notification" in caplog.text
