"""Slack incoming-webhook notification for newly assigned reviewers.

Delivery is best effort: any failure is logged as a warning and never fails
the run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from reviewroulette.models import Language

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reviewroulette.models import Candidate, PullRequest

logger = logging.getLogger(__name__)

_TIMEOUT = 10.0

MESSAGE_TEMPLATES: dict[Language, dict[str, str]] = {
    Language.KO: {
        "assignment_header": "리뷰어로 할당되었습니다!!",
        "pr_title_label": "PR 제목",
        "author_label": "담당자",
        "reviewers_label": "리뷰어",
        "review_link_label": "리뷰하러 가기",
    },
    Language.EN: {
        "assignment_header": "You have been assigned as reviewers!!",
        "pr_title_label": "PR Title",
        "author_label": "Author",
        "reviewers_label": "Reviewers",
        "review_link_label": "Review PR",
    },
}


def compose_message(reviewers: Sequence[Candidate], pull_request: PullRequest, language: Language = Language.KO) -> str:
    """Build the notification text, mentioning reviewers that have a Slack handle."""
    t = MESSAGE_TEMPLATES[Language(language)]
    mentions = " ".join(r.slack_mention for r in reviewers if r.slack_mention)
    reviewer_list = ", ".join(r.github_name for r in reviewers)
    return (
        (f"{mentions}\n" if mentions else "")
        + f"{t['assignment_header']} \n"
        + f"• {t['pr_title_label']}: {pull_request.title}\n"
        + f"• {t['author_label']}: {pull_request.author}\n"
        + f"• {t['reviewers_label']}: {reviewer_list}\n"
        + f"• {t['review_link_label']} >> {pull_request.html_url}"
    )


async def send_reviewer_notification(
    webhook_url: str,
    reviewers: Sequence[Candidate],
    pull_request: PullRequest,
    language: Language = Language.KO,
) -> str | None:
    """Post the assignment message to a Slack webhook.

    Returns:
        The webhook response body, or ``None`` if delivery failed.
    """
    payload = {"text": compose_message(reviewers, pull_request, language)}
    try:
        async with httpx.AsyncClient(timeout=_TIMEOUT) as client:
            response = await client.post(webhook_url, json=payload)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Failed to send Slack webhook notification: %s", exc)
        return None

    logger.info("Slack webhook notification sent successfully")
    return response.text
