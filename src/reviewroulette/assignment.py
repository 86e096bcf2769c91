"""Request the selected reviewers on the pull request."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reviewroulette import actions, github_api

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reviewroulette.models import Candidate, PullRequest

logger = logging.getLogger(__name__)

OUTPUT_NAME = "assigned-reviewers"


async def assign_reviewers(reviewers: Sequence[Candidate], pull_request: PullRequest, *, token: str) -> list[str]:
    """Request reviews from *reviewers* and publish the ``assigned-reviewers`` output.

    Requesting the same reviewers twice is harmless on GitHub's side.

    Returns:
        The assigned GitHub handles, in request order.

    Raises:
        GitHubError: If GitHub rejects the request.
    """
    names = [r.github_name for r in reviewers]
    await github_api.request_reviewers(
        pull_request.owner,
        pull_request.repo,
        pull_request.number,
        names,
        token=token,
    )
    logger.info("Assigned reviewers: %s", ", ".join(names))
    actions.set_output(OUTPUT_NAME, ",".join(names))
    return names
