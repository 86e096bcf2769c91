"""End-to-end action run: load pool, select, assign, notify."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from reviewroulette import actions, context, notifier
from reviewroulette.assignment import assign_reviewers
from reviewroulette.config import load_pool
from reviewroulette.models import ActionInputs, RunResult, SelectionRequest
from reviewroulette.selector import select_reviewers

if TYPE_CHECKING:
    import random

    from reviewroulette.models import PullRequest

logger = logging.getLogger(__name__)

INPUT_NAMES: dict[str, str] = {
    "github_token": "github-token",
    "slack_webhook_url": "slack-webhook-url",
    "reviewers_config_path": "reviewers-config-path",
    "max_reviewers": "max-reviewers",
    "language": "language",
}


def read_inputs(**overrides: Any) -> ActionInputs:
    """Build :class:`ActionInputs` from ``INPUT_*`` variables.

    Keyword overrides (e.g. CLI flags) win over the environment; ``None``
    overrides and empty inputs fall back to the model defaults.

    Raises:
        pydantic.ValidationError: If an input has an invalid value.
    """
    values: dict[str, Any] = {}
    for field, input_name in INPUT_NAMES.items():
        value = overrides.get(field)
        if value is None:
            value = actions.get_input(input_name) or None
        if value is not None:
            values[field] = value
    return ActionInputs.model_validate(values)


async def run(
    inputs: ActionInputs,
    *,
    pull_request: PullRequest | None = None,
    rng: random.Random | None = None,
) -> RunResult:
    """Run the reviewer assignment once.

    Assignment failures end the run with ``error`` set; notification failures
    are only logged.

    Args:
        inputs: Action inputs.
        pull_request: PR to assign on. Read from the event payload when omitted.
        rng: Random source for reviewer sampling.
    """
    if not inputs.github_token:
        return RunResult(error="GitHub token is required")

    try:
        pr = pull_request or context.load_pull_request()
        if pr is None:
            return RunResult(error="This action can only be run on pull request events")

        if not pr.author:
            logger.warning("Could not determine PR creator")
            return RunResult()

        pool = load_pool(inputs.reviewers_config_path)
        selection = select_reviewers(
            pool,
            SelectionRequest(count=inputs.max_reviewers, exclude=pr.author),
            rng=rng,
        )
        if not selection.reviewers:
            logger.info("No available reviewers found")
            return RunResult()

        assigned = await assign_reviewers(selection.reviewers, pr, token=inputs.github_token)

        notified = False
        if inputs.slack_webhook_url:
            body = await notifier.send_reviewer_notification(
                inputs.slack_webhook_url,
                selection.reviewers,
                pr,
                inputs.language,
            )
            notified = body is not None
    except Exception as exc:
        logger.debug("Run failed", exc_info=True)
        return RunResult(error=f"Action failed: {str(exc) or type(exc).__name__}")

    return RunResult(assigned=assigned, notified=notified)
