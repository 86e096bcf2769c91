"""CLI for reviewroulette, built on cyclopts."""

from __future__ import annotations

import asyncio
import os
import random
import sys
from typing import TYPE_CHECKING

import cyclopts
from pydantic import ValidationError

from reviewroulette import actions
from reviewroulette.config import DEFAULT_POOL_PATH

if TYPE_CHECKING:
    from collections.abc import Iterable

app = cyclopts.App(
    name="reviewroulette",
    help="reviewroulette: pick pull request reviewers at random from a reviewer pool.",
)


@app.default
def assign(
    *,
    github_token: str | None = None,
    slack_webhook_url: str | None = None,
    reviewers_config_path: str | None = None,
    max_reviewers: int | None = None,
    language: str | None = None,
) -> None:
    """Select reviewers for the current pull request and request their review (default command).

    Every option falls back to the matching action input (``INPUT_GITHUB-TOKEN``, ...).
    """
    from reviewroulette.runner import read_inputs, run  # noqa: PLC0415

    actions.configure_logging()
    try:
        inputs = read_inputs(
            github_token=github_token,
            slack_webhook_url=slack_webhook_url,
            reviewers_config_path=reviewers_config_path,
            max_reviewers=max_reviewers,
            language=language,
        )
    except ValidationError as exc:
        sys.exit(actions.set_failed(f"Invalid input: {exc}"))

    result = asyncio.run(run(inputs))
    if result.error:
        sys.exit(actions.set_failed(result.error))


@app.command
def preview(
    author: str,
    *,
    count: int = 2,
    config: str = DEFAULT_POOL_PATH,
    seed: int | None = None,
) -> None:
    """Show which reviewers would be picked for a PR opened by AUTHOR, without assigning anyone.

    Args:
        author: GitHub handle of the PR author.
        count: Number of reviewers to pick.
        config: Path to the reviewer pool document.
        seed: Seed for a reproducible pick.
    """
    from reviewroulette.config import load_pool  # noqa: PLC0415
    from reviewroulette.models import SelectionRequest  # noqa: PLC0415
    from reviewroulette.selector import select_reviewers  # noqa: PLC0415

    actions.configure_logging()
    try:
        request = SelectionRequest(count=count, exclude=author)
    except ValidationError as exc:
        print(f"❌ Invalid request: {exc}")
        sys.exit(1)

    pool = load_pool(config)
    rng = random.Random(seed) if seed is not None else None  # noqa: S311
    result = select_reviewers(pool, request, rng=rng)

    print(f"Outcome: {result.outcome.value}")
    if not result.reviewers:
        print("No reviewers selected.")
        return
    fixed_keys = {c.identity_key for c in pool.fixed}
    for reviewer in result.reviewers:
        marker = " (fixed)" if reviewer.identity_key in fixed_keys else ""
        print(f"  - {reviewer.github_name}{marker}")


@app.command
def init(path: str = DEFAULT_POOL_PATH) -> None:
    """Write a starter reviewer pool document.

    Args:
        path: Where to create the file.
    """
    from reviewroulette.config import init_pool_file  # noqa: PLC0415

    init_pool_file(path)


@app.command(name="check-env")
def check_env() -> None:
    """Print the action inputs and runner variables in effect and validate the reviewer pool.

    Sensitive values are masked. Unrecognized ``INPUT_*`` variables are
    reported as possible typos.
    """
    from reviewroulette.config import PoolLoadError, read_pool  # noqa: PLC0415
    from reviewroulette.runner import INPUT_NAMES, read_inputs  # noqa: PLC0415

    known_inputs = _build_known_inputs(INPUT_NAMES.values())

    print("reviewroulette check-env")
    print("=" * 40)

    # 1. Collect INPUT_* and GITHUB_* env vars
    env_vars = {k: v for k, v in sorted(os.environ.items()) if k.startswith(("INPUT_", "GITHUB_"))}

    if not env_vars:
        print("\nNo INPUT_* or GITHUB_* environment variables set.")
    else:
        print(f"\nFound {len(env_vars)} variable(s):\n")
        for key, value in env_vars.items():
            display = _mask_value(key, value)
            known = _is_known_var(key, known_inputs)
            marker = "" if known else "  ⚠️  UNRECOGNIZED"
            print(f"  {key} = {display}{marker}")

    # 2. Check for unrecognized inputs
    unknown = [k for k in env_vars if not _is_known_var(k, known_inputs)]
    if unknown:
        print(f"\n⚠️  {len(unknown)} unrecognized input(s) (possible typos):")
        for k in unknown:
            print(f"  - {k}")

    # 3. Validate inputs
    print("\n" + "-" * 40)
    print("Validating inputs...\n")
    try:
        inputs = read_inputs()
    except ValidationError as exc:
        print(f"❌ Input error: {exc}")
        sys.exit(1)

    token = "set" if inputs.github_token else "MISSING"
    slack = "enabled" if inputs.slack_webhook_url else "disabled"
    print(f"  github-token: {token}")
    print(f"  max-reviewers: {inputs.max_reviewers}")
    print(f"  language: {inputs.language.value}")
    print(f"  Slack notification: {slack}")

    # 4. Check reviewer pool
    print("-" * 40)
    print(f"Checking reviewer pool {inputs.reviewers_config_path}...\n")
    try:
        pool = read_pool(inputs.reviewers_config_path)
    except PoolLoadError as exc:
        print(f"  ❌ {exc}")
        sys.exit(1)

    print(f"  ✅ {len(pool.regular)} regular, {len(pool.fixed)} fixed reviewer(s)")
    print()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_MASK_MIN_LENGTH = 4
_TRUNCATE_LENGTH = 80


def _build_known_inputs(input_names: Iterable[str]) -> frozenset[str]:
    """Return the env var names of all declared action inputs."""
    return frozenset(actions.input_env_name(name) for name in input_names)


def _is_known_var(key: str, known_inputs: frozenset[str]) -> bool:
    """Runner-provided GITHUB_* vars are always known; INPUT_* vars must be declared inputs."""
    return key.startswith("GITHUB_") or key in known_inputs


def _mask_value(key: str, value: str) -> str:
    """Mask sensitive values."""
    sensitive_keywords = ("token", "secret", "key", "password", "webhook")
    if any(kw in key.lower() for kw in sensitive_keywords):
        if len(value) > _MASK_MIN_LENGTH:
            return value[:2] + "*" * (len(value) - _MASK_MIN_LENGTH) + value[-2:]
        return "****"
    # Truncate very long values (e.g. JSON blobs)
    if len(value) > _TRUNCATE_LENGTH:
        return value[: _TRUNCATE_LENGTH - 3] + "..."
    return value
