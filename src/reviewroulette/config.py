"""Reviewer pool configuration.

Loads the reviewer pool document (``.github/reviewers.yml`` by default),
validates each entry with Pydantic and deduplicates by GitHub handle.

YAML is the primary format; files ending in ``.toml`` are read with
``tomllib`` instead. Both use the same shape::

    reviewers:
      - githubName: alice
        slackMention: "<@U123>"
    fixedReviewers:
      - githubName: team-lead

A broken or missing document never aborts the run: :func:`load_pool` logs the
problem and returns an empty pool.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from reviewroulette.models import Candidate, CandidatePool

logger = logging.getLogger(__name__)

DEFAULT_POOL_PATH = ".github/reviewers.yml"

_REGULAR_KEYS = ("reviewers",)
_FIXED_KEYS = ("fixedReviewers", "fixed_reviewers")


class PoolLoadError(Exception):
    """Raised when the reviewer pool document cannot be read or parsed."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


def _parse_document(path: Path, raw: str) -> Any:
    if path.suffix.lower() == ".toml":
        return tomllib.loads(raw)
    return yaml.safe_load(raw)


def _first_list(data: dict[str, Any], keys: tuple[str, ...]) -> list[Any]:
    """Return the first list value found under *keys*; anything else counts as empty."""
    for key in keys:
        if key in data:
            value = data[key]
            return value if isinstance(value, list) else []
    return []


def dedupe_candidates(entries: list[Any]) -> tuple[Candidate, ...]:
    """Validate raw entries and drop invalid ones and repeated handles.

    Handles are compared case-insensitively and the first occurrence wins.
    Entries that are not mappings or lack a non-empty string ``githubName``
    are skipped.
    """
    seen: set[str] = set()
    result: list[Candidate] = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.debug("Skipping non-mapping reviewer entry: %r", entry)
            continue
        try:
            candidate = Candidate.model_validate(entry)
        except ValidationError:
            logger.debug("Skipping invalid reviewer entry: %r", entry)
            continue
        if candidate.identity_key in seen:
            logger.debug("Skipping duplicate reviewer %s", candidate.github_name)
            continue
        seen.add(candidate.identity_key)
        result.append(candidate)
    return tuple(result)


def read_pool(path: str | Path) -> CandidatePool:
    """Read and validate the reviewer pool document.

    Raises:
        PoolLoadError: If the file cannot be read, is not valid YAML/TOML,
            or its top level is not a mapping.
    """
    pool_path = Path(path)
    try:
        raw = pool_path.read_text(encoding="utf-8")
    except (OSError, ValueError) as exc:
        msg = f"Cannot read {pool_path}: {exc}"
        raise PoolLoadError(msg, pool_path) from exc

    try:
        data = _parse_document(pool_path, raw)
    except (yaml.YAMLError, tomllib.TOMLDecodeError, RecursionError) as exc:
        msg = f"Invalid reviewer pool document {pool_path}: {exc}"
        raise PoolLoadError(msg, pool_path) from exc

    if not isinstance(data, dict):
        msg = f"Invalid reviewer pool document {pool_path}: expected a mapping at the top level"
        raise PoolLoadError(msg, pool_path)

    pool = CandidatePool(
        regular=dedupe_candidates(_first_list(data, _REGULAR_KEYS)),
        fixed=dedupe_candidates(_first_list(data, _FIXED_KEYS)),
    )
    logger.debug("Loaded %d regular and %d fixed reviewers from %s", len(pool.regular), len(pool.fixed), pool_path)
    return pool


def load_pool(path: str | Path) -> CandidatePool:
    """Load the reviewer pool, falling back to an empty pool on any failure."""
    try:
        return read_pool(path)
    except PoolLoadError as exc:
        logger.error("Failed to load reviewers config: %s", exc)  # noqa: TRY400
        return CandidatePool()


# -- Template for ``reviewroulette init`` --------------------------------------

DEFAULT_POOL_TEMPLATE = """\
# Reviewer pool for reviewroulette.
#
# reviewers:       candidates picked at random, up to max-reviewers
# fixedReviewers:  always requested (unless they opened the PR)
#
# githubName is required; slackMention is optional and only used
# to mention the reviewer in the Slack notification.

reviewers:
  - githubName: octocat
    slackMention: "<@U0000000>"
  - githubName: hubot

fixedReviewers: []
"""


def init_pool_file(path: str | Path = DEFAULT_POOL_PATH) -> Path:
    """Create a starter reviewer pool document at *path*.

    Raises ``SystemExit(1)`` if the file already exists.

    Returns:
        Path to the created file.
    """
    target = Path(path)
    if target.exists():
        print(f"Error: {target} already exists")  # noqa: T201
        raise SystemExit(1)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_POOL_TEMPLATE, encoding="utf-8")
    print(f"Created {target}")  # noqa: T201
    return target
