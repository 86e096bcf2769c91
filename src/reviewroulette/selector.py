"""Reviewer selection.

Picks the final reviewer list from a :class:`CandidatePool`:

1. Drop the PR author from both pools, and drop fixed reviewers from the
   regular pool so nobody is requested twice.
2. Nobody left: return an empty result.
3. Fewer (or exactly as many) candidates than requested: return all of them,
   fixed first, in pool order.
4. Fixed reviewers already fill the request: return only the fixed reviewers.
   Fixed membership is never truncated, even when it exceeds the count.
5. Otherwise fill the remaining slots with a uniform random sample of the
   regular pool (Fisher-Yates over a private copy, then take a prefix).

Outcomes 2-4 are logged; none of them is an error.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, TypeVar

from reviewroulette.models import Candidate, CandidatePool, SelectionOutcome, SelectionRequest, SelectionResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

T = TypeVar("T")


def filter_candidates(candidates: Iterable[Candidate], exclude: Iterable[str]) -> list[Candidate]:
    """Return *candidates* without any whose handle matches *exclude* (case-insensitive).

    Order is preserved, so filtering an already-filtered list is a no-op.
    """
    excluded = {name.lower() for name in exclude}
    return [c for c in candidates if c.identity_key not in excluded]


def fisher_yates_shuffle(items: Sequence[T], rng: random.Random) -> list[T]:
    """Return a uniformly shuffled copy of *items*; the input is left untouched."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def select_reviewers(
    pool: CandidatePool,
    request: SelectionRequest,
    *,
    rng: random.Random | None = None,
) -> SelectionResult:
    """Select reviewers for a pull request.

    Args:
        pool: Deduplicated regular and fixed candidates. An empty pool is valid.
        request: Requested count and the handle to exclude (the PR author).
        rng: Random source for the sampling step. Pass a seeded
            ``random.Random`` for reproducible results.

    Returns:
        The selection, fixed reviewers first. May be empty.
    """
    fixed = filter_candidates(pool.fixed, [request.exclude])
    regular = filter_candidates(pool.regular, [request.exclude, *(c.github_name for c in fixed)])
    total = len(fixed) + len(regular)

    if total == 0:
        logger.warning("No available reviewers after filtering PR creator")
        return SelectionResult(outcome=SelectionOutcome.NO_CANDIDATES)

    if total <= request.count:
        logger.info("Only %d reviewers available, selecting all", total)
        return SelectionResult(reviewers=(*fixed, *regular), outcome=SelectionOutcome.ALL_AVAILABLE)

    remaining = request.count - len(fixed)
    if remaining <= 0:
        logger.info("All %d reviewers are fixed, no random selection needed", len(fixed))
        return SelectionResult(reviewers=tuple(fixed), outcome=SelectionOutcome.FIXED_ONLY)

    sampled = fisher_yates_shuffle(regular, rng or random.Random())[:remaining]  # noqa: S311
    logger.debug("Sampled %d of %d regular reviewers", len(sampled), len(regular))
    return SelectionResult(reviewers=(*fixed, *sampled), outcome=SelectionOutcome.SAMPLED)
