"""reviewroulette: random pull request reviewer assignment for GitHub Actions."""

from __future__ import annotations

from reviewroulette.models import Candidate, CandidatePool, SelectionOutcome, SelectionRequest, SelectionResult
from reviewroulette.selector import select_reviewers

__all__ = [
    "Candidate",
    "CandidatePool",
    "SelectionOutcome",
    "SelectionRequest",
    "SelectionResult",
    "select_reviewers",
]
