"""Pydantic models for reviewroulette."""

from __future__ import annotations

from enum import StrEnum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Language(StrEnum):
    """Languages available for the Slack notification text."""

    KO = "ko"
    EN = "en"


class SelectionOutcome(StrEnum):
    """Which branch of the selection algorithm produced a result."""

    NO_CANDIDATES = "no_candidates"
    ALL_AVAILABLE = "all_available"
    FIXED_ONLY = "fixed_only"
    SAMPLED = "sampled"


class Candidate(BaseModel):
    """A person eligible for reviewer assignment."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    github_name: str = Field(
        min_length=1,
        validation_alias=AliasChoices("githubName", "github_name"),
        description="GitHub handle of the reviewer (compared case-insensitively)",
    )
    slack_mention: str | None = Field(
        default=None,
        validation_alias=AliasChoices("slackMention", "slack_mention"),
        description="Slack mention token, e.g. '<@U123>'",
    )

    @field_validator("slack_mention", mode="before")
    @classmethod
    def _mention_as_text(cls, value: object) -> str | None:
        """Keep scalar mention tokens as text; anything else means no mention."""
        if isinstance(value, str):
            return value
        if isinstance(value, int | float):
            return str(value)
        return None

    @property
    def identity_key(self) -> str:
        return self.github_name.lower()


class CandidatePool(BaseModel):
    """Regular and fixed reviewer candidates loaded from the pool document."""

    model_config = ConfigDict(frozen=True)

    regular: tuple[Candidate, ...] = Field(default=(), description="Candidates subject to random sampling")
    fixed: tuple[Candidate, ...] = Field(default=(), description="Candidates always included unless excluded")

    @property
    def is_empty(self) -> bool:
        return not self.regular and not self.fixed


class SelectionRequest(BaseModel):
    """How many reviewers to pick and whom to leave out."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=0, description="Requested number of reviewers")
    exclude: str = Field(default="", description="Handle that must never be selected (the PR author)")


class SelectionResult(BaseModel):
    """Final reviewer list, fixed members first."""

    model_config = ConfigDict(frozen=True)

    reviewers: tuple[Candidate, ...] = Field(default=(), description="Selected reviewers in assignment order")
    outcome: SelectionOutcome = Field(description="Selection branch that produced this result")

    @property
    def names(self) -> list[str]:
        return [r.github_name for r in self.reviewers]


class PullRequest(BaseModel):
    """The pull request the action was triggered for."""

    number: int = Field(description="PR number")
    title: str = Field(default="", description="PR title")
    html_url: str = Field(default="", description="PR URL")
    author: str = Field(default="", description="GitHub login of the PR creator")
    owner: str = Field(description="Repository owner")
    repo: str = Field(description="Repository name")


class ActionInputs(BaseModel):
    """Invocation parameters, as declared by the action."""

    model_config = ConfigDict(extra="ignore")

    github_token: str = Field(default="", description="Token used to request reviewers")
    slack_webhook_url: str = Field(default="", description="Slack incoming webhook; empty skips notification")
    reviewers_config_path: str = Field(default=".github/reviewers.yml", description="Path to the reviewer pool document")
    max_reviewers: int = Field(default=2, ge=0, description="Number of reviewers to assign")
    language: Language = Field(default=Language.KO, description="Language of the Slack notification")


class RunResult(BaseModel):
    """Terminal outcome of one action run."""

    assigned: list[str] = Field(default_factory=list, description="Handles that were requested as reviewers")
    notified: bool = Field(default=False, description="Whether the Slack notification was delivered")
    error: str | None = Field(default=None, description="Failure message if the run failed")
