"""
Data model for the PR review pipeline.

Pure data types; no service or I/O imports.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import field_validator
from sqlmodel import SQLModel, Field

PASS_PREFIX = "PASS:"
FAIL_PREFIX = "FAIL:"


class PullRequestAction(str, Enum):
    """Pull request webhook actions the pipeline distinguishes."""

    OPENED = "opened"
    SYNCHRONIZE = "synchronize"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Optional[str]) -> "PullRequestAction":
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


REVIEWABLE_ACTIONS = frozenset({PullRequestAction.OPENED, PullRequestAction.SYNCHRONIZE})


@dataclass(frozen=True)
class PullRequestEvent:
    """A received ``pull_request`` webhook delivery."""

    pr_number: int
    action: PullRequestAction
    payload: bytes

    @classmethod
    def from_payload(cls, raw_body: bytes, payload: Dict[str, Any]) -> "PullRequestEvent":
        """
        Build an event from a decoded pull_request payload.

        The PR number comes from the top-level ``number`` field, falling back
        to ``pull_request.number``.  Anything but a JSON integer leaves the event
        unreviewable.
        """
        number = payload.get("number")
        if number is None:
            number = (payload.get("pull_request") or {}).get("number")
        if isinstance(number, int) and not isinstance(number, bool):
            pr_number = number
        else:
            pr_number = 0
        return cls(
            pr_number=pr_number,
            action=PullRequestAction.parse(payload.get("action")),
            payload=raw_body,
        )

    @property
    def is_reviewable(self) -> bool:
        return self.pr_number > 0 and self.action in REVIEWABLE_ACTIONS


class ChangedFile(SQLModel):
    """A file touched by a pull request."""

    filename: str = Field(description="Repository-relative path of the file.")
    status: Optional[str] = Field(
        default=None, description="added, modified, removed, renamed, ..."
    )


class ReviewVerdict(SQLModel):
    """
    PASS/FAIL outcome of the AI review.

    ``text`` is the trimmed model response as posted and persisted;
    ``reason`` is the text after the verdict prefix.
    """

    passed: bool = Field(description="True only for a PASS: response.")
    reason: str = Field(default="", description="Short justification.")
    text: str = Field(default="", description="Trimmed raw response text.")

    @classmethod
    def parse(cls, response: Optional[str]) -> "ReviewVerdict":
        """
        Parse a model response.

        Only a response starting with the literal ``PASS:`` (after trimming)
        passes. Anything else, including empty output, is a FAIL.
        """
        text = (response or "").strip()
        if text.startswith(PASS_PREFIX):
            return cls(passed=True, reason=text[len(PASS_PREFIX) :].strip(), text=text)
        if text.startswith(FAIL_PREFIX):
            return cls(passed=False, reason=text[len(FAIL_PREFIX) :].strip(), text=text)
        return cls(passed=False, reason=text, text=text)

    @classmethod
    def fail(cls, reason: str) -> "ReviewVerdict":
        return cls(passed=False, reason=reason, text=f"{FAIL_PREFIX} {reason}")


class MergeableState(str, Enum):
    """GitHub's ``mergeable_state`` values."""

    CLEAN = "clean"
    UNSTABLE = "unstable"
    DIRTY = "dirty"
    UNKNOWN = "unknown"
    BLOCKED = "blocked"
    BEHIND = "behind"
    DRAFT = "draft"
    HAS_HOOKS = "has_hooks"


class CIState(SQLModel):
    """Upstream merge readiness for one PR, fetched once per cycle."""

    mergeable: bool = Field(default=False)
    mergeable_state: MergeableState = Field(default=MergeableState.UNKNOWN)

    @field_validator("mergeable", mode="before")
    @classmethod
    def _null_is_not_mergeable(cls, value: Any) -> Any:
        # GitHub reports null while it is still computing mergeability
        return False if value is None else value

    @field_validator("mergeable_state", mode="before")
    @classmethod
    def _unrecognised_state_is_unknown(cls, value: Any) -> Any:
        if isinstance(value, MergeableState):
            return value
        try:
            return MergeableState(value)
        except ValueError:
            return MergeableState.UNKNOWN

    @property
    def is_clean(self) -> bool:
        return self.mergeable_state == MergeableState.CLEAN


class MergeDecision(SQLModel):
    """The four merge gates and their conjunction."""

    eligible: bool
    ai_pass: bool
    mergeable: bool
    clean: bool
    should_merge: bool

    def reasons(self) -> str:
        return (
            f"allowlist={self.eligible}, ai_pass={self.ai_pass}, "
            f"mergeable={self.mergeable}, clean={self.clean}"
        )


class ReviewStage(str, Enum):
    """Review cycle states, in transition order."""

    RECEIVED = "Received"
    FILES_FETCHED = "FilesFetched"
    DIFF_FETCHED = "DiffFetched"
    REVIEWED = "Reviewed"
    PERSISTED = "Persisted"
    COMMENTED = "Commented"
    CI_CHECKED = "CIChecked"
    MERGED = "Merged"
    NOT_MERGED = "NotMerged"
    FAILED = "Failed"


class ReviewOutcome(SQLModel):
    """What a review cycle ended with."""

    pr_number: int
    stage: ReviewStage
    decision: Optional[MergeDecision] = None
    verdict: Optional[ReviewVerdict] = None
    error: Optional[str] = None

    @property
    def merged(self) -> bool:
        return self.stage == ReviewStage.MERGED
