"""
Graph state for a single PR review cycle.

Pure graph state; no service-layer imports.
"""

from typing import List, Optional

from sqlmodel import SQLModel, Field

from app.services.pr_review.schemas import (
    ChangedFile,
    CIState,
    MergeDecision,
    ReviewStage,
    ReviewVerdict,
)


class ReviewCycleState(SQLModel):
    """
    State of one review cycle.

    This is used by LangGraph to carry values between nodes, not a database table.
    """

    pr_number: int = Field(description="The number of the PR under review.")
    stage: ReviewStage = Field(
        default=ReviewStage.RECEIVED, description="Last state the cycle reached."
    )
    changed_files: List[ChangedFile] = Field(
        default_factory=list, description="Files changed by the PR."
    )
    diff: str = Field(default="", description="Unified diff of the PR.")
    eligible: bool = Field(
        default=False, description="Whether every file is on the allowlist."
    )
    verdict: Optional[ReviewVerdict] = Field(
        default=None, description="Parsed AI review verdict."
    )
    ci_state: Optional[CIState] = Field(
        default=None, description="Upstream merge readiness."
    )
    decision: Optional[MergeDecision] = Field(
        default=None, description="Outcome of the merge gates."
    )
