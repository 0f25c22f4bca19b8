"""
Review record models and DTOs for the PR review pipeline.

All review record types in one place:
- ReviewRecordBase: shared fields
- ReviewRecordCreate: DTO handed to the action executor for persistence
- ReviewRecord: ORM model (append-only ``pr_reviews`` table)
- ReviewRecordPublic: response DTO
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlmodel import SQLModel, Field
from sqlalchemy import JSON, Column, DateTime
from sqlalchemy.dialects.postgresql import JSONB


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------
class ReviewRecordBase(SQLModel):
    """Shared fields for ReviewRecord."""

    pr_number: int = Field(..., index=True, description="Pull request number.")
    review_result: str = Field(
        ..., description="Verdict text returned by the AI reviewer."
    )
    files_changed: List[str] = Field(
        default_factory=list,
        description="Names of the files changed by the pull request.",
    )


# -----------------------------------------------------------------------------
# Create (DTO layer)
# -----------------------------------------------------------------------------
class ReviewRecordCreate(ReviewRecordBase):
    """
    DTO for appending a review record.
    Does not have an ID or timestamp yet.
    """

    pass


# -----------------------------------------------------------------------------
# ORM Model (Database layer)
# -----------------------------------------------------------------------------
class ReviewRecord(ReviewRecordBase, table=True):
    """
    ORM Model for one review cycle in the audit log.

    Rows are only ever inserted; the pipeline never updates or deletes them.
    """

    __tablename__ = "pr_reviews"

    # JSONB on PostgreSQL, plain JSON elsewhere
    files_changed: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True),
        description="Names of the files changed by the pull request.",
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    reviewed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="The time the review cycle was recorded.",
    )

    def to_public(self) -> "ReviewRecordPublic":
        """Convert to render-safe public DTO."""
        return ReviewRecordPublic(
            id=self.id,
            pr_number=self.pr_number,
            review_result=self.review_result,
            files_changed=list(self.files_changed or []),
            reviewed_at=self.reviewed_at,
        )


# -----------------------------------------------------------------------------
# Public (Response/Read layer)
# -----------------------------------------------------------------------------
class ReviewRecordPublic(ReviewRecordBase):
    """
    Public DTO for ReviewRecord responses.
    """

    id: int
    reviewed_at: datetime
