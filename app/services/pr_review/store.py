"""
Append-only persistence for review records.

Writes go through an injected session factory so review cycles can run
against a substitute database.
"""

from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession
from sqlmodel import select

from app.core.logging import get_logger
from app.db.models.review_record import ReviewRecord, ReviewRecordCreate
from app.services.pr_review.errors import PersistenceError

logger = get_logger(__name__)


class ReviewStore:
    """Inserts one ``pr_reviews`` row per review cycle."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def save(self, record: ReviewRecordCreate) -> ReviewRecord:
        """
        Append a review record in its own transaction.

        Raises:
            PersistenceError: The insert failed; nothing was written.
        """
        row = ReviewRecord.model_validate(record)
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    session.add(row)
                    await session.flush()
                    record_id = row.id
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(
                f"Failed to store review for PR #{record.pr_number}: {e}"
            ) from e

        logger.info("Stored review record %s for PR #%s", record_id, record.pr_number)
        return row


async def list_reviews(
    session: AsyncSession,
    pr_number: Optional[int] = None,
    skip: int = 0,
    limit: int = 20,
) -> List[ReviewRecord]:
    """
    Fetch review records, newest first, optionally for a single PR.
    """
    statement = select(ReviewRecord)
    if pr_number is not None:
        statement = statement.where(ReviewRecord.pr_number == pr_number)
    statement = (
        statement.order_by(desc(ReviewRecord.reviewed_at), desc(ReviewRecord.id))
        .offset(skip)
        .limit(limit)
    )
    result = await session.execute(statement)
    return list(result.scalars().all())
