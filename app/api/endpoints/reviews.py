from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from app.db.models.review_record import ReviewRecordPublic
from app.dependencies.database import get_db
from app.services.pr_review.store import list_reviews

router = APIRouter()

SessionDep = Annotated[AsyncSession, Depends(get_db)]


@router.get("", response_model=List[ReviewRecordPublic])
async def get_reviews(
    session: SessionDep,
    pr_number: Optional[int] = Query(None, ge=1),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
):
    """Get review records, newest first, with pagination."""
    records = await list_reviews(session, pr_number=pr_number, skip=skip, limit=limit)
    return [record.to_public() for record in records]
