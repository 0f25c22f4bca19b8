"""
Database models package.
"""

from app.db.models.review_record import (
    ReviewRecord,
    ReviewRecordCreate,
    ReviewRecordPublic,
)

__all__ = [
    "ReviewRecord",
    "ReviewRecordCreate",
    "ReviewRecordPublic",
]
