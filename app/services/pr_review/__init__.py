"""
PR review pipeline: eligibility, AI review, merge gates and side effects.
"""

from app.services.pr_review.orchestrator import PRReviewOrchestrator
from app.services.pr_review.reviewer import AIReviewer
from app.services.pr_review.scheduler import ReviewScheduler
from app.services.pr_review.store import ReviewStore

__all__ = [
    "PRReviewOrchestrator",
    "AIReviewer",
    "ReviewScheduler",
    "ReviewStore",
]
