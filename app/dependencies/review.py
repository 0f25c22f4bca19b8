"""
PR review dependencies.

The scheduler is built once in the lifespan and kept on ``app.state``.
"""

from fastapi import Request

from app.services.pr_review.scheduler import ReviewScheduler


def get_review_scheduler(request: Request) -> ReviewScheduler:
    """Get the process-wide review scheduler"""
    return request.app.state.review_scheduler
