from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Header, Request

from app.dependencies.review import get_review_scheduler
from app.services.github.webhook_service import handle_github_webhook
from app.services.pr_review.scheduler import ReviewScheduler

router = APIRouter()


@router.post("/webhook")
async def github_webhook(
    request: Request,
    scheduler: Annotated[ReviewScheduler, Depends(get_review_scheduler)],
    x_github_event: Optional[str] = Header(default=None),
    x_hub_signature_256: Optional[str] = Header(default=None),
):
    """
    Handle GitHub webhook requests.

    Args:
        request: The incoming HTTP request (raw body is needed for the signature).
        x_github_event: The GitHub event type (e.g., 'push', 'pull_request').
        x_hub_signature_256: HMAC SHA-256 signature of the body.

    Returns:
        A JSON acknowledgement; review cycles run after the response is sent.
    """
    raw_body = await request.body()
    return await handle_github_webhook(
        event_type=x_github_event,
        raw_body=raw_body,
        signature_header=x_hub_signature_256,
        scheduler=scheduler,
    )
