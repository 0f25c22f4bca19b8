"""GitHub webhook handling: signature check, payload parsing and event routing."""

import json
from typing import Optional

from fastapi import HTTPException

from app.core.config import settings
from app.core.logging import get_logger
from app.services.github.security import verify_signature
from app.services.pr_review.errors import AuthError
from app.services.pr_review.scheduler import ReviewScheduler
from app.services.pr_review.schemas import PullRequestEvent

logger = get_logger(__name__)


async def handle_github_webhook(
    event_type: Optional[str],
    raw_body: bytes,
    signature_header: Optional[str],
    scheduler: ReviewScheduler,
) -> dict:
    """
    Process a GitHub webhook: verify it, parse it and route by event type.

    - Verifies the HMAC SHA-256 signature over the raw body.
    - pull_request opened/synchronize: schedules a review cycle and returns
      immediately; the cycle's outcome is not part of the response.
    - Other events: logged and ignored.

    Args:
        event_type: The X-GitHub-Event header value (e.g. "push", "pull_request").
        raw_body: The raw body bytes for signature verification.
        signature_header: The X-Hub-Signature-256 header.
        scheduler: Where accepted review cycles are spawned.

    Returns:
        A dict to be returned as the JSON response.

    Raises:
        AuthError: The signature is missing or does not match.
    """
    # 1. Verify Signature
    if not verify_signature(raw_body, settings.GITHUB_WEBHOOK_SECRET, signature_header):
        raise AuthError("Invalid signature")

    # 2. Parse Payload
    try:
        payload = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise HTTPException(status_code=400, detail="Invalid JSON body") from e
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Invalid JSON body")

    if event_type == "pull_request":
        event = PullRequestEvent.from_payload(raw_body, payload)
        if event.is_reviewable:
            logger.info(
                "Processing pull_request event: PR #%s %s",
                event.pr_number,
                event.action.value,
            )
            scheduler.spawn(event.pr_number)
            return {"message": "PR review started"}

    logger.info("GitHub webhook ignored: %s", event_type)
    return {"message": "Event ignored"}
