"""
Side effects of a review cycle: comments, merging and persistence.

None of these retry internally; each can be retried by its caller.
"""

import httpx

from app.core.logging import get_logger
from app.db.models.review_record import ReviewRecordCreate
from app.integrations.github import GitHubClient
from app.services.pr_review.errors import ActionError, PersistenceError
from app.services.pr_review.schemas import ReviewVerdict
from app.services.pr_review.store import ReviewStore

logger = get_logger(__name__)

ALLOWLISTED_NOTE = "✅ Files are in allowlisted paths"
NOT_ALLOWLISTED_NOTE = "⚠️ Files outside allowlisted paths detected"
MERGED_COMMENT = "✅ **Auto-merged** by AI maintainer after all safety checks passed."
FAILURE_COMMENT = "❌ **AI Review Failed** - Manual review required."


def format_review_comment(verdict: ReviewVerdict, eligible: bool) -> str:
    note = ALLOWLISTED_NOTE if eligible else NOT_ALLOWLISTED_NOTE
    return f"🤖 **AI Review Result**\n\n{verdict.text}\n\n{note}"


class ActionExecutor:
    """Performs the externally visible effects of a review cycle."""

    def __init__(self, github: GitHubClient, store: ReviewStore):
        self.github = github
        self.store = store

    async def post_comment(self, pr_number: int, text: str) -> None:
        """
        Post a comment on the PR.

        Raises:
            ActionError: The comment was not posted.
        """
        try:
            await self.github.post_pr_comment(pr_number, text)
        except httpx.HTTPError as e:
            raise ActionError(f"Failed to comment on PR #{pr_number}: {e}") from e

    async def post_failure_notice(self, pr_number: int) -> bool:
        """Best-effort terminal comment asking for manual review."""
        try:
            await self.post_comment(pr_number, FAILURE_COMMENT)
        except ActionError as e:
            logger.error("Could not post failure notice: %s", e)
            return False
        return True

    async def merge(self, pr_number: int) -> None:
        """
        Squash-merge the PR.

        Raises:
            ActionError: The merge call failed; the PR state is undetermined.
        """
        try:
            await self.github.merge_pr(pr_number)
        except httpx.HTTPError as e:
            raise ActionError(f"Failed to merge PR #{pr_number}: {e}") from e

    async def persist(self, record: ReviewRecordCreate) -> bool:
        """Append the review record. A storage outage never blocks the cycle."""
        try:
            await self.store.save(record)
        except PersistenceError as e:
            logger.error("Error storing review result: %s", e, exc_info=True)
            return False
        return True
