"""Upstream merge-readiness check."""

import httpx

from app.core.logging import get_logger
from app.integrations.github import GitHubClient
from app.services.pr_review.errors import FetchError
from app.services.pr_review.schemas import CIState

logger = get_logger(__name__)


class CIGate:
    """Reads ``mergeable`` / ``mergeable_state`` for a pull request."""

    def __init__(self, github: GitHubClient):
        self.github = github

    async def check(self, pr_number: int) -> CIState:
        """
        Fetch the current CI state. Never cached across cycles.

        Raises:
            FetchError: The PR could not be queried; merge readiness is unknown.
        """
        try:
            pr_data = await self.github.get_pr(pr_number)
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to check CI status for PR #{pr_number}: {e}") from e

        state = CIState(
            mergeable=pr_data.get("mergeable"),
            mergeable_state=pr_data.get("mergeable_state"),
        )
        logger.debug(
            "PR #%s CI state: mergeable=%s state=%s",
            pr_number,
            state.mergeable,
            state.mergeable_state.value,
        )
        return state
