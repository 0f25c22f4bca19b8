"""
PR review orchestration.

Runs one review cycle per call through the review graph and turns fatal
errors into the Failed state with a best-effort manual-review notice.
"""

from typing import Sequence

from app.core.logging import get_logger
from app.integrations.github import GitHubClient
from app.services.pr_review.actions import ActionExecutor
from app.services.pr_review.ci_gate import CIGate
from app.services.pr_review.context import Ctx
from app.services.pr_review.graph import pr_review_graph
from app.services.pr_review.reviewer import AIReviewer
from app.services.pr_review.schemas import ReviewOutcome, ReviewStage
from app.services.pr_review.store import ReviewStore

logger = get_logger(__name__)


class PRReviewOrchestrator:
    """
    Entry point for review cycles.

    Collaborators are injected once and shared by all cycles; a cycle keeps
    its own state in the graph, so cycles for different PRs never interfere.
    """

    def __init__(
        self,
        github: GitHubClient,
        reviewer: AIReviewer,
        store: ReviewStore,
        allowed_prefixes: Sequence[str],
    ):
        self.actions = ActionExecutor(github, store)
        self.ctx = Ctx(
            github=github,
            reviewer=reviewer,
            ci_gate=CIGate(github),
            actions=self.actions,
            allowed_prefixes=tuple(allowed_prefixes),
        )

    async def run(self, pr_number: int) -> ReviewOutcome:
        """
        Review one pull request and merge it if every gate passes.

        Args:
            pr_number: Pull request number

        Returns:
            The terminal stage (Merged, NotMerged or Failed) with the
            verdict and decision reached on the way.
        """
        logger.info("Starting review for PR #%s", pr_number)
        try:
            result = await pr_review_graph.ainvoke(
                {"pr_number": pr_number},
                context=self.ctx,
            )
        except Exception as e:
            logger.error("Error reviewing PR #%s: %s", pr_number, e, exc_info=True)
            await self.actions.post_failure_notice(pr_number)
            return ReviewOutcome(
                pr_number=pr_number, stage=ReviewStage.FAILED, error=str(e)
            )

        outcome = ReviewOutcome(
            pr_number=pr_number,
            stage=result["stage"],
            decision=result.get("decision"),
            verdict=result.get("verdict"),
        )
        logger.info("Review for PR #%s finished: %s", pr_number, outcome.stage.value)
        return outcome
