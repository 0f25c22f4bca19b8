"""
Fire-and-forget scheduling of review cycles.

The webhook acknowledges a delivery before its cycle runs, so the HTTP
response says nothing about the outcome. Duplicate deliveries for the same
PR are not deduplicated.
"""

import asyncio
from typing import Set

from app.core.logging import get_logger
from app.services.pr_review.orchestrator import PRReviewOrchestrator

logger = get_logger(__name__)


class ReviewScheduler:
    """Spawns review cycles as background tasks and keeps them alive."""

    def __init__(self, orchestrator: PRReviewOrchestrator):
        self.orchestrator = orchestrator
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, pr_number: int) -> None:
        """Start a review cycle for ``pr_number`` without waiting for it."""
        task = asyncio.create_task(
            self.orchestrator.run(pr_number), name=f"pr-review-{pr_number}"
        )
        # Keep a strong reference until the task finishes
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                "Review task %s crashed", task.get_name(), exc_info=task.exception()
            )

    async def drain(self) -> None:
        """Wait for in-flight cycles to finish. Cycles are never cancelled."""
        if not self._tasks:
            return
        logger.info("Waiting for %d review cycle(s) to finish", len(self._tasks))
        await asyncio.gather(*self._tasks, return_exceptions=True)
