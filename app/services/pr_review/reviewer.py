"""AI review of a pull request diff."""

from typing import Sequence

from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import Runnable

from app.core.logging import get_logger
from app.services.pr_review.errors import ReviewServiceError
from app.services.pr_review.prompts import CODE_REVIEW_PROMPT
from app.services.pr_review.schemas import ChangedFile, ReviewVerdict

logger = get_logger(__name__)

SERVICE_UNAVAILABLE_REASON = "AI review service unavailable"


class AIReviewer:
    """Ask a chat model for a PASS/FAIL verdict on a change set."""

    def __init__(self, llm: Runnable):
        self.chain = CODE_REVIEW_PROMPT | llm | StrOutputParser()

    async def _complete(self, diff: str, files: Sequence[ChangedFile]) -> str:
        try:
            return await self.chain.ainvoke(
                {
                    "files": ", ".join(f.filename for f in files),
                    "diff": diff,
                }
            )
        except Exception as e:
            raise ReviewServiceError(str(e)) from e

    async def review(self, diff: str, files: Sequence[ChangedFile]) -> ReviewVerdict:
        """
        Review a diff. Never raises: any service failure becomes a FAIL verdict.

        Args:
            diff: Unified diff of the pull request.
            files: Changed files; only their names are shown to the model.

        Returns:
            The parsed verdict.
        """
        try:
            response = await self._complete(diff, files)
        except ReviewServiceError as e:
            logger.error("AI review failed: %s", e, exc_info=True)
            return ReviewVerdict.fail(SERVICE_UNAVAILABLE_REASON)

        return ReviewVerdict.parse(response)
