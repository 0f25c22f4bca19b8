"""
Nodes of the PR review graph.

Each node advances the cycle by exactly one stage. Errors that must abort
the cycle (FetchError, a failed merge) are raised out of the graph; every
other failure is logged here and the cycle carries on.
"""

from typing import Literal

import httpx
from langgraph.runtime import Runtime

from app.core.logging import get_logger
from app.db.models.review_record import ReviewRecordCreate
from app.services.pr_review.actions import MERGED_COMMENT, format_review_comment
from app.services.pr_review.context import Ctx
from app.services.pr_review.decision import decide_merge
from app.services.pr_review.eligibility import is_allowlisted
from app.services.pr_review.errors import ActionError, FetchError
from app.services.pr_review.schemas import ChangedFile, ReviewStage
from app.services.pr_review.state import ReviewCycleState

logger = get_logger(__name__)


async def fetch_changed_files(state: ReviewCycleState, runtime: Runtime[Ctx]) -> dict:
    """List the files changed by the PR."""
    try:
        files = await runtime.context.github.get_pr_files(state.pr_number)
    except httpx.HTTPError as e:
        raise FetchError(f"Error fetching PR files: {e}") from e

    changed_files = [
        ChangedFile(filename=f["filename"], status=f.get("status")) for f in files
    ]
    return {"changed_files": changed_files, "stage": ReviewStage.FILES_FETCHED}


async def fetch_diff(state: ReviewCycleState, runtime: Runtime[Ctx]) -> dict:
    """Fetch the unified diff of the PR."""
    try:
        diff = await runtime.context.github.get_pr_diff(state.pr_number)
    except httpx.HTTPError as e:
        raise FetchError(f"Error fetching PR diff: {e}") from e

    return {"diff": diff, "stage": ReviewStage.DIFF_FETCHED}


async def review_changes(state: ReviewCycleState, runtime: Runtime[Ctx]) -> dict:
    """Run the allowlist check and the AI review."""
    ctx = runtime.context
    eligible = is_allowlisted(state.changed_files, ctx.allowed_prefixes)
    logger.info("PR #%s allowlist check: %s", state.pr_number, eligible)

    verdict = await ctx.reviewer.review(state.diff, state.changed_files)
    logger.info("AI review result: %s", verdict.text)

    return {"eligible": eligible, "verdict": verdict, "stage": ReviewStage.REVIEWED}


async def persist_review(state: ReviewCycleState, runtime: Runtime[Ctx]) -> dict:
    """Append the review to the audit log; failures are swallowed by the executor."""
    record = ReviewRecordCreate(
        pr_number=state.pr_number,
        review_result=state.verdict.text,
        files_changed=[f.filename for f in state.changed_files],
    )
    await runtime.context.actions.persist(record)
    return {"stage": ReviewStage.PERSISTED}


async def post_review_comment(state: ReviewCycleState, runtime: Runtime[Ctx]) -> dict:
    """Post the review result on the PR."""
    comment = format_review_comment(state.verdict, state.eligible)
    try:
        await runtime.context.actions.post_comment(state.pr_number, comment)
    except ActionError as e:
        logger.warning("Review comment not posted, continuing: %s", e)
    return {"stage": ReviewStage.COMMENTED}


async def check_ci(state: ReviewCycleState, runtime: Runtime[Ctx]) -> dict:
    """Query merge readiness and evaluate the merge gates."""
    ci_state = await runtime.context.ci_gate.check(state.pr_number)
    decision = decide_merge(state.eligible, state.verdict, ci_state)
    return {"ci_state": ci_state, "decision": decision, "stage": ReviewStage.CI_CHECKED}


def route_merge(state: ReviewCycleState) -> Literal["merge_pr", "skip_merge"]:
    return "merge_pr" if state.decision.should_merge else "skip_merge"


async def merge_pr(state: ReviewCycleState, runtime: Runtime[Ctx]) -> dict:
    """Squash-merge the PR and announce it. A failed merge aborts the cycle."""
    actions = runtime.context.actions
    logger.info("Auto-merging PR #%s", state.pr_number)
    await actions.merge(state.pr_number)
    try:
        await actions.post_comment(state.pr_number, MERGED_COMMENT)
    except ActionError as e:
        logger.warning("Merge notice not posted: %s", e)
    return {"stage": ReviewStage.MERGED}


async def skip_merge(state: ReviewCycleState) -> dict:
    logger.info(
        "PR #%s not auto-merged. Reasons: %s",
        state.pr_number,
        state.decision.reasons(),
    )
    return {"stage": ReviewStage.NOT_MERGED}
