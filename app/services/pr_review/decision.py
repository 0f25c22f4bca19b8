"""Merge decision: the conjunction of the four merge gates."""

from app.services.pr_review.schemas import CIState, MergeDecision, ReviewVerdict


def should_merge(eligible: bool, is_pass: bool, mergeable: bool, is_clean: bool) -> bool:
    return eligible and is_pass and mergeable and is_clean


def decide_merge(
    eligible: bool, verdict: ReviewVerdict, ci_state: CIState
) -> MergeDecision:
    """Combine eligibility, the AI verdict and CI state. Pure; no I/O."""
    ai_pass = verdict.passed
    mergeable = ci_state.mergeable
    clean = ci_state.is_clean
    return MergeDecision(
        eligible=eligible,
        ai_pass=ai_pass,
        mergeable=mergeable,
        clean=clean,
        should_merge=should_merge(eligible, ai_pass, mergeable, clean),
    )
