"""
LangGraph Runtime Context for PR review.

Defines the context schema for dependency injection into LangGraph nodes.
"""

from dataclasses import dataclass
from typing import Tuple

from app.integrations.github import GitHubClient
from app.services.pr_review.actions import ActionExecutor
from app.services.pr_review.ci_gate import CIGate
from app.services.pr_review.reviewer import AIReviewer


@dataclass(frozen=True)
class Ctx:
    """Runtime context for LangGraph nodes.

    Attributes:
        github: Client for the maintained repository.
        reviewer: AI reviewer producing PASS/FAIL verdicts.
        ci_gate: Merge readiness lookup.
        actions: Comment, merge and persistence side effects.
        allowed_prefixes: Path prefixes eligible for unattended merging.
    """

    github: GitHubClient
    reviewer: AIReviewer
    ci_gate: CIGate
    actions: ActionExecutor
    allowed_prefixes: Tuple[str, ...]
