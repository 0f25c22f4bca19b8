"""
Error taxonomy for the PR review pipeline.

Only AuthError, FetchError and a failed merge (ActionError) may abort a
cycle's intended effects; everything else degrades toward "do not merge".
"""


class ReviewPipelineError(Exception):
    """Base class for all review pipeline errors."""


class AuthError(ReviewPipelineError):
    """Webhook signature missing or invalid. Rejected before any review work."""


class FetchError(ReviewPipelineError):
    """Changed files, diff or CI state could not be fetched. Fatal to the cycle."""


class ReviewServiceError(ReviewPipelineError):
    """The text-generation call failed. Downgraded to a FAIL verdict."""


class PersistenceError(ReviewPipelineError):
    """Writing the review record failed. Logged and swallowed."""


class ActionError(ReviewPipelineError):
    """Posting a comment or merging failed."""
