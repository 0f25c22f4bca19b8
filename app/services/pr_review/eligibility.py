"""Allowlist eligibility check for unattended merging."""

from typing import Iterable, Sequence

from app.services.pr_review.schemas import ChangedFile


def is_allowlisted(files: Iterable[ChangedFile], allowed_prefixes: Sequence[str]) -> bool:
    """
    True iff every changed file starts with at least one allowlisted prefix.

    Matching is plain string-prefix, not glob. An empty file set is
    vacuously eligible.
    """
    prefixes = tuple(allowed_prefixes)
    return all(
        any(file.filename.startswith(prefix) for prefix in prefixes) for file in files
    )
