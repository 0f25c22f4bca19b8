"""
GitHub integration package.
"""

from app.integrations.github.client import GitHubClient

__all__ = [
    "GitHubClient",
]
