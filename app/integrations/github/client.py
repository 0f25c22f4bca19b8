"""
GitHub REST API client for the repository under maintenance.

Every method raises ``httpx.HTTPError`` (including ``HTTPStatusError`` from
``raise_for_status``) on failure; callers translate those into pipeline
errors at the point they cross into a review cycle.
"""

from typing import Any, Dict, List, Optional

import httpx

FILES_PER_PAGE = 100

MERGE_COMMIT_TITLE = "Auto-merge PR #{pr_number}"
MERGE_COMMIT_MESSAGE = (
    "Automatically merged by AI maintainer after safety checks passed."
)


class GitHubClient:
    """Client for interacting with GitHub REST API for a single repository."""

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub Personal Access Token or GitHub App token
            owner: Repository owner (e.g., "octocat")
            repo: Repository name (e.g., "Hello-World")
            base_url: REST API root
            timeout: Per-request timeout in seconds
            client: Optional pre-built HTTP client (shared pool or test transport)
        """
        self.owner = owner
        self.repo = repo
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "AI-Maintainer/1.0",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_pr(self, pr_number: int) -> Dict[str, Any]:
        """
        Get pull request details, including ``mergeable`` and ``mergeable_state``.

        Args:
            pr_number: Pull request number

        Returns:
            PR data as returned by the API.
        """
        response = await self._client.get(
            f"{self._repo_path}/pulls/{pr_number}", headers=self.headers
        )
        response.raise_for_status()
        return response.json()

    async def get_pr_files(self, pr_number: int) -> List[Dict[str, Any]]:
        """
        Get every file changed in a pull request.

        Follows pagination until a short page is returned, so the list is
        never truncated at the API's default page size.

        Args:
            pr_number: Pull request number

        Returns:
            List of file change objects with filename, status, additions, etc.
        """
        files: List[Dict[str, Any]] = []
        page = 1
        while True:
            response = await self._client.get(
                f"{self._repo_path}/pulls/{pr_number}/files",
                headers=self.headers,
                params={"per_page": FILES_PER_PAGE, "page": page},
            )
            response.raise_for_status()
            batch = response.json()
            files.extend(batch)
            if len(batch) < FILES_PER_PAGE:
                return files
            page += 1

    async def get_pr_diff(self, pr_number: int) -> str:
        """
        Get full diff content for a pull request.

        Args:
            pr_number: Pull request number

        Returns:
            Full diff content as text (unified diff format)
        """
        headers = {
            **self.headers,
            "Accept": "application/vnd.github.v3.diff",  # Request diff format
        }
        response = await self._client.get(
            f"{self._repo_path}/pulls/{pr_number}", headers=headers
        )
        response.raise_for_status()
        return response.text

    async def post_pr_comment(self, pr_number: int, body: str) -> None:
        """
        Post a comment on the pull request conversation.

        Args:
            pr_number: Pull request number
            body: Markdown comment body

        The response body is not read; only the status decides success.
        """
        response = await self._client.post(
            f"{self._repo_path}/issues/{pr_number}/comments",
            headers=self.headers,
            json={"body": body},
        )
        response.raise_for_status()

    async def merge_pr(self, pr_number: int) -> None:
        """
        Squash-merge a pull request with the fixed auto-merge commit template.

        Args:
            pr_number: Pull request number
        """
        response = await self._client.put(
            f"{self._repo_path}/pulls/{pr_number}/merge",
            headers=self.headers,
            json={
                "commit_title": MERGE_COMMIT_TITLE.format(pr_number=pr_number),
                "commit_message": MERGE_COMMIT_MESSAGE,
                "merge_method": "squash",
            },
        )
        response.raise_for_status()
