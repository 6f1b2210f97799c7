"""
GitHub REST API Client - the user's recently updated repositories.

GitHub is not part of the Google consent flow; it authenticates with a
personal access token the user supplies.

API Reference:
==============
- https://docs.github.com/en/rest/repos/repos#list-repositories-for-the-authenticated-user
"""

import logging
from typing import List

from dashboard.environments.base import EnvironmentService
from dashboard.environments.github.schemas import Repository


logger = logging.getLogger("dashboard.environments.github")


class GitHubClient(EnvironmentService):
    """
    GitHub API client authenticated with a personal access token.

    Example:
        client = GitHubClient(access_token="ghp_xxx")
        repos = await client.list_recent_repos()
    """

    service_name = "github"
    BASE_URL = "https://api.github.com"

    def _get_headers(self) -> dict:
        return {
            "Authorization": f"token {self.access_token}",
            "Accept": "application/vnd.github+json",
        }

    async def list_recent_repos(self, per_page: int = 10) -> List[Repository]:
        data = await self._make_request(
            "GET",
            "/user/repos",
            params={"sort": "updated", "per_page": per_page},
        )
        repos = [Repository(**r) for r in data]
        logger.info(f"Fetched {len(repos)} GitHub repositories")
        return repos
