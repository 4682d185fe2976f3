"""
GitHub Client
=============
Reads the workflow run history of MontiVerse projects hosted on GitHub.
"""
import logging
from typing import Any

import httpx

from montiverse_action.core.config import GITHUB_API_URL, HISTORY_PAGE_SIZE

logger = logging.getLogger(__name__)


class GitHubClient:

    def __init__(self, github_token: str = "", api_url: str = GITHUB_API_URL) -> None:
        self.api_url = api_url.rstrip("/")
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "MontiVerse-Trigger",
        }
        if github_token:
            self.headers["Authorization"] = f"token {github_token}"

    async def get_workflow_runs(self, repo: str, branch: str) -> Any:
        """
        Most recent completed workflow runs of ``repo`` on ``branch``.

        Returns the decoded body as-is. A non-OK answer is logged but not
        raised: its body has no ``workflow_runs`` and the caller treats it as
        an unavailable history.
        """
        url = f"{self.api_url}/repos/{repo}/actions/runs"
        params = {"branch": branch, "per_page": str(HISTORY_PAGE_SIZE), "status": "completed"}

        async with httpx.AsyncClient(headers=self.headers) as client:
            response = await client.get(url, params=params)

        if not response.is_success:
            logger.warning("GitHub API returned status code %d for %s", response.status_code, repo)
        try:
            return response.json()
        except ValueError:
            return {"message": response.text}
