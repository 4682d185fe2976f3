"""
GitLab Client
=============
Thin async access to the GitLab REST API (v4) of the primary CI provider.

Every request opens its own httpx.AsyncClient; there is one request in flight
at a time, so connection reuse buys nothing. Non-OK answers are raised as
ProviderError subclasses, never swallowed.
"""
import logging
from typing import Dict, List, Optional
from urllib.parse import quote

import httpx

from montiverse_action.core.errors import ProviderError, ResourceNotFound, Unauthorized
from montiverse_action.models.pipeline_run import GitLabJob, PipelineRun
from montiverse_action.models.run_summary import RunSummary

logger = logging.getLogger(__name__)

# GitLab caps per_page at 100
JOBS_PAGE_SIZE = 100


def check_okay(response: httpx.Response) -> None:
    """Raise the matching ProviderError for a non-OK response."""
    if response.is_success:
        return
    if response.status_code == 401:
        raise Unauthorized()
    raise ProviderError(response.status_code)


class GitLabClient:
    """
    Client bound to one GitLab host and project.

    ``host`` and ``project_id`` are URL-component-encoded, so a project may
    be given either by numeric id or by its "group/project" path.
    """

    def __init__(self, host: str, project_id: str, access_token: str = "") -> None:
        self.host = quote(host, safe="")
        self.project_id = quote(str(project_id), safe="")
        self.headers = {
            "Accept": "application/json",
            "PRIVATE-TOKEN": access_token,
        }

    @property
    def api_url(self) -> str:
        return f"https://{self.host}/api/v4"

    @property
    def project_url(self) -> str:
        return f"{self.api_url}/projects/{self.project_id}"

    async def _get(self, url: str, params: Optional[Dict[str, str]] = None) -> httpx.Response:
        async with httpx.AsyncClient(headers=self.headers) as client:
            response = await client.get(url, params=params)
        check_okay(response)
        return response

    async def trigger_pipeline(
        self,
        trigger_token: str,
        ref: str,
        variables: Optional[Dict[str, str]] = None,
    ) -> PipelineRun:
        """
        Start a pipeline with a trigger token.

        See https://docs.gitlab.com/ee/api/pipeline_triggers.html
        """
        url = f"{self.project_url}/trigger/pipeline"
        payload = {"token": trigger_token, "ref": ref, "variables": variables or {}}

        async with httpx.AsyncClient(headers={"Content-Type": "application/json"}) as client:
            response = await client.post(url, json=payload)

        if not response.is_success:
            if response.status_code == 404:
                raise ResourceNotFound()
            raise ProviderError(response.status_code)

        data = response.json()
        return PipelineRun(
            id=data["id"],
            host=self.host,
            project_id=self.project_id,
            status=data.get("status", "pending"),
            web_url=data.get("web_url", ""),
        )

    async def get_pipeline(self, run: PipelineRun) -> PipelineRun:
        """Re-fetch a pipeline; returns a copy carrying the current status."""
        response = await self._get(f"{self.project_url}/pipelines/{run.id}")
        return run.with_status(response.json()["status"])

    async def get_jobs(self, run_id: int) -> List[GitLabJob]:
        """All jobs of a pipeline including retried ones, newest first, across all pages."""
        url = f"{self.project_url}/pipelines/{run_id}/jobs"
        jobs: List[GitLabJob] = []
        page = "1"

        while page:
            response = await self._get(
                url,
                params={"include_retried": "true", "per_page": str(JOBS_PAGE_SIZE), "page": page},
            )
            jobs.extend(GitLabJob.model_validate(job) for job in response.json())
            page = response.headers.get("x-next-page", "").strip()

        return jobs

    async def get_raw_file(self, file_path: str, ref: str) -> str:
        encoded = quote(file_path, safe="")
        response = await self._get(
            f"{self.project_url}/repository/files/{encoded}/raw",
            params={"ref": ref},
        )
        return response.text

    async def get_project_pipelines(self, project_ref: str, branch: str) -> List[RunSummary]:
        """Pipelines of another project on this host, newest first."""
        namespace = quote(project_ref, safe="")
        response = await self._get(
            f"{self.api_url}/projects/{namespace}/pipelines",
            params={"ref": branch},
        )
        return [RunSummary(status=p.get("status")) for p in response.json()]
