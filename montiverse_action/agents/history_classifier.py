"""
History Classifier
==================
Decides whether the project behind a failed job was already broken before
this change, by looking at that project's last CI run on its default branch.

Verdicts:
    fail     - the project's own CI was failing: the change only *might* be
               at fault (reported as a warning)
    success  - the project was healthy: the change broke it
    unknown  - no usable history: treated like success by the report

Sources:
    GitHub (secondary)  - newest completed workflow run decides
    GitLab (primary)    - newest pipeline that finished failed or success
                          decides; running/canceled/... entries are skipped
"""
import logging
from typing import Dict, List, Optional, Protocol

from montiverse_action.core.config import PROJECT_DEFAULT_BRANCH
from montiverse_action.core.constants import NO_GITLAB_HISTORY
from montiverse_action.core.errors import HistoryUnavailable
from montiverse_action.models.job_record import JobRecord, ProviderTag, Verdict
from montiverse_action.models.run_summary import RunSummary
from montiverse_action.services.github_client import GitHubClient
from montiverse_action.services.gitlab_client import GitLabClient

logger = logging.getLogger(__name__)


class RunHistorySource(Protocol):
    async def fetch_run_history(self, project_ref: str, branch: str) -> List[RunSummary]:
        ...


class GitLabHistorySource:
    """Pipelines of a project on the primary GitLab host."""

    def __init__(self, client: GitLabClient) -> None:
        self.client = client

    async def fetch_run_history(self, project_ref: str, branch: str) -> List[RunSummary]:
        return await self.client.get_project_pipelines(project_ref, branch)


class GitHubHistorySource:
    """Completed workflow runs of a project on GitHub."""

    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    async def fetch_run_history(self, project_ref: str, branch: str) -> List[RunSummary]:
        data = await self.client.get_workflow_runs(project_ref, branch)
        runs = data.get("workflow_runs") if isinstance(data, dict) else None
        if not isinstance(runs, list):
            raise HistoryUnavailable(project_ref, data)
        return [RunSummary(conclusion=run.get("conclusion")) for run in runs]


def verdict_from_workflow_runs(runs: List[RunSummary]) -> Verdict:
    if not runs:
        return "unknown"
    return "fail" if runs[0].conclusion == "failure" else "success"


def verdict_from_pipelines(runs: List[RunSummary]) -> Optional[Verdict]:
    """First finished pipeline wins; None if there is none."""
    for run in runs:
        if run.status == "failed":
            return "fail"
        if run.status == "success":
            return "success"
    return None


class HistoryClassifier:

    def __init__(
        self,
        primary: RunHistorySource,
        secondary: RunHistorySource,
        branch: str = PROJECT_DEFAULT_BRANCH,
    ) -> None:
        self.sources: Dict[ProviderTag, RunHistorySource] = {
            "primary": primary,
            "secondary": secondary,
        }
        self.branch = branch

    async def classify(self, job: JobRecord) -> JobRecord:
        """
        Fill in ``verdict`` for a failed job.

        Passed jobs and jobs without a project reference are returned
        untouched. HTTP failures of the GitLab lookup propagate as
        ProviderError; a GitHub answer without history raises
        HistoryUnavailable.
        """
        if job.passed or not job.project_ref:
            return job

        logger.debug("Inspecting previous CI of %s (%s, %s)", job.name, job.project_ref, job.provider)
        runs = await self.sources[job.provider].fetch_run_history(job.project_ref, self.branch)

        if job.provider == "secondary":
            job.verdict = verdict_from_workflow_runs(runs)
            return job

        verdict = verdict_from_pipelines(runs)
        if verdict is None:
            job.verdict = "unknown"
            job.verdict_note = NO_GITLAB_HISTORY
        else:
            job.verdict = verdict
        return job
