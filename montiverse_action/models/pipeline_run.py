"""
Pipeline Run Model
Pydantic models for a GitLab pipeline and the jobs it ran.
"""
from pydantic import BaseModel


class PipelineRun(BaseModel):
    id: int
    host: str
    project_id: str
    status: str
    web_url: str = ""

    def with_status(self, status: str) -> "PipelineRun":
        return self.model_copy(update={"status": status})


class GitLabJob(BaseModel):
    """One entry of GET /pipelines/:id/jobs. Other API fields are ignored."""
    id: int = 0
    name: str
    status: str
    web_url: str = ""
