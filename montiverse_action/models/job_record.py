"""
Job Record Model
================
Pydantic model for one MontiVerse job of a failed pipeline.

Fields:
    name         - job name, unique within the analysed pipeline
    status       - GitLab job status (success, failed, canceled, ...)
    web_url      - link to the job log
    project_ref  - external project the job validates ("group/project"),
                   None when the pipeline definition does not name one
    provider     - where that project's own CI runs: primary (GitLab) or
                   secondary (GitHub Actions)
    verdict      - state of the project's last run on its default branch
    verdict_note - explanation when the verdict could not be decided
"""
from typing import Literal, Optional
from pydantic import BaseModel

ProviderTag = Literal["primary", "secondary"]
Verdict = Literal["success", "fail", "unknown"]


class JobRecord(BaseModel):
    name: str
    status: str
    web_url: str = ""
    project_ref: Optional[str] = None
    provider: ProviderTag = "primary"
    verdict: Verdict = "unknown"
    verdict_note: str = ""

    @property
    def passed(self) -> bool:
        return self.status == "success"

    def describe_verdict(self) -> str:
        return self.verdict_note or self.verdict
