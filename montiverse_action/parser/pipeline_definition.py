"""
Pipeline Definition Reader
==========================
Parses the polled project's .gitlab-ci.yml and maps every job of a pipeline
to the MontiVerse project it validates.

MontiVerse job layout:
    Each job extends a template whose name tells where the validated project
    runs its own CI. Templates ending in "hub" (e.g. ".build_github") mean
    GitHub Actions, everything else means GitLab. The project itself is named
    by the JOB_GIT variable:

        cd4analysis:
          extends: .build_github
          variables:
            JOB_GIT: MontiCore/cd4analysis

    The MontiCore jobs are fixed to monticore/monticore on GitHub whatever
    the file says.

Lenient parsing:
    Unknown keys are ignored, a job missing from the file or without JOB_GIT
    simply gets no project reference. No error is raised for either.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

import yaml

from montiverse_action.core.constants import (
    CORE_PROJECT_JOBS,
    CORE_PROJECT_REF,
    INFO_JOB,
    PROJECT_REF_VARIABLE,
    SECONDARY_EXTENDS_SUFFIX,
)
from montiverse_action.models.job_record import JobRecord
from montiverse_action.models.pipeline_run import GitLabJob

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data Structures
# ---------------------------------------------------------------------------
@dataclass
class JobSpec:
    """The parts of a .gitlab-ci.yml job entry this action reads."""
    extends: Optional[str] = None
    variables: Dict[str, str] = field(default_factory=dict)

    @property
    def project_ref(self) -> Optional[str]:
        return self.variables.get(PROJECT_REF_VARIABLE) or None

    @property
    def runs_on_secondary(self) -> bool:
        return bool(self.extends) and self.extends.endswith(SECONDARY_EXTENDS_SUFFIX)


@dataclass
class PipelineDefinition:
    jobs: Dict[str, JobSpec] = field(default_factory=dict)

    def get(self, job_name: str) -> Optional[JobSpec]:
        return self.jobs.get(job_name)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def _parse_extends(value) -> Optional[str]:
    # GitLab allows a list of templates; the last one has the final say
    if isinstance(value, list):
        value = value[-1] if value else None
    return value if isinstance(value, str) else None


def _parse_variables(value) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}

    variables: Dict[str, str] = {}
    for name, var in value.items():
        # Long form: {value: ..., description: ...}
        if isinstance(var, dict):
            var = var.get("value")
        if var is None:
            continue
        variables[str(name)] = str(var)
    return variables


def parse_pipeline_definition(content: str) -> PipelineDefinition:
    """
    Parse .gitlab-ci.yml text into a PipelineDefinition.

    Top-level keys whose value is a mapping become jobs; everything else
    (stages, include, scalars) is skipped.

    Raises
    ------
    yaml.YAMLError
        If the document is not valid YAML.
    """
    data = yaml.safe_load(content)
    definition = PipelineDefinition()

    if not isinstance(data, dict):
        logger.warning("Pipeline definition is not a mapping, no jobs read")
        return definition

    for name, body in data.items():
        if not isinstance(body, dict):
            continue
        definition.jobs[str(name)] = JobSpec(
            extends=_parse_extends(body.get("extends")),
            variables=_parse_variables(body.get("variables")),
        )

    logger.debug("Read %d job definitions", len(definition.jobs))
    return definition


# ---------------------------------------------------------------------------
# Job Resolution
# ---------------------------------------------------------------------------
def resolve_job(job: GitLabJob, definition: PipelineDefinition) -> JobRecord:
    """Attach project reference and provider tag to a pipeline job."""
    record = JobRecord(name=job.name, status=job.status, web_url=job.web_url)

    if job.name in CORE_PROJECT_JOBS:
        record.project_ref = CORE_PROJECT_REF
        record.provider = "secondary"
        return record

    spec = definition.get(job.name)
    if spec is None:
        logger.debug("No definition for job %s", job.name)
        return record

    record.project_ref = spec.project_ref
    record.provider = "secondary" if spec.runs_on_secondary else "primary"
    return record


def resolve_jobs(jobs: Iterable[GitLabJob], definition: PipelineDefinition) -> Dict[str, JobRecord]:
    """
    Resolve the jobs of one pipeline, keyed by name in discovery order.

    ``jobs`` comes newest first, so keeping the first occurrence of a name
    keeps the latest retry. The "info" job is not a MontiVerse project.
    """
    records: Dict[str, JobRecord] = {}
    for job in jobs:
        if job.name in records or job.name == INFO_JOB:
            continue
        records[job.name] = resolve_job(job, definition)
    return records
