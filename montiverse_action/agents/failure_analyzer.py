"""
Failure Analyzer
================
Runs once for a pipeline that ended "failed":

    jobs (newest first) + .gitlab-ci.yml
        → resolve_jobs (dedupe, project reference, provider)
        → HistoryClassifier, one job at a time
        → build_report

Jobs are classified strictly in sequence; the records dict is the only
state and is handed from step to step.
"""
import logging
from typing import Optional

from montiverse_action.agents.history_classifier import HistoryClassifier
from montiverse_action.agents.report_builder import Report, build_report
from montiverse_action.core.config import PIPELINE_CONFIG_FILE, PIPELINE_CONFIG_REF
from montiverse_action.core.errors import HistoryUnavailable
from montiverse_action.models.pipeline_run import PipelineRun
from montiverse_action.parser.pipeline_definition import parse_pipeline_definition, resolve_jobs
from montiverse_action.services.gitlab_client import GitLabClient

logger = logging.getLogger(__name__)


class FailureAnalyzer:

    def __init__(self, gitlab: GitLabClient, classifier: HistoryClassifier) -> None:
        self.gitlab = gitlab
        self.classifier = classifier

    async def analyze(self, run: PipelineRun) -> Optional[Report]:
        """
        Build the report for a failed pipeline.

        Returns None when GitHub answers without a run history. The
        remaining jobs are then left unclassified and no report is produced;
        the caller stops polling with the pipeline status as is.

        Raises
        ------
        ProviderError
            On any non-OK GitLab answer.
        """
        raw_jobs = await self.gitlab.get_jobs(run.id)
        content = await self.gitlab.get_raw_file(PIPELINE_CONFIG_FILE, PIPELINE_CONFIG_REF)
        definition = parse_pipeline_definition(content)

        jobs = resolve_jobs(raw_jobs, definition)
        logger.info("Analysing %d jobs of pipeline %d", len(jobs), run.id)

        for name, job in jobs.items():
            try:
                jobs[name] = await self.classifier.classify(job)
            except HistoryUnavailable as e:
                # TODO: leave this job at "unknown" and continue with the next
                # one instead of dropping the whole report.
                logger.warning("Failed to inspect previous CI of %s", name)
                logger.info("GitHub response: %s", e.payload)
                return None

        return build_report(jobs)
