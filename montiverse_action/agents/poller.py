"""
Pipeline Poller
===============
Waits for a triggered GitLab pipeline to finish.

Loop:
    sleep interval → query status → emit "status" output
      failed                    → failure analysis (once) → stop
      success/canceled/skipped  → stop
      anything else             → next round

Errors:
    ProviderError (non-OK GitLab answer) - fatal, stop at once
    any other exception                  - uses up one retry, next round
    retries exhausted                    - fatal, stop
"""
import asyncio
import logging

from montiverse_action.agents.failure_analyzer import FailureAnalyzer
from montiverse_action.agents.report_builder import publish_report
from montiverse_action.core.action_output import ActionOutput
from montiverse_action.core.config import POLL_INTERVAL_SECONDS, POLL_RETRY_LIMIT
from montiverse_action.core.constants import PIPELINE_STATUSES, TERMINAL_STATUSES
from montiverse_action.core.errors import ProviderError
from montiverse_action.models.pipeline_run import PipelineRun
from montiverse_action.services.gitlab_client import GitLabClient

logger = logging.getLogger(__name__)


class PipelinePoller:

    def __init__(
        self,
        gitlab: GitLabClient,
        analyzer: FailureAnalyzer,
        output: ActionOutput,
        interval: float = POLL_INTERVAL_SECONDS,
        retry_limit: int = POLL_RETRY_LIMIT,
    ) -> None:
        self.gitlab = gitlab
        self.analyzer = analyzer
        self.output = output
        self.interval = interval
        self.retry_limit = retry_limit

    async def poll(self, run: PipelineRun) -> str:
        """Poll until a terminal status or a fatal error; return the last status seen."""
        logger.info("Polling pipeline %d on %s!", run.id, run.host)

        status = run.status
        retries = self.retry_limit

        while True:
            await asyncio.sleep(self.interval)

            try:
                run = await self.gitlab.get_pipeline(run)
                status = run.status
                self.output.set_output("status", status)
                logger.info("Pipeline status: %s (%s)", status, run.web_url)
                if status not in PIPELINE_STATUSES:
                    logger.warning("Unexpected pipeline status \"%s\", polling on", status)

                if status == "failed":
                    report = await self.analyzer.analyze(run)
                    if report is None:
                        return status
                    publish_report(report, self.output)

                if status in TERMINAL_STATUSES:
                    logger.info('Status "%s" detected, breaking loop!', status)
                    break

            except ProviderError as e:
                self.output.set_failed(str(e))
                break
            except Exception as e:
                logger.warning("Error polling pipeline %d: %s", run.id, e)
                retries -= 1
                if retries <= 0:
                    self.output.set_failed(str(e))
                    break

        return status
