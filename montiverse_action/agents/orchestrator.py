"""
Orchestrator
============
Wires the clients and agents together for one action run:

    trigger pipeline → outputs id/status/web_url → PipelinePoller

Nothing raised below this point reaches the caller; every failure ends up
in ActionOutput.set_failed().
"""
import logging
from typing import Optional

from montiverse_action.agents.failure_analyzer import FailureAnalyzer
from montiverse_action.agents.history_classifier import (
    GitHubHistorySource,
    GitLabHistorySource,
    HistoryClassifier,
)
from montiverse_action.agents.poller import PipelinePoller
from montiverse_action.core.action_output import ActionOutput
from montiverse_action.core.config import POLL_INTERVAL_SECONDS
from montiverse_action.models.action_inputs import ActionInputs
from montiverse_action.services.github_client import GitHubClient
from montiverse_action.services.gitlab_client import GitLabClient

logger = logging.getLogger(__name__)


def build_poller(
    inputs: ActionInputs,
    output: ActionOutput,
    gitlab: GitLabClient,
    interval: float = POLL_INTERVAL_SECONDS,
) -> PipelinePoller:
    classifier = HistoryClassifier(
        primary=GitLabHistorySource(gitlab),
        secondary=GitHubHistorySource(GitHubClient(inputs.github_access_token)),
    )
    analyzer = FailureAnalyzer(gitlab, classifier)
    return PipelinePoller(gitlab, analyzer, output, interval=interval)


async def run_action(
    inputs: ActionInputs,
    output: ActionOutput,
    poller: Optional[PipelinePoller] = None,
) -> Optional[str]:
    """
    Trigger the pipeline and follow it to the end.

    Returns the last observed pipeline status, or None if the pipeline
    could not be triggered.
    """
    logger.info("Triggering pipeline %s with ref %s on %s!", inputs.project_id, inputs.ref, inputs.host)
    gitlab = GitLabClient(inputs.host, inputs.project_id, inputs.access_token)

    try:
        run = await gitlab.trigger_pipeline(inputs.trigger_token, inputs.ref, inputs.variables)

        output.set_output("id", run.id)
        output.set_output("status", run.status)
        output.set_output("web_url", run.web_url)
        logger.info("Pipeline id %d triggered! See %s for details.", run.id, run.web_url)

        if poller is None:
            poller = build_poller(inputs, output, gitlab)
        return await poller.poll(run)
    except Exception as e:
        logger.error("Action aborted: %s", e, exc_info=True)
        output.set_failed(str(e))
        return None
