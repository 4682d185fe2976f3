"""
Unit Tests - History Classifier
===============================
Verdicts from GitLab pipeline history and GitHub workflow runs.
"""
import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock

from montiverse_action.agents.history_classifier import (
    GitHubHistorySource,
    GitLabHistorySource,
    HistoryClassifier,
    verdict_from_pipelines,
    verdict_from_workflow_runs,
)
from montiverse_action.core.errors import HistoryUnavailable, ProviderError
from montiverse_action.models.job_record import JobRecord
from montiverse_action.models.run_summary import RunSummary


def make_job(provider="secondary", status="failed", ref="MontiCore/cd4analysis"):
    return JobRecord(name="build", status=status, web_url="https://git/jobs/1",
                     project_ref=ref, provider=provider)


def github_source(payload):
    client = MagicMock()
    client.get_workflow_runs = AsyncMock(return_value=payload)
    return GitHubHistorySource(client)


def gitlab_source(pipelines):
    client = MagicMock()
    client.get_project_pipelines = AsyncMock(
        return_value=[RunSummary(status=s) for s in pipelines]
    )
    return GitLabHistorySource(client)


def classifier(primary=None, secondary=None):
    return HistoryClassifier(
        primary=primary or gitlab_source([]),
        secondary=secondary or github_source({"workflow_runs": []}),
        branch="dev",
    )


def test_secondary_failure_means_fail():
    source = github_source({"workflow_runs": [{"conclusion": "failure"}, {"conclusion": "success"}]})
    job = asyncio.run(classifier(secondary=source).classify(make_job()))
    assert job.verdict == "fail"
    source.client.get_workflow_runs.assert_awaited_once_with("MontiCore/cd4analysis", "dev")


def test_secondary_success_means_success():
    source = github_source({"workflow_runs": [{"conclusion": "success"}, {"conclusion": "failure"}]})
    job = asyncio.run(classifier(secondary=source).classify(make_job()))
    assert job.verdict == "success"


def test_secondary_other_conclusion_counts_as_success():
    source = github_source({"workflow_runs": [{"conclusion": "cancelled"}]})
    job = asyncio.run(classifier(secondary=source).classify(make_job()))
    assert job.verdict == "success"


def test_secondary_empty_history_is_unknown():
    job = asyncio.run(classifier().classify(make_job()))
    assert job.verdict == "unknown"


def test_secondary_missing_history_raises():
    source = github_source({"message": "Bad credentials"})
    with pytest.raises(HistoryUnavailable) as exc:
        asyncio.run(classifier(secondary=source).classify(make_job()))
    assert exc.value.payload == {"message": "Bad credentials"}
    assert exc.value.project_ref == "MontiCore/cd4analysis"


def test_primary_first_finished_pipeline_wins():
    source = gitlab_source(["running", "failed", "success"])
    job = asyncio.run(classifier(primary=source).classify(make_job(provider="primary")))
    assert job.verdict == "fail"
    source.client.get_project_pipelines.assert_awaited_once_with("MontiCore/cd4analysis", "dev")


def test_primary_skips_canceled():
    source = gitlab_source(["canceled", "skipped", "success", "failed"])
    job = asyncio.run(classifier(primary=source).classify(make_job(provider="primary")))
    assert job.verdict == "success"


def test_primary_without_finished_pipeline():
    source = gitlab_source(["running", "pending"])
    job = asyncio.run(classifier(primary=source).classify(make_job(provider="primary")))
    assert job.verdict == "unknown"
    assert job.verdict_note == "GitLab: No Job found"
    assert job.describe_verdict() == "GitLab: No Job found"


def test_primary_provider_error_propagates():
    client = MagicMock()
    client.get_project_pipelines = AsyncMock(side_effect=ProviderError(500))
    with pytest.raises(ProviderError):
        asyncio.run(classifier(primary=GitLabHistorySource(client)).classify(make_job(provider="primary")))


def test_passed_job_is_not_inspected():
    source = github_source({"workflow_runs": [{"conclusion": "failure"}]})
    job = asyncio.run(classifier(secondary=source).classify(make_job(status="success")))
    assert job.verdict == "unknown"
    source.client.get_workflow_runs.assert_not_awaited()


def test_job_without_reference_is_not_inspected():
    source = github_source({"workflow_runs": [{"conclusion": "failure"}]})
    job = asyncio.run(classifier(secondary=source).classify(make_job(ref=None)))
    assert job.verdict == "unknown"
    source.client.get_workflow_runs.assert_not_awaited()


def test_verdict_helpers():
    assert verdict_from_workflow_runs([]) == "unknown"
    assert verdict_from_pipelines([]) is None
    assert verdict_from_pipelines([RunSummary(status="manual"), RunSummary(status="success")]) == "success"
