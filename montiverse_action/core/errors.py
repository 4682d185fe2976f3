"""
Errors
======
Failures raised by the provider clients and the history lookup.

ProviderError and its subclasses are fatal: the poller reports them and
stops. HistoryUnavailable is not: the failure analysis logs it and gives up
on the report.
"""
from typing import Any, Optional


class ProviderError(Exception):
    """Non-OK answer from the GitLab API."""

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"GitLab API returned status code {status_code}.")


class Unauthorized(ProviderError):
    def __init__(self) -> None:
        super().__init__(401, "Unauthorized: invalid/expired access token was used.")


class ResourceNotFound(ProviderError):
    def __init__(self) -> None:
        super().__init__(
            404,
            "The specified resource does not exist, or an invalid/expired trigger token was used.",
        )


class HistoryUnavailable(Exception):
    """GitHub answered without a workflow_runs list."""

    def __init__(self, project_ref: str, payload: Any) -> None:
        self.project_ref = project_ref
        self.payload = payload
        super().__init__(f"No workflow runs in GitHub response for {project_ref}")
