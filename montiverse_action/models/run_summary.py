"""
Run Summary Model
One entry of a project's CI history, from either provider.

GitLab pipelines carry a ``status``; GitHub workflow runs carry a
``conclusion``. Only the field of the originating provider is set.
"""
from typing import Optional
from pydantic import BaseModel


class RunSummary(BaseModel):
    status: Optional[str] = None
    conclusion: Optional[str] = None
