"""
Action Inputs Model
===================
Pydantic model for the inputs declared in action.yml.

The runner exposes every input as INPUT_<NAME> (upper-cased, spaces as
underscores). ``variables`` arrives as a JSON object string and is parsed
into a str → str mapping; non-string values are re-encoded as JSON.
"""
import json
import os
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator


class ActionInputs(BaseModel):
    host: str
    project_id: str = Field(alias="id")
    trigger_token: str
    access_token: str = ""
    github_access_token: str = ""
    ref: str
    variables: Dict[str, str] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}

    @field_validator("variables", mode="before")
    @classmethod
    def parse_variables(cls, value):
        if value is None:
            return {}
        if isinstance(value, str):
            if not value.strip():
                return {}
            value = json.loads(value)
        if not isinstance(value, dict):
            raise ValueError("variables must be a JSON object")
        # Non-string JSON values keep their JSON spelling (true, null, {...})
        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in value.items()}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ActionInputs":
        env = os.environ if environ is None else environ
        names = ["host", "id", "trigger_token", "access_token", "github_access_token", "ref", "variables"]
        data = {}
        for name in names:
            value = env.get(f"INPUT_{name.upper()}")
            if value is not None:
                data[name] = value.strip()
        return cls.model_validate(data)
