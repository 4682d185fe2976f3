"""
Action Output
=============
Everything the action hands back to the workflow runner.

Outputs:
    Appended to the file named by $GITHUB_OUTPUT using the heredoc form
    ``name<<DELIMITER\\nvalue\\nDELIMITER`` so multi-line values such as the
    Markdown report survive. Without that file the pair is only logged.

Annotations:
    ``::warning::`` and ``::error::`` workflow commands written to stdout.

Failure:
    set_failed() emits an error annotation and marks the run as failed; the
    entry point turns that into exit code 1.
"""
import logging
import os
import sys
import uuid
from typing import Dict, Optional, TextIO

logger = logging.getLogger(__name__)


def escape_command_value(value: str) -> str:
    """Escape a workflow command message the way the runner expects."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionOutput:
    """
    Collects outputs, annotations and the failure flag of one action run.
    """

    def __init__(self, output_path: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
        if output_path is None:
            output_path = os.getenv("GITHUB_OUTPUT", "")
        self.output_path = output_path
        self.stream = stream
        self.outputs: Dict[str, str] = {}
        self.failed = False
        self.failure_message = ""

    def _command(self, name: str, message: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(f"::{name}::{escape_command_value(message)}\n")
        stream.flush()

    def set_output(self, name: str, value: object) -> None:
        text = "" if value is None else str(value)
        self.outputs[name] = text

        if not self.output_path:
            logger.info("Output %s=%s", name, text)
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with open(self.output_path, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")

    def warning(self, message: str) -> None:
        self._command("warning", message)

    def error(self, message: str) -> None:
        self._command("error", message)

    def set_failed(self, message: str) -> None:
        logger.error("Action failed: %s", message)
        self.failed = True
        self.failure_message = message
        self.error(message)
