"""
Entry point of the MontiVerse trigger action.

Run by action.yml as ``python main.py``; inputs come from INPUT_* variables,
outputs go to $GITHUB_OUTPUT. Exits with 1 whenever a failure was signalled.
"""
import asyncio
import logging
import sys

from pydantic import ValidationError

from montiverse_action.agents.orchestrator import run_action
from montiverse_action.core.action_output import ActionOutput
from montiverse_action.core.config import LOG_DIR, LOG_LEVEL
from montiverse_action.models.action_inputs import ActionInputs
from montiverse_action.utils.logging_config import setup_logging

logger = logging.getLogger("main")


def main() -> int:
    setup_logging(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO), log_dir=LOG_DIR or None)
    output = ActionOutput()

    try:
        inputs = ActionInputs.from_env()
    except (ValidationError, ValueError) as e:
        logger.error("Could not read action inputs: %s", e)
        output.set_failed(f"Invalid action inputs: {e}")
        return 1

    try:
        asyncio.run(run_action(inputs, output))
    except Exception as e:
        logger.error("Unhandled error: %s", e, exc_info=True)
        output.set_failed(str(e))

    if output.failed:
        logger.error("MontiVerse trigger failed: %s", output.failure_message.strip())
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
