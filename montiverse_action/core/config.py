"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    POLL_INTERVAL_SECONDS   - Fixed delay before every status query (default: 15)
    POLL_RETRY_LIMIT        - Transient polling errors tolerated per run (default: 5)
    PROJECT_DEFAULT_BRANCH  - Branch whose history decides if a project was
                              already broken (default: dev)
    GITHUB_API_URL          - GitHub REST endpoint, set by GitHub Actions
                              (default: https://api.github.com)
    LOG_LEVEL               - Root log level (default: INFO)
    LOG_DIR                 - Write a log file into this directory (default: unset)

Action inputs (host, tokens, ref, variables) are not read here; they are
passed by the runner as INPUT_* variables, see models/action_inputs.py.

Polling Philosophy:
    One status query per interval, no backoff. Connection errors consume the
    retry budget; any non-OK answer from GitLab ends the run immediately.
"""
import os
from dotenv import load_dotenv

load_dotenv()

POLL_INTERVAL_SECONDS = float(os.getenv("POLL_INTERVAL_SECONDS", 15))
POLL_RETRY_LIMIT = int(os.getenv("POLL_RETRY_LIMIT", 5))

PROJECT_DEFAULT_BRANCH = os.getenv("PROJECT_DEFAULT_BRANCH", "dev")

# Job definitions are always read from the main branch of the polled project
PIPELINE_CONFIG_FILE = ".gitlab-ci.yml"
PIPELINE_CONFIG_REF = "main"

# Number of completed workflow runs requested from GitHub
HISTORY_PAGE_SIZE = 5

GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "")
