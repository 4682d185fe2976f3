"""
Constants
Centralised storage for GitLab statuses, MontiVerse job rules and report strings.
"""
# GitLab pipeline statuses (https://docs.gitlab.com/ee/api/pipelines.html)
PIPELINE_STATUSES = frozenset({
    "created",
    "preparing",
    "pending",
    "waiting_for_resource",
    "running",
    "scheduled",
    "failed",
    "success",
    "canceled",
    "skipped",
    "manual",
})
TERMINAL_STATUSES = frozenset({"failed", "success", "canceled", "skipped"})

# Job rules of the MontiVerse .gitlab-ci.yml
INFO_JOB = "info"
CORE_PROJECT_JOBS = frozenset({"monticore", "monticore_basic"})
CORE_PROJECT_REF = "monticore/monticore"
PROJECT_REF_VARIABLE = "JOB_GIT"
SECONDARY_EXTENDS_SUFFIX = "hub"

NO_GITLAB_HISTORY = "GitLab: No Job found"

# Report
STATUS_ICONS = {
    "passed": ":white_check_mark:",
    "warning": ":warning:",
    "broken": ":x:",
}
SEVERITY_HEADLINES = {
    "failure": ":x: Changes break the MontiVerse",
    "warning": ":warning: Changes might break the MontiVerse",
    "all_clear": ":heavy_check_mark: Changes pass the MontiVerse",
}
MONTIVERSE_NOTE = "The MontiVerse is a collection of (internal and public) language projects."
