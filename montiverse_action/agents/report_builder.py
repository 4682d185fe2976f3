"""
Report Builder
==============
Turns the classified jobs of a failed pipeline into the MontiVerse report.

Row marks:
    passed   - job succeeded                         → info table only
    warning  - job failed, project was failing before → both tables
    broken   - job failed, project was fine/unknown  → both tables, hard failure

Severity (strongest wins):
    failure   - at least one broken row
    warning   - error table not empty
    all_clear - nothing failed

The pretty output is Markdown meant for a commit comment: a headline, the
error table, and a collapsible <details> block with the full info table.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Literal

from montiverse_action.core.action_output import ActionOutput
from montiverse_action.core.constants import MONTIVERSE_NOTE, SEVERITY_HEADLINES, STATUS_ICONS
from montiverse_action.models.job_record import JobRecord

logger = logging.getLogger(__name__)

RowMark = Literal["passed", "warning", "broken"]
Severity = Literal["failure", "warning", "all_clear"]


@dataclass
class ReportRow:
    job: JobRecord
    mark: RowMark

    def to_markdown(self) -> str:
        return f"| {self.job.name} | [{STATUS_ICONS[self.mark]}]({self.job.web_url})| "


@dataclass
class Report:
    rows: List[ReportRow] = field(default_factory=list)
    info_table: List[str] = field(default_factory=list)
    error_table: List[str] = field(default_factory=list)
    error_message: str = ""

    @property
    def hard_failure(self) -> bool:
        return any(row.mark == "broken" for row in self.rows)

    @property
    def severity(self) -> Severity:
        if self.hard_failure:
            return "failure"
        if self.error_table:
            return "warning"
        return "all_clear"


def mark_job(job: JobRecord) -> RowMark:
    if job.passed:
        return "passed"
    if job.verdict == "fail":
        return "warning"
    return "broken"


def build_report(jobs: Dict[str, JobRecord]) -> Report:
    """Classify every job, in the order the jobs were discovered."""
    report = Report()
    for job in jobs.values():
        row = ReportRow(job=job, mark=mark_job(job))
        report.rows.append(row)

        line = row.to_markdown()
        report.info_table.append(line)
        if row.mark != "passed":
            report.error_table.append(line)
        if row.mark == "broken":
            report.error_message += f"Job {job.name} failed\n"
    return report


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------
def render_table(lines: List[str]) -> str:
    return " | Project | Status | \n |---|---| \n " + "\n".join(lines)


def render_details(summary: str, lines: List[str]) -> str:
    return (
        f"<details> <summary>{summary}</summary> \n"
        f"{render_table(lines)} \n"
        f"{MONTIVERSE_NOTE}</details>"
    )


def render_pretty_output(report: Report) -> str:
    headline = SEVERITY_HEADLINES[report.severity]
    return (
        f"{headline} \n {render_table(report.error_table)}\n"
        f"{render_details('details', report.info_table)}"
    )


def publish_report(report: Report, output: ActionOutput) -> None:
    """Log every job, annotate failures, set pretty_output and fail on breakage."""
    for row in report.rows:
        job = row.job
        logger.info("%s: %s -> %s  (%s)", job.name, job.describe_verdict(), job.status, job.web_url)
        if row.mark == "warning":
            logger.warning("  Job might have failed %s", job.name)
            output.warning(f"Change might have broken project '{job.name}' (CI of project failed before)")
        elif row.mark == "broken":
            logger.error("  Job broke %s", job.name)
            output.error(f"Change broke project '{job.name}'")

    output.set_output("pretty_output", render_pretty_output(report))

    if report.error_message:
        output.set_failed(report.error_message)
