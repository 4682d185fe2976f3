"""
Unit Tests - Report Builder
===========================
Row marks, severity ranking and the Markdown written to pretty_output.
"""
import io

from montiverse_action.agents.report_builder import (
    build_report,
    mark_job,
    publish_report,
    render_pretty_output,
    render_table,
)
from montiverse_action.core.action_output import ActionOutput
from montiverse_action.models.job_record import JobRecord


def record(name, status="failed", verdict="unknown"):
    return JobRecord(name=name, status=status, web_url=f"https://git/jobs/{name}", verdict=verdict)


def jobs_of(*records):
    return {r.name: r for r in records}


def make_output():
    return ActionOutput(output_path="", stream=io.StringIO())


def test_mark_job():
    assert mark_job(record("a", status="success", verdict="fail")) == "passed"
    assert mark_job(record("b", verdict="fail")) == "warning"
    assert mark_job(record("c", verdict="success")) == "broken"
    assert mark_job(record("d", verdict="unknown")) == "broken"


def test_all_passed_is_all_clear():
    report = build_report(jobs_of(record("a", status="success"), record("b", status="success")))
    assert report.severity == "all_clear"
    assert report.error_table == []
    assert len(report.info_table) == 2
    assert report.error_message == ""


def test_empty_report_is_all_clear():
    assert build_report({}).severity == "all_clear"


def test_warning_only():
    report = build_report(jobs_of(record("a", status="success"), record("b", verdict="fail")))
    assert report.severity == "warning"
    assert not report.hard_failure
    assert report.error_table == ["| b | [:warning:](https://git/jobs/b)| "]
    assert report.error_message == ""


def test_broken_overrides_warning():
    report = build_report(jobs_of(record("a", verdict="fail"), record("b", verdict="success")))
    assert report.severity == "failure"
    assert report.hard_failure
    assert report.error_message == "Job b failed\n"


def test_error_message_accumulates_in_order():
    report = build_report(jobs_of(record("x"), record("y", status="canceled")))
    assert report.error_message == "Job x failed\nJob y failed\n"
    assert [row.job.name for row in report.rows] == ["x", "y"]


def test_rows_markdown():
    report = build_report(jobs_of(
        record("ok", status="success"),
        record("warn", verdict="fail"),
        record("bad", verdict="success"),
    ))
    assert report.info_table == [
        "| ok | [:white_check_mark:](https://git/jobs/ok)| ",
        "| warn | [:warning:](https://git/jobs/warn)| ",
        "| bad | [:x:](https://git/jobs/bad)| ",
    ]
    assert report.error_table == report.info_table[1:]


def test_render_table():
    assert render_table(["| a | b| "]) == " | Project | Status | \n |---|---| \n | a | b| "


def test_pretty_output_failure():
    report = build_report(jobs_of(record("ok", status="success"), record("bad")))
    text = render_pretty_output(report)
    assert text.startswith(":x: Changes break the MontiVerse \n  | Project | Status | ")
    assert "| bad | [:x:](https://git/jobs/bad)| " in text
    assert "<details> <summary>details</summary> \n" in text
    assert "| ok | [:white_check_mark:](https://git/jobs/ok)| " in text
    assert text.endswith(
        "The MontiVerse is a collection of (internal and public) language projects.</details>"
    )


def test_pretty_output_headlines():
    warning = build_report(jobs_of(record("w", verdict="fail")))
    clear = build_report(jobs_of(record("c", status="success")))
    assert render_pretty_output(warning).startswith(":warning: Changes might break the MontiVerse")
    assert render_pretty_output(clear).startswith(":heavy_check_mark: Changes pass the MontiVerse")


def test_publish_hard_failure():
    output = make_output()
    report = build_report(jobs_of(record("warn", verdict="fail"), record("bad")))
    publish_report(report, output)

    assert output.failed
    assert output.failure_message == "Job bad failed\n"
    assert output.outputs["pretty_output"].startswith(":x:")
    commands = output.stream.getvalue()
    assert "::warning::Change might have broken project 'warn' (CI of project failed before)" in commands
    assert "::error::Change broke project 'bad'" in commands


def test_publish_warning_does_not_fail():
    output = make_output()
    publish_report(build_report(jobs_of(record("warn", verdict="fail"))), output)
    assert not output.failed
    assert output.outputs["pretty_output"].startswith(":warning:")
