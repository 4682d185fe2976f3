"""
Unit Tests - Action Output
==========================
$GITHUB_OUTPUT format and workflow commands.
"""
import io
import os
import tempfile

from montiverse_action.core.action_output import ActionOutput, escape_command_value


def test_escape_command_value():
    assert escape_command_value("50% done\r\nnext") == "50%25 done%0D%0Anext"


def test_set_output_writes_heredoc_blocks():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "output")
        output = ActionOutput(output_path=path, stream=io.StringIO())
        output.set_output("id", 42)
        output.set_output("pretty_output", "line one\nline two")

        with open(path, encoding="utf-8") as f:
            lines = f.read().splitlines()

    assert lines[0].startswith("id<<ghadelimiter_")
    delimiter = lines[0].split("<<", 1)[1]
    assert lines[1:3] == ["42", delimiter]
    assert lines[3].startswith("pretty_output<<")
    delimiter = lines[3].split("<<", 1)[1]
    assert lines[4:7] == ["line one", "line two", delimiter]
    assert output.outputs == {"id": "42", "pretty_output": "line one\nline two"}


def test_set_output_without_file():
    output = ActionOutput(output_path="", stream=io.StringIO())
    output.set_output("status", "running")
    assert output.outputs["status"] == "running"


def test_output_path_from_environment(monkeypatch):
    monkeypatch.setenv("GITHUB_OUTPUT", "/tmp/gh-output")
    assert ActionOutput().output_path == "/tmp/gh-output"


def test_set_failed():
    stream = io.StringIO()
    output = ActionOutput(output_path="", stream=stream)
    output.set_failed("Job a failed\nJob b failed\n")

    assert output.failed
    assert output.failure_message == "Job a failed\nJob b failed\n"
    assert stream.getvalue() == "::error::Job a failed%0AJob b failed%0A\n"


def test_warning_command():
    stream = io.StringIO()
    ActionOutput(output_path="", stream=stream).warning("careful")
    assert stream.getvalue() == "::warning::careful\n"
