"""Tests for output formatters."""

import json

import pytest
from rich.console import Console
from swiftstyle.models import LintResult, Report, Severity, Violation
from swiftstyle.output.formatter import (
  GitHubFormatter,
  JsonFormatter,
  TerminalFormatter,
  TextFormatter,
  format_violation,
  get_formatter,
)


@pytest.fixture
def clean_result() -> LintResult:
  return LintResult(reports=[Report(path="a.swift")], summary="Checked 1 file. No issues found.")


class TestFormatViolation:
  def test_with_column(self) -> None:
    violation = Violation(
      rule_id="ForceUnwrapRule",
      line=3,
      column=25,
      message="Force unwrap of 'name'",
      severity=Severity.ERROR,
    )

    assert format_violation("Sources/Profile.swift", violation) == (
      "Sources/Profile.swift:3:25: error: ForceUnwrapRule: Force unwrap of 'name'"
    )

  def test_without_column(self) -> None:
    violation = Violation(rule_id="LineLengthRule", line=7, message="Too long")

    assert format_violation("a.swift", violation) == "a.swift:7: warning: LineLengthRule: Too long"


class TestTextFormatter:
  def test_format_clean_result(self, clean_result: LintResult) -> None:
    assert TextFormatter().format(clean_result) == "Checked 1 file. No issues found."

  def test_format_with_violations(self, sample_lint_result: LintResult) -> None:
    lines = TextFormatter().format(sample_lint_result).splitlines()

    assert lines == [
      "Sources/Profile.swift:3:25: error: ForceUnwrapRule: Force unwrap of 'name'",
      "Sources/Profile.swift:7: warning: LineLengthRule: Line exceeds 100 characters (120)",
      "Sources/Broken.swift: error: scan-error: line 2, column 9: unterminated string literal",
      sample_lint_result.summary,
    ]


class TestJsonFormatter:
  def test_format_clean_result(self, clean_result: LintResult) -> None:
    data = json.loads(JsonFormatter().format(clean_result))

    assert data["passed"] is True
    assert data["summary"] == "Checked 1 file. No issues found."
    assert data["files"] == [{
      "path": "a.swift",
      "error": None,
      "error_count": 0,
      "warning_count": 0,
      "violations": [],
    }]

  def test_format_with_violations(self, sample_lint_result: LintResult) -> None:
    data = json.loads(JsonFormatter().format(sample_lint_result))

    assert data["passed"] is False
    profile, broken = data["files"]
    assert profile["error_count"] == 1
    assert profile["warning_count"] == 1
    assert profile["violations"][0] == {
      "rule_id": "ForceUnwrapRule",
      "line": 3,
      "column": 25,
      "severity": "error",
      "message": "Force unwrap of 'name'",
    }
    assert profile["violations"][1]["column"] is None
    assert broken["error"].startswith("scan-error:")


class TestGitHubFormatter:
  def test_format_with_violations(self, sample_lint_result: LintResult) -> None:
    lines = GitHubFormatter().format(sample_lint_result).splitlines()

    assert lines == [
      "::error file=Sources/Profile.swift,line=3,col=25,title=ForceUnwrapRule::"
      "Force unwrap of 'name'",
      "::warning file=Sources/Profile.swift,line=7,title=LineLengthRule::"
      "Line exceeds 100 characters (120)",
      "::error file=Sources/Broken.swift::"
      "scan-error: line 2, column 9: unterminated string literal",
    ]

  def test_escapes_newlines(self) -> None:
    result = LintResult(
      reports=[Report(path="a.swift", violations=(
        Violation(rule_id="MockRule", line=1, message="50%\nmore"),
      ))],
      summary="",
    )

    assert GitHubFormatter().format(result).endswith("::50%25%0Amore")

  def test_clean_result_is_empty(self, clean_result: LintResult) -> None:
    assert GitHubFormatter().format(clean_result) == ""


class TestTerminalFormatter:
  def test_prints_summary_and_issues(self, sample_lint_result: LintResult) -> None:
    console = Console(record=True, width=200)

    output = TerminalFormatter(console).format(sample_lint_result)
    printed = console.export_text()

    assert output == ""
    assert "Checked 2 files" in printed
    assert "ForceUnwrapRule" in printed
    assert "Could not check" in printed

  def test_prints_no_issues(self, clean_result: LintResult) -> None:
    console = Console(record=True, width=200)

    TerminalFormatter(console).format(clean_result)

    assert "No issues found." in console.export_text()


class TestGetFormatter:
  @pytest.mark.parametrize("name,formatter_class", [
    ("text", TextFormatter),
    ("terminal", TerminalFormatter),
    ("json", JsonFormatter),
    ("github", GitHubFormatter),
  ])
  def test_known_formats(self, name: str, formatter_class: type) -> None:
    assert isinstance(get_formatter(name), formatter_class)

  def test_unknown_format_raises(self) -> None:
    with pytest.raises(ValueError, match="Unknown format: xml"):
      get_formatter("xml")
