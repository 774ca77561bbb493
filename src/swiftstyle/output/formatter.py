"""Output formatting for lint results."""

import json
from abc import ABC, abstractmethod
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from swiftstyle.models import LintResult, Report, Severity, Violation


class OutputFormatter(ABC):
  """Base output formatter."""

  @abstractmethod
  def format(self, result: LintResult) -> str:
    """Format lint result for output."""
    ...


def format_violation(path: str, violation: Violation) -> str:
  """Compiler-style line: <path>:<line>:[<column>:] <severity>: <rule-id>: <message>."""
  location = f"{path}:{violation.line}:"
  if violation.column is not None:
    location += f"{violation.column}:"
  return f"{location} {violation.severity.value}: {violation.rule_id}: {violation.message}"


def format_file_error(report: Report) -> str:
  return f"{report.path}: error: {report.error}"


class TextFormatter(OutputFormatter):
  """Plain compiler-style output, one violation per line."""

  def format(self, result: LintResult) -> str:
    lines: list[str] = []
    for report in result.reports:
      if report.error is not None:
        lines.append(format_file_error(report))
      lines.extend(format_violation(report.path, v) for v in report.violations)
    lines.append(result.summary)
    return "\n".join(lines)


class TerminalFormatter(OutputFormatter):
  """Rich terminal output formatter."""

  SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
  }

  def __init__(self, console: Console | None = None):
    self.console = console or Console()

  def format(self, result: LintResult) -> str:
    self._print_summary(result)
    self._print_file_errors(result)
    self._print_violations(result)
    return ""

  def _print_summary(self, result: LintResult) -> None:
    self.console.print()
    self.console.print(Panel(
      result.summary,
      title="[bold]Swift Style[/bold]",
      border_style="red" if result.failed else "green",
    ))

  def _print_file_errors(self, result: LintResult) -> None:
    for report in result.reports:
      if report.error is not None:
        self.console.print(f"[red]Could not check[/red] {report.path}: {report.error}")

  def _print_violations(self, result: LintResult) -> None:
    violations = result.violations
    if not violations:
      self.console.print("\n[green]No issues found.[/green]")
      return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Severity", width=8)
    table.add_column("File", width=30)
    table.add_column("Line", width=6, justify="right")
    table.add_column("Rule", width=24)
    table.add_column("Issue", min_width=40)

    for path, violation in violations:
      style = self.SEVERITY_STYLES.get(violation.severity, "")
      table.add_row(
        Text(violation.severity.value.upper(), style=style),
        self._make_file_link(path, violation.line),
        str(violation.line),
        violation.rule_id,
        violation.message,
      )

    self.console.print()
    self.console.print(table)
    self.console.print(f"\n[dim]{len(violations)} issue(s) found[/dim]")

  def _make_file_link(self, file_path: str, line: int) -> str:
    """Create a clickable file link for terminals that support hyperlinks."""
    url = Path(file_path).resolve().as_uri()
    return f"[link={url}:{line}]{file_path}[/link]"


class JsonFormatter(OutputFormatter):
  """JSON output formatter."""

  def format(self, result: LintResult) -> str:
    data = {
      "summary": result.summary,
      "passed": not result.failed,
      "files": [
        {
          "path": r.path,
          "error": r.error,
          "error_count": r.error_count,
          "warning_count": r.warning_count,
          "violations": [
            {
              "rule_id": v.rule_id,
              "line": v.line,
              "column": v.column,
              "severity": v.severity.value,
              "message": v.message,
            }
            for v in r.violations
          ],
        }
        for r in result.reports
      ],
    }
    return json.dumps(data, indent=2)


class GitHubFormatter(OutputFormatter):
  """GitHub Actions workflow command formatter for PR annotations."""

  def format(self, result: LintResult) -> str:
    lines = []
    for report in result.reports:
      if report.error is not None:
        lines.append(f"::error file={report.path}::{_escape(report.error)}")
      for violation in report.violations:
        location = f"file={report.path},line={violation.line}"
        if violation.column is not None:
          location += f",col={violation.column}"
        location += f",title={violation.rule_id}"
        lines.append(f"::{violation.severity.value} {location}::{_escape(violation.message)}")
    return "\n".join(lines)


def _escape(message: str) -> str:
  return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


FORMATS = ("text", "terminal", "json", "github")


def get_formatter(format_type: str) -> OutputFormatter:
  """Get formatter by type name."""
  formatters = {
    "text": TextFormatter,
    "terminal": TerminalFormatter,
    "json": JsonFormatter,
    "github": GitHubFormatter,
  }
  formatter_class = formatters.get(format_type)
  if not formatter_class:
    raise ValueError(f"Unknown format: {format_type}")
  return formatter_class()
