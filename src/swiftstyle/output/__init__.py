"""Output formatting."""

from swiftstyle.output.formatter import (
  FORMATS,
  GitHubFormatter,
  JsonFormatter,
  OutputFormatter,
  TerminalFormatter,
  TextFormatter,
  format_violation,
  get_formatter,
)

__all__ = [
  "FORMATS",
  "OutputFormatter",
  "TextFormatter",
  "TerminalFormatter",
  "JsonFormatter",
  "GitHubFormatter",
  "format_violation",
  "get_formatter",
]
