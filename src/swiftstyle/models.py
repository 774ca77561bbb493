"""Core domain models for style checking."""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class Severity(Enum):
  """Violation severity levels."""

  WARNING = "warning"
  ERROR = "error"


class TokenKind(Enum):
  """Coarse lexical token categories."""

  KEYWORD = "keyword"
  IDENTIFIER = "identifier"
  BRACE_OPEN = "brace_open"
  BRACE_CLOSE = "brace_close"
  PAREN_OPEN = "paren_open"
  PAREN_CLOSE = "paren_close"
  COMMENT = "comment"
  STRING_LITERAL = "string_literal"
  NUMBER = "number"
  OPERATOR = "operator"
  ATTRIBUTE = "attribute"
  PUNCTUATION = "punctuation"


@dataclass(frozen=True)
class SourceLine:
  """A single scanned line of source text."""

  number: int
  raw: str
  trimmed: str
  indent: int
  leading_whitespace: str = ""

  @property
  def is_blank(self) -> bool:
    return not self.trimmed


@dataclass(frozen=True)
class Token:
  """A lexical token with its 1-based, inclusive source span."""

  kind: TokenKind
  text: str
  line: int
  column: int
  end_line: int
  end_column: int

  def is_keyword(self, *words: str) -> bool:
    return self.kind is TokenKind.KEYWORD and self.text in words


@dataclass(frozen=True)
class ScannedSource:
  """Scanner output consumed by rules."""

  lines: Sequence[SourceLine]
  tokens: Sequence[Token]


@dataclass(frozen=True)
class Violation:
  """A single place where source fails a rule."""

  rule_id: str
  line: int
  column: int | None = None
  message: str = ""
  severity: Severity = Severity.WARNING

  @property
  def sort_key(self) -> tuple[int, str, int, str]:
    """Deterministic ordering: line first, then rule id."""
    return (self.line, self.rule_id, self.column or 0, self.message)

  @property
  def identity(self) -> tuple[str, int, int | None]:
    return (self.rule_id, self.line, self.column)


@dataclass(frozen=True)
class Report:
  """Result of checking one file."""

  path: str
  violations: Sequence[Violation] = ()
  error: str | None = None

  @property
  def error_count(self) -> int:
    return sum(1 for v in self.violations if v.severity is Severity.ERROR)

  @property
  def warning_count(self) -> int:
    return sum(1 for v in self.violations if v.severity is Severity.WARNING)

  def failed(self, warnings_fail_build: bool = False) -> bool:
    """Check if this report should fail the build."""
    if self.error is not None or self.error_count:
      return True
    return warnings_fail_build and self.warning_count > 0


@dataclass(frozen=True)
class LintResult:
  """Aggregate result of a lint run, reports kept in input order."""

  reports: Sequence[Report]
  summary: str
  warnings_fail_build: bool = False

  @property
  def failed(self) -> bool:
    return any(r.failed(self.warnings_fail_build) for r in self.reports)

  @property
  def exit_code(self) -> int:
    return 1 if self.failed else 0

  @property
  def violations(self) -> list[tuple[str, Violation]]:
    return [(r.path, v) for r in self.reports for v in r.violations]
