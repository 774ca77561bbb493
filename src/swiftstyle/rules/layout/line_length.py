"""LineLengthRule: detection of overly long lines."""

from typing import Sequence

from swiftstyle.config import LintConfig
from swiftstyle.models import Severity, SourceLine, Token, Violation
from swiftstyle.rules.registry import register_rule


class LineLengthRule:
  """Detects lines exceeding the configured column limit.

  Trailing whitespace does not count towards the length; that is
  TrailingWhitespaceRule's concern.
  """

  @property
  def id(self) -> str:
    return "LineLengthRule"

  @property
  def name(self) -> str:
    return "line-length"

  @property
  def description(self) -> str:
    return "Keep lines within the configured column limit"

  @property
  def severity(self) -> Severity:
    return Severity.WARNING

  def evaluate(
    self,
    lines: Sequence[SourceLine],
    tokens: Sequence[Token],
    config: LintConfig,
  ) -> Sequence[Violation]:
    """Check for long lines."""
    limit = config.max_line_length
    violations: list[Violation] = []

    for line in lines:
      length = len(line.raw.rstrip())
      if length > limit:
        violations.append(Violation(
          rule_id=self.id,
          line=line.number,
          column=limit + 1,
          message=f"Line exceeds {limit} characters ({length})",
          severity=self.severity,
        ))

    return violations


def _create_line_length() -> LineLengthRule:
  return LineLengthRule()


register_rule("LineLengthRule", _create_line_length)
