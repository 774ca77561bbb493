"""TrailingWhitespaceRule: detection of whitespace at line ends."""

from typing import Sequence

from swiftstyle.config import LintConfig
from swiftstyle.models import Severity, SourceLine, Token, Violation
from swiftstyle.rules.registry import register_rule


class TrailingWhitespaceRule:
  """Detects lines ending in spaces or tabs, whitespace-only lines included."""

  @property
  def id(self) -> str:
    return "TrailingWhitespaceRule"

  @property
  def name(self) -> str:
    return "trailing-whitespace"

  @property
  def description(self) -> str:
    return "Lines must not end in whitespace"

  @property
  def severity(self) -> Severity:
    return Severity.WARNING

  def evaluate(
    self,
    lines: Sequence[SourceLine],
    tokens: Sequence[Token],
    config: LintConfig,
  ) -> Sequence[Violation]:
    violations: list[Violation] = []

    for line in lines:
      content = line.raw.rstrip()
      trailing = len(line.raw) - len(content)
      if not trailing:
        continue

      message = (
        "Whitespace-only line"
        if not content
        else f"Line ends with {trailing} whitespace character{'s' if trailing != 1 else ''}"
      )
      violations.append(Violation(
        rule_id=self.id,
        line=line.number,
        column=len(content) + 1,
        message=message,
        severity=self.severity,
      ))

    return violations


def _create_trailing_whitespace() -> TrailingWhitespaceRule:
  return TrailingWhitespaceRule()


register_rule("TrailingWhitespaceRule", _create_trailing_whitespace)
