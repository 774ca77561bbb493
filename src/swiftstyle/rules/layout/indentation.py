"""IndentationRule: detection of irregular indentation."""

from typing import Sequence

from swiftstyle.config import LintConfig
from swiftstyle.models import Severity, SourceLine, Token, Violation
from swiftstyle.rules.registry import register_rule
from swiftstyle.scan import continuation_lines


class IndentationRule:
  """Detects indentation that is not a whole number of space steps.

  Flags:
  - leading whitespace mixing tabs and spaces
  - tab indentation
  - space runs that are not a multiple of the configured width

  Blank lines and lines inside multi-line comments or string literals
  are not checked, their leading whitespace is content.
  """

  @property
  def id(self) -> str:
    return "IndentationRule"

  @property
  def name(self) -> str:
    return "indentation"

  @property
  def description(self) -> str:
    return "Indent with a fixed number of spaces, never tabs"

  @property
  def severity(self) -> Severity:
    return Severity.WARNING

  def evaluate(
    self,
    lines: Sequence[SourceLine],
    tokens: Sequence[Token],
    config: LintConfig,
  ) -> Sequence[Violation]:
    width = config.indent_width
    skipped = continuation_lines(tokens)
    violations: list[Violation] = []

    for line in lines:
      if line.is_blank or line.number in skipped or not line.indent:
        continue

      message = self._problem(line.leading_whitespace, width)
      if message:
        violations.append(Violation(
          rule_id=self.id,
          line=line.number,
          column=1,
          message=message,
          severity=self.severity,
        ))

    return violations

  def _problem(self, leading: str, width: int) -> str | None:
    has_tabs = "\t" in leading
    has_spaces = " " in leading
    if has_tabs and has_spaces:
      return "Indentation mixes tabs and spaces"
    if has_tabs:
      return f"Indentation uses tabs; indent with {width} spaces"
    if len(leading) % width:
      return f"Indentation of {len(leading)} spaces is not a multiple of {width}"
    return None


def _create_indentation() -> IndentationRule:
  return IndentationRule()


register_rule("IndentationRule", _create_indentation)
