"""SectionMarkerRule: protocol conformance extensions need a MARK comment."""

import re
from typing import Sequence

from swiftstyle.config import LintConfig
from swiftstyle.models import Severity, SourceLine, Token, TokenKind, Violation
from swiftstyle.rules.base import declaration_modifiers
from swiftstyle.rules.registry import register_rule


class SectionMarkerRule:
  """Detects conformance extensions without a preceding `// MARK:` comment.

  Preferred:
    // MARK: - UITableViewDataSource
    extension MyViewController: UITableViewDataSource {

  Constrained extensions without a conformance
  (`extension Array where Element: Equatable`) are not checked.
  """

  MARK_PATTERN = re.compile(r"\bMARK:")

  @property
  def id(self) -> str:
    return "SectionMarkerRule"

  @property
  def name(self) -> str:
    return "section-marker"

  @property
  def description(self) -> str:
    return "Precede each protocol conformance extension with a // MARK: comment"

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

    for i, token in enumerate(tokens):
      if not token.is_keyword("extension"):
        continue

      protocols = _conformances(tokens, i)
      if not protocols:
        continue

      start, _ = declaration_modifiers(tokens, i)
      if self._has_marker(tokens, start):
        continue

      names = ", ".join(protocols)
      first = tokens[start]
      violations.append(Violation(
        rule_id=self.id,
        line=first.line,
        column=first.column,
        message=f"Conformance to {names} should be preceded by '// MARK: - {names}'",
        severity=self.severity,
      ))

    return violations

  def _has_marker(self, tokens: Sequence[Token], start: int) -> bool:
    """Check the comments directly above the declaration for a MARK."""
    i = start - 1
    while i >= 0 and tokens[i].kind is TokenKind.COMMENT:
      if self.MARK_PATTERN.search(tokens[i].text):
        return True
      i -= 1
    return False


def _conformances(tokens: Sequence[Token], extension_index: int) -> list[str]:
  """Protocol names after the ':' of an extension header, if any."""
  protocols: list[str] = []
  in_inheritance = False
  for token in tokens[extension_index + 1:]:
    if token.kind is TokenKind.BRACE_OPEN or token.is_keyword("where"):
      break
    if token.kind is TokenKind.PUNCTUATION and token.text == ":":
      in_inheritance = True
    elif in_inheritance and token.kind is TokenKind.IDENTIFIER:
      protocols.append(token.text)
  return protocols


def _create_section_marker() -> SectionMarkerRule:
  return SectionMarkerRule()


register_rule("SectionMarkerRule", _create_section_marker)
