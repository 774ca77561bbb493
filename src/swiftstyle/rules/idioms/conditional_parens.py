"""RedundantConditionalParenRule: parentheses around whole conditions."""

from typing import Sequence

from swiftstyle.config import LintConfig
from swiftstyle.models import Severity, SourceLine, Token, TokenKind, Violation
from swiftstyle.rules.base import code_tokens, matching_close
from swiftstyle.rules.registry import register_rule


class RedundantConditionalParenRule:
  """Detects conditions wrapped entirely in parentheses.

  Not preferred:
    if (user.role == .developer) {
    guard (count > 0) else {

  Parentheses that only cover part of the condition, e.g.
  `if (a || b) && c {`, are needed for grouping and are not flagged.
  """

  _KEYWORDS = ("if", "while", "guard")

  @property
  def id(self) -> str:
    return "RedundantConditionalParenRule"

  @property
  def name(self) -> str:
    return "redundant-parens"

  @property
  def description(self) -> str:
    return "Don't wrap if, while and guard conditions in parentheses"

  @property
  def severity(self) -> Severity:
    return Severity.WARNING

  def evaluate(
    self,
    lines: Sequence[SourceLine],
    tokens: Sequence[Token],
    config: LintConfig,
  ) -> Sequence[Violation]:
    code = code_tokens(tokens)
    violations: list[Violation] = []

    for i, token in enumerate(code):
      if not token.is_keyword(*self._KEYWORDS):
        continue
      if i + 1 >= len(code) or code[i + 1].kind is not TokenKind.PAREN_OPEN:
        continue

      close = matching_close(code, i + 1)
      if close is None or close == i + 2 or close + 1 >= len(code):
        continue
      if _has_top_level_comma(code, i + 1, close):
        continue  # tuple, not a grouped condition

      after = code[close + 1]
      if token.text == "guard":
        wraps_condition = after.is_keyword("else")
      else:
        wraps_condition = after.kind is TokenKind.BRACE_OPEN
      if not wraps_condition:
        continue

      violations.append(Violation(
        rule_id=self.id,
        line=token.line,
        column=code[i + 1].column,
        message=f"Parentheses around the '{token.text}' condition are not needed",
        severity=self.severity,
      ))

    return violations


def _has_top_level_comma(code: list[Token], open_index: int, close_index: int) -> bool:
  depth = 0
  for token in code[open_index + 1:close_index]:
    if token.kind is TokenKind.PAREN_OPEN or token.text == "[":
      depth += 1
    elif token.kind is TokenKind.PAREN_CLOSE or token.text == "]":
      depth -= 1
    elif depth == 0 and token.text == ",":
      return True
  return False


def _create_conditional_parens() -> RedundantConditionalParenRule:
  return RedundantConditionalParenRule()


register_rule("RedundantConditionalParenRule", _create_conditional_parens)
