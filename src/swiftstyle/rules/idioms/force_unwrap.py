"""ForceUnwrapRule: detection of force unwrapping, force try and force casts."""

from typing import Sequence

from swiftstyle.config import LintConfig
from swiftstyle.models import Severity, SourceLine, Token, TokenKind, Violation
from swiftstyle.rules.base import code_tokens, declaration_modifiers, is_glued
from swiftstyle.rules.registry import register_rule


class ForceUnwrapRule:
  """Detects the postfix `!` operator outside comments and string literals.

  Looks for:
  - value! / call()! / array[0]!  (force unwrap)
  - String! in a type annotation (implicitly unwrapped optional)
  - try!  (force try)
  - as!   (force cast)

  Prefix negation (`!isEmpty`) and `!=` / `!==` are not flagged.
  Implicitly unwrapped `@IBOutlet` properties are exempt, Interface
  Builder sets them before use.
  """

  _UNWRAPPABLE_KEYWORDS = ("self", "super", "Self")

  @property
  def id(self) -> str:
    return "ForceUnwrapRule"

  @property
  def name(self) -> str:
    return "force-unwrap"

  @property
  def description(self) -> str:
    return "Avoid force unwrapping; bind optionals with if let or guard let"

  @property
  def severity(self) -> Severity:
    return Severity.ERROR

  def evaluate(
    self,
    lines: Sequence[SourceLine],
    tokens: Sequence[Token],
    config: LintConfig,
  ) -> Sequence[Violation]:
    code = code_tokens(tokens)
    violations: list[Violation] = []

    for i, token in enumerate(code):
      if i == 0 or token.kind is not TokenKind.OPERATOR:
        continue
      if not token.text.startswith("!") or token.text.startswith("!="):
        continue

      prev = code[i - 1]
      if not is_glued(prev, token):
        continue

      message = self._message_for(code, i, prev)
      if message is None:
        continue
      if message == _IUO_MESSAGE and _is_outlet(code, i):
        continue

      violations.append(Violation(
        rule_id=self.id,
        line=token.line,
        column=token.column,
        message=message,
        severity=self.severity,
      ))

    return violations

  def _message_for(self, code: list[Token], index: int, prev: Token) -> str | None:
    if prev.is_keyword("try"):
      return "Force try; handle the error with do/catch or use 'try?'"
    if prev.is_keyword("as"):
      return "Force cast; use 'as?' with if let or guard let instead"

    unwrappable = (
      prev.kind in (TokenKind.IDENTIFIER, TokenKind.PAREN_CLOSE)
      or prev.is_keyword(*self._UNWRAPPABLE_KEYWORDS)
      or (prev.kind is TokenKind.PUNCTUATION and prev.text == "]")
    )
    if not unwrappable:
      return None

    if index >= 2 and _is_type_position(code[index - 2]) and prev.text[:1].isupper():
      return _IUO_MESSAGE
    return (
      f"Force unwrap of '{prev.text}'; bind the optional with if let "
      "or guard let instead"
    )


_IUO_MESSAGE = (
  "Implicitly unwrapped optional; declare a regular optional and bind it "
  "with if let or guard let"
)


def _is_type_position(token: Token) -> bool:
  """True if the token introduces a type annotation or return type."""
  return (
    (token.kind is TokenKind.PUNCTUATION and token.text == ":")
    or (token.kind is TokenKind.OPERATOR and token.text == "->")
  )


def _is_outlet(code: list[Token], index: int) -> bool:
  """True if the `!` at index belongs to an `@IBOutlet` property."""
  for j in range(index - 1, -1, -1):
    token = code[j]
    if token.is_keyword("var", "let"):
      start, _ = declaration_modifiers(code, j)
      return any(
        t.kind is TokenKind.ATTRIBUTE and t.text == "@IBOutlet"
        for t in code[start:j]
      )
    if token.kind in (TokenKind.KEYWORD, TokenKind.BRACE_OPEN, TokenKind.BRACE_CLOSE):
      return False
  return False


def _create_force_unwrap() -> ForceUnwrapRule:
  return ForceUnwrapRule()


register_rule("ForceUnwrapRule", _create_force_unwrap)
