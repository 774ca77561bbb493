"""AccessAndFinalDefaultRule: classes and their methods default to final or private."""

from dataclasses import dataclass
from typing import Sequence

from swiftstyle.config import LintConfig
from swiftstyle.models import Severity, SourceLine, Token, TokenKind, Violation
from swiftstyle.rules.base import code_tokens, declaration_modifiers
from swiftstyle.rules.registry import register_rule

_RESTRICTIVE_ACCESS = frozenset(["private", "fileprivate"])


@dataclass
class _Scope:
  # Methods declared directly in this scope must be final or private
  checks_members: bool = False


class AccessAndFinalDefaultRule:
  """Detects classes and class methods left open to overriding by default.

  A class declaration needs `final`, or `private`/`fileprivate` access.
  `open` declarations and names listed in the access allowlist are meant
  for subclassing and are exempt. Inside a flagged class, each method
  needs `final`, `static` or restrictive access.

  Structs, enums, protocols and extensions cannot be subclassed and are
  not checked.
  """

  @property
  def id(self) -> str:
    return "AccessAndFinalDefaultRule"

  @property
  def name(self) -> str:
    return "final-or-private"

  @property
  def description(self) -> str:
    return "Mark classes and their members final or private unless designed for subclassing"

  @property
  def severity(self) -> Severity:
    return Severity.WARNING

  def evaluate(
    self,
    lines: Sequence[SourceLine],
    tokens: Sequence[Token],
    config: LintConfig,
  ) -> Sequence[Violation]:
    allowlist = set(config.access_allowlist)
    code = code_tokens(tokens)
    violations: list[Violation] = []

    scopes: list[_Scope] = []
    pending: _Scope | None = None

    for i, token in enumerate(code):
      if token.kind is TokenKind.BRACE_OPEN:
        scopes.append(pending or _Scope())
        pending = None
        continue
      if token.kind is TokenKind.BRACE_CLOSE:
        pending = None
        if scopes:
          scopes.pop()
        continue

      following = code[i + 1] if i + 1 < len(code) else None

      if token.is_keyword("class") and following and following.kind is TokenKind.IDENTIFIER:
        name = following.text
        _, modifiers = declaration_modifiers(code, i)
        sealed = "final" in modifiers or bool(modifiers & _RESTRICTIVE_ACCESS)
        exempt = "open" in modifiers or name in allowlist
        if not (sealed or exempt):
          violations.append(self._violation(
            token,
            f"Class '{name}' should be final (or private) unless it is designed "
            "for subclassing",
          ))
        pending = _Scope(checks_members=not (sealed or exempt))

      elif token.is_keyword("struct", "enum", "protocol", "extension"):
        pending = _Scope()

      elif token.is_keyword("func") and scopes and scopes[-1].checks_members:
        name = following.text if following else "function"
        _, modifiers = declaration_modifiers(code, i)
        allowed = {"final", "static", "open"} | _RESTRICTIVE_ACCESS
        if not modifiers & allowed and name not in allowlist:
          violations.append(self._violation(
            token,
            f"Method '{name}' should be final or private unless it is meant "
            "to be overridden",
          ))

    return violations

  def _violation(self, token: Token, message: str) -> Violation:
    return Violation(
      rule_id=self.id,
      line=token.line,
      column=token.column,
      message=message,
      severity=self.severity,
    )


def _create_access_control() -> AccessAndFinalDefaultRule:
  return AccessAndFinalDefaultRule()


register_rule("AccessAndFinalDefaultRule", _create_access_control)
