"""Rule abstractions and shared token helpers."""

from typing import Protocol, Sequence

from swiftstyle.config import LintConfig
from swiftstyle.models import Severity, SourceLine, Token, TokenKind, Violation


class Rule(Protocol):
  """Protocol for style rules.

  Each rule checks a single guideline. Rules are stateless and
  independent: no rule reads another rule's output, so they can run in
  any order and be shared between threads.

  Example:
    class MyRule:
      @property
      def id(self) -> str:
        return "MyRule"

      @property
      def name(self) -> str:
        return "my-rule"

      @property
      def description(self) -> str:
        return "What the rule enforces"

      @property
      def severity(self) -> Severity:
        return Severity.WARNING

      def evaluate(self, lines, tokens, config) -> Sequence[Violation]:
        return []
  """

  @property
  def id(self) -> str:
    """Unique identifier reported with each violation (e.g., 'ForceUnwrapRule')."""
    ...

  @property
  def name(self) -> str:
    """Short kebab-case alias (e.g., 'force-unwrap')."""
    ...

  @property
  def description(self) -> str:
    """One-line summary of the guideline."""
    ...

  @property
  def severity(self) -> Severity:
    """Default severity of this rule's violations."""
    ...

  def evaluate(
    self,
    lines: Sequence[SourceLine],
    tokens: Sequence[Token],
    config: LintConfig,
  ) -> Sequence[Violation]:
    """Check scanned source.

    Args:
      lines: Scanned source lines.
      tokens: Tokens in source order, comments and literals included.
      config: Active configuration.

    Returns:
      Sequence of Violation objects. Empty if no issues found.
    """
    ...


def code_tokens(tokens: Sequence[Token]) -> list[Token]:
  """Tokens with comments removed."""
  return [t for t in tokens if t.kind is not TokenKind.COMMENT]


def matching_close(tokens: Sequence[Token], open_index: int) -> int | None:
  """Index of the bracket closing the one at open_index, or None."""
  opener = tokens[open_index].kind
  closer = {
    TokenKind.PAREN_OPEN: TokenKind.PAREN_CLOSE,
    TokenKind.BRACE_OPEN: TokenKind.BRACE_CLOSE,
  }[opener]

  depth = 0
  for i in range(open_index, len(tokens)):
    kind = tokens[i].kind
    if kind is opener:
      depth += 1
    elif kind is closer:
      depth -= 1
      if depth == 0:
        return i
  return None


def matching_open(tokens: Sequence[Token], close_index: int) -> int | None:
  """Index of the paren opening the one at close_index, or None."""
  depth = 0
  for i in range(close_index, -1, -1):
    kind = tokens[i].kind
    if kind is TokenKind.PAREN_CLOSE:
      depth += 1
    elif kind is TokenKind.PAREN_OPEN:
      depth -= 1
      if depth == 0:
        return i
  return None


def is_glued(left: Token, right: Token) -> bool:
  """True when right starts immediately after left with no whitespace."""
  return left.end_line == right.line and left.end_column + 1 == right.column


DECLARATION_MODIFIERS = frozenset([
  "class", "convenience", "dynamic", "fileprivate", "final", "indirect",
  "internal", "lazy", "mutating", "nonmutating", "open", "optional",
  "override", "private", "public", "required", "static", "unowned", "weak",
])


def declaration_modifiers(tokens: Sequence[Token], index: int) -> tuple[int, set[str]]:
  """Walk back from the declaration keyword at index over its modifiers.

  Attributes (with or without arguments) and `private(set)`-style
  modifiers are skipped over.

  Returns:
    Tuple of (index of the first token of the declaration, modifier words).
  """
  modifiers: set[str] = set()
  start = index
  i = index - 1
  while i >= 0:
    token = tokens[i]
    if token.kind is TokenKind.KEYWORD and token.text in DECLARATION_MODIFIERS:
      modifiers.add(token.text)
    elif token.kind is TokenKind.ATTRIBUTE:
      pass
    elif token.kind is TokenKind.PAREN_CLOSE:
      opener = matching_open(tokens, i)
      if opener is None or opener == 0:
        break
      owner = tokens[opener - 1]
      if owner.kind is not TokenKind.ATTRIBUTE and owner.text not in DECLARATION_MODIFIERS:
        break
      i = opener
    else:
      break
    start = i
    i -= 1
  return start, modifiers
