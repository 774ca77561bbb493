"""NestingDepthRule: golden-path detection of deeply nested conditionals."""

from dataclasses import dataclass
from typing import Sequence

from swiftstyle.config import LintConfig
from swiftstyle.models import Severity, SourceLine, Token, TokenKind, Violation
from swiftstyle.rules.base import code_tokens
from swiftstyle.rules.registry import register_rule

_FUNCTION = "function"
_CONDITIONAL = "conditional"
_GUARD = "guard"
_PROPERTY = "property"
_OTHER = "other"


@dataclass
class _Block:
  kind: str
  root: Token | None = None


@dataclass
class _Pending:
  kind: str
  paren_depth: int
  root: Token


class NestingDepthRule:
  """Detects conditionals nested too deeply inside a function body.

  `if`, `else` and `switch` blocks count towards the depth; `guard`
  bodies and loops do not. Each chain of nested conditionals that goes
  past the limit is reported once, at its outermost conditional, since
  that is where an early return would flatten it. Computed property
  bodies (with their get/set/willSet/didSet blocks) are measured like
  function bodies.

  Preferred:
    guard let context = context else { return }
    if let inputData = inputData { ... }

  Not preferred:
    if let context = context {
      if let inputData = inputData {
        ...
  """

  _FUNCTION_KEYWORDS = ("func", "init", "deinit", "subscript")
  _CONDITIONAL_KEYWORDS = ("if", "switch")
  _ACCESSORS = ("get", "set", "willSet", "didSet")

  @property
  def id(self) -> str:
    return "NestingDepthRule"

  @property
  def name(self) -> str:
    return "golden-path"

  @property
  def description(self) -> str:
    return "Keep the golden path unindented; return early instead of nesting conditionals"

  @property
  def severity(self) -> Severity:
    return Severity.WARNING

  def evaluate(
    self,
    lines: Sequence[SourceLine],
    tokens: Sequence[Token],
    config: LintConfig,
  ) -> Sequence[Violation]:
    limit = config.nesting_depth_limit
    code = code_tokens(tokens)

    blocks: list[_Block] = []
    pending: _Pending | None = None
    just_closed: _Block | None = None
    paren_depth = 0
    # Outermost conditional -> deepest nesting seen beneath it
    deepest: dict[Token, int] = {}

    for i, token in enumerate(code):
      prev = code[i - 1] if i else None
      closed, just_closed = just_closed, None

      if token.kind is TokenKind.PAREN_OPEN or token.text == "[":
        paren_depth += 1
      elif token.kind is TokenKind.PAREN_CLOSE or token.text == "]":
        paren_depth = max(0, paren_depth - 1)
      elif token.is_keyword(*self._FUNCTION_KEYWORDS):
        if prev is None or prev.text != ".":  # self.init(...) is a call
          pending = _Pending(_FUNCTION, paren_depth, token)
      elif (
        token.kind is TokenKind.IDENTIFIER and token.text in self._ACCESSORS
        and prev is not None
        and (
          prev.kind in (TokenKind.BRACE_OPEN, TokenKind.BRACE_CLOSE)
          or prev.is_keyword("mutating", "nonmutating")
        )
      ):
        pending = _Pending(_FUNCTION, paren_depth, token)
      elif token.is_keyword("var"):
        # A computed property body is a function scope
        if pending is None or pending.kind in (_FUNCTION, _PROPERTY):
          pending = _Pending(_PROPERTY, paren_depth, token)
      elif (
        token.kind is TokenKind.OPERATOR and token.text == "="
        and pending is not None and pending.kind == _PROPERTY
        and pending.paren_depth == paren_depth
      ):
        pending = None
      elif token.is_keyword("guard"):
        pending = _Pending(_GUARD, paren_depth, token)
      elif token.is_keyword(*self._CONDITIONAL_KEYWORDS):
        if not (pending and pending.kind == _CONDITIONAL and prev and prev.is_keyword("else")):
          pending = _Pending(_CONDITIONAL, paren_depth, token)
      elif token.is_keyword("else"):
        if pending is None or pending.kind != _GUARD:
          root = closed.root if closed and closed.kind == _CONDITIONAL and closed.root else token
          pending = _Pending(_CONDITIONAL, paren_depth, root)
      elif token.kind is TokenKind.BRACE_OPEN:
        block = _Block(_OTHER)
        if pending is not None and pending.paren_depth == paren_depth:
          if pending.kind == _FUNCTION:
            block = _Block(_FUNCTION)
          elif pending.kind == _PROPERTY and token.line == pending.root.line:
            block = _Block(_FUNCTION)
          elif pending.kind == _CONDITIONAL:
            block = self._open_conditional(blocks, pending.root, deepest)
          pending = None
        blocks.append(block)
      elif token.kind is TokenKind.BRACE_CLOSE:
        # A body-less declaration (protocol requirement) ends with its scope
        if pending is not None and pending.paren_depth == paren_depth:
          pending = None
        if blocks:
          just_closed = blocks.pop()

    violations: list[Violation] = []
    for root, depth in deepest.items():
      if depth > limit:
        violations.append(Violation(
          rule_id=self.id,
          line=root.line,
          column=root.column,
          message=(
            f"Conditionals nested {depth} deep (limit {limit}); "
            "return early with guard to keep the golden path unindented"
          ),
          severity=self.severity,
        ))
    return violations

  def _open_conditional(
    self,
    blocks: list[_Block],
    own_root: Token,
    deepest: dict[Token, int],
  ) -> _Block:
    """Create a conditional block, recording its depth within the function."""
    depth = 1
    outer: _Block | None = None
    in_function = False
    for block in reversed(blocks):
      if block.kind == _FUNCTION:
        in_function = True
        break
      if block.kind == _CONDITIONAL:
        depth += 1
        outer = block

    if not in_function:
      return _Block(_CONDITIONAL, root=None)

    root = outer.root if outer is not None and outer.root is not None else own_root
    deepest[root] = max(deepest.get(root, 0), depth)
    return _Block(_CONDITIONAL, root=root)


def _create_nesting_depth() -> NestingDepthRule:
  return NestingDepthRule()


register_rule("NestingDepthRule", _create_nesting_depth)
