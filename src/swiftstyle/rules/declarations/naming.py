"""NamingDescriptivenessRule: detection of generic, non-descriptive names."""

from typing import Sequence

from swiftstyle.config import LintConfig
from swiftstyle.models import Severity, SourceLine, Token, TokenKind, Violation
from swiftstyle.rules.base import code_tokens, matching_close
from swiftstyle.rules.registry import register_rule


class NamingDescriptivenessRule:
  """Detects declared names found in the generic-name denylist.

  Only declarations are checked (constants, variables, functions,
  types, enum cases, loop variables and function parameters) so that
  uses of framework APIs that happen to share a name are not flagged.
  Matching is case-insensitive against the whole identifier.

  Preferred:
    let maximumWidth: CGFloat = 106.5
    let titleLabel: UILabel

  Not preferred:
    let x = 5
    let label: UILabel
  """

  _INTRODUCERS = (
    "let", "var", "func", "for", "case", "class", "struct", "enum",
    "protocol", "typealias", "associatedtype",
  )
  _PATTERN_INTRODUCERS = ("let", "var", "for", "case")
  _PARAMETER_OWNERS = ("func", "init", "subscript")

  @property
  def id(self) -> str:
    return "NamingDescriptivenessRule"

  @property
  def name(self) -> str:
    return "generic-name"

  @property
  def description(self) -> str:
    return "Use descriptive names instead of generic ones like x, label or button"

  @property
  def severity(self) -> Severity:
    return Severity.WARNING

  def evaluate(
    self,
    lines: Sequence[SourceLine],
    tokens: Sequence[Token],
    config: LintConfig,
  ) -> Sequence[Violation]:
    denied = config.denied_names
    if not denied:
      return []

    code = code_tokens(tokens)
    violations: list[Violation] = []

    for name_token in self._declared_names(code):
      name = name_token.text.strip("`")
      if name.lower() in denied:
        violations.append(Violation(
          rule_id=self.id,
          line=name_token.line,
          column=name_token.column,
          message=f"'{name}' is not descriptive; name it after what it holds or does",
          severity=self.severity,
        ))

    return violations

  def _declared_names(self, code: list[Token]) -> list[Token]:
    names: list[Token] = []
    # One entry per open brace: True for an enum body
    enum_bodies: list[bool] = []
    enum_pending = False

    for i, token in enumerate(code):
      if token.kind is TokenKind.BRACE_OPEN:
        enum_bodies.append(enum_pending)
        enum_pending = False
        continue
      if token.kind is TokenKind.BRACE_CLOSE:
        if enum_bodies:
          enum_bodies.pop()
        continue
      if token.kind is not TokenKind.KEYWORD:
        continue

      if token.text == "enum":
        enum_pending = True
      # Outside an enum body `case` starts a pattern; its let/var do the binding
      is_enum_case = token.text == "case" and bool(enum_bodies) and enum_bodies[-1]
      if token.text == "case" and not is_enum_case:
        continue

      if token.text in self._INTRODUCERS and i + 1 < len(code):
        following = code[i + 1]
        if following.kind is TokenKind.IDENTIFIER:
          names.append(following)
        elif (
          following.kind is TokenKind.PAREN_OPEN
          and token.text in self._PATTERN_INTRODUCERS
        ):
          names.extend(_tuple_pattern_names(code, i + 1))
        if token.text in ("let", "var") or is_enum_case:
          names.extend(_listed_names(code, i, binding=not is_enum_case))
      if token.text in self._PARAMETER_OWNERS:
        names.extend(_parameter_names(code, i))
    return names


_LIST_TERMINATORS = frozenset({
  "let", "var", "func", "for", "case", "class", "struct", "enum", "protocol",
  "typealias", "associatedtype", "if", "guard", "while", "switch", "return",
  "in", "where", "else",
})


def _listed_names(code: list[Token], introducer_index: int, binding: bool) -> list[Token]:
  """Names after the first in a comma list, as in `var width = 1, height = 2`.

  For let/var the name must be followed by a type annotation or an
  initializer, which keeps `if let a = b, ready` and `Dictionary<K, V>`
  out of the list.
  """
  names: list[Token] = []
  depth = 0
  for j in range(introducer_index + 1, len(code)):
    token = code[j]
    prev = code[j - 1]
    if depth == 0 and token.line != prev.line and prev.text != ",":
      break
    if token.kind is TokenKind.PAREN_OPEN or token.text == "[":
      depth += 1
    elif token.kind is TokenKind.PAREN_CLOSE or token.text == "]":
      depth -= 1
      if depth < 0:
        break
    elif depth > 0:
      continue
    elif token.kind in (TokenKind.BRACE_OPEN, TokenKind.BRACE_CLOSE):
      break
    elif token.kind is TokenKind.KEYWORD and token.text in _LIST_TERMINATORS:
      break
    elif token.text == "," and j + 1 < len(code):
      following = code[j + 1]
      if following.kind is not TokenKind.IDENTIFIER:
        continue
      if binding and (j + 2 >= len(code) or code[j + 2].text not in (":", "=")):
        continue
      names.append(following)
  return names


def _tuple_pattern_names(code: list[Token], open_index: int) -> list[Token]:
  """Names bound by a tuple pattern such as `let (width, height)`."""
  close = matching_close(code, open_index)
  if close is None:
    return []
  return [
    code[j] for j in range(open_index + 1, close)
    if code[j].kind is TokenKind.IDENTIFIER
    and code[j + 1].text in (",", ")")
  ]


def _parameter_names(code: list[Token], owner_index: int) -> list[Token]:
  """Argument labels and parameter names of a function-like declaration."""
  open_index = None
  for j in range(owner_index + 1, len(code)):
    kind = code[j].kind
    if kind is TokenKind.PAREN_OPEN:
      open_index = j
      break
    if kind in (TokenKind.BRACE_OPEN, TokenKind.BRACE_CLOSE) or code[j].text == "=":
      return []
  if open_index is None:
    return []
  # self.init(...) and super.init(...) are calls, not declarations
  if owner_index > 0 and code[owner_index - 1].text == ".":
    return []

  close = matching_close(code, open_index)
  if close is None:
    return []

  names: list[Token] = []
  depth = 0
  segment: list[Token] = []
  for token in code[open_index + 1:close + 1]:
    if token.kind is TokenKind.PAREN_OPEN or token.text == "[":
      depth += 1
    elif token.kind is TokenKind.PAREN_CLOSE or token.text == "]":
      depth -= 1

    if depth < 0 or (depth == 0 and token.text == ","):
      names.extend(_labels(segment))
      segment = []
    else:
      segment.append(token)
  return names


def _labels(segment: list[Token]) -> list[Token]:
  """Identifiers before the first ':' of a parameter clause."""
  labels: list[Token] = []
  for token in segment:
    if token.text == ":":
      return labels
    if token.kind is not TokenKind.IDENTIFIER:
      return []
    labels.append(token)
  return []


def _create_naming() -> NamingDescriptivenessRule:
  return NamingDescriptivenessRule()


register_rule("NamingDescriptivenessRule", _create_naming)
