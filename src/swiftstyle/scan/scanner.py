"""Line and token scanning for Swift source."""

import bisect
import re
from typing import Iterable

from swiftstyle.models import ScannedSource, SourceLine, Token, TokenKind


class ScanError(Exception):
  """Source contains an unterminated string literal or block comment."""

  def __init__(self, line: int, column: int, message: str):
    super().__init__(f"line {line}, column {column}: {message}")
    self.line = line
    self.column = column
    self.reason = message


KEYWORDS = frozenset([
  # Declarations
  "associatedtype", "class", "deinit", "enum", "extension", "fileprivate",
  "func", "import", "init", "inout", "internal", "let", "open", "operator",
  "private", "precedencegroup", "protocol", "public", "rethrows", "static",
  "struct", "subscript", "typealias", "var",
  # Statements
  "break", "case", "catch", "continue", "default", "defer", "do", "else",
  "fallthrough", "for", "guard", "if", "in", "repeat", "return", "switch",
  "throw", "where", "while",
  # Expressions and types
  "Any", "as", "async", "await", "false", "is", "nil", "self", "Self",
  "super", "throws", "true", "try",
  # Declaration modifiers
  "convenience", "dynamic", "final", "indirect", "lazy", "mutating",
  "nonmutating", "optional", "override", "required", "unowned", "weak",
])

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_DOLLAR_IDENTIFIER = re.compile(r"\$[A-Za-z0-9_]+")
_NUMBER = re.compile(r"\d\w*(?:\.\d\w*)?")

_OPERATOR_CHARS = frozenset("/=-+!*%<>&|^~?.")
_WHITESPACE = frozenset(" \t\r\n\f\v")

_SINGLE_CHAR_KINDS = {
  "{": TokenKind.BRACE_OPEN,
  "}": TokenKind.BRACE_CLOSE,
  "(": TokenKind.PAREN_OPEN,
  ")": TokenKind.PAREN_CLOSE,
}


def scan(text: str) -> ScannedSource:
  """Scan source text into lines and tokens.

  Raises:
    ScanError: If a string literal or block comment is never closed.
  """
  return ScannedSource(lines=split_lines(text), tokens=_Lexer(text).run())


def split_lines(text: str) -> list[SourceLine]:
  """Split text into SourceLines.

  A trailing newline terminates the last line rather than starting
  a new empty one.
  """
  raw_lines = text.split("\n")
  if raw_lines[-1] == "":
    raw_lines.pop()

  lines: list[SourceLine] = []
  for number, raw in enumerate(raw_lines, start=1):
    if raw.endswith("\r"):
      raw = raw[:-1]
    body = raw.lstrip()
    leading = raw[:len(raw) - len(body)]
    lines.append(SourceLine(
      number=number,
      raw=raw,
      trimmed=raw.strip(),
      indent=len(leading),
      leading_whitespace=leading,
    ))
  return lines


def continuation_lines(tokens: Iterable[Token]) -> set[int]:
  """Line numbers that sit inside a multi-line comment or string.

  The line a token starts on is not included, only the lines it
  spills over onto.
  """
  covered: set[int] = set()
  for token in tokens:
    if token.kind in (TokenKind.COMMENT, TokenKind.STRING_LITERAL):
      covered.update(range(token.line + 1, token.end_line + 1))
  return covered


class _Lexer:
  """Single-pass lexer over the full source text."""

  def __init__(self, text: str):
    self._text = text
    self._line_starts = [0] + [m.end() for m in re.finditer("\n", text)]
    self._tokens: list[Token] = []

  def run(self) -> list[Token]:
    text = self._text
    pos = 0

    while pos < len(text):
      ch = text[pos]

      if ch in _WHITESPACE:
        pos += 1
      elif text.startswith("//", pos):
        end = text.find("\n", pos)
        if end == -1:
          end = len(text)
        self._emit(TokenKind.COMMENT, pos, end)
        pos = end
      elif text.startswith("/*", pos):
        end = self._skip_block_comment(pos)
        self._emit(TokenKind.COMMENT, pos, end)
        pos = end
      elif ch == '"' or (ch == "#" and self._is_raw_string(pos)):
        end = self._skip_string(pos)
        self._emit(TokenKind.STRING_LITERAL, pos, end)
        pos = end
      elif ch in "#@":
        match = _IDENTIFIER.match(text, pos + 1)
        end = match.end() if match else pos + 1
        if not match:
          kind = TokenKind.PUNCTUATION
        elif ch == "#":
          kind = TokenKind.KEYWORD  # compiler directive
        else:
          kind = TokenKind.ATTRIBUTE
        self._emit(kind, pos, end)
        pos = end
      elif ch == "`":
        end = text.find("`", pos + 1)
        newline = text.find("\n", pos + 1)
        if end == -1 or (newline != -1 and newline < end):
          self._emit(TokenKind.PUNCTUATION, pos, pos + 1)
          pos += 1
        else:
          self._emit(TokenKind.IDENTIFIER, pos, end + 1)
          pos = end + 1
      elif ch == "$" and _DOLLAR_IDENTIFIER.match(text, pos):
        end = _DOLLAR_IDENTIFIER.match(text, pos).end()
        self._emit(TokenKind.IDENTIFIER, pos, end)
        pos = end
      elif _IDENTIFIER.match(text, pos):
        end = _IDENTIFIER.match(text, pos).end()
        word = text[pos:end]
        kind = TokenKind.KEYWORD if word in KEYWORDS else TokenKind.IDENTIFIER
        self._emit(kind, pos, end)
        pos = end
      elif ch.isdigit():
        end = _NUMBER.match(text, pos).end()
        self._emit(TokenKind.NUMBER, pos, end)
        pos = end
      elif ch in _SINGLE_CHAR_KINDS:
        self._emit(_SINGLE_CHAR_KINDS[ch], pos, pos + 1)
        pos += 1
      elif ch in _OPERATOR_CHARS:
        end = self._operator_end(pos)
        self._emit(TokenKind.OPERATOR, pos, end)
        pos = end
      else:
        self._emit(TokenKind.PUNCTUATION, pos, pos + 1)
        pos += 1

    return self._tokens

  def _locate(self, pos: int) -> tuple[int, int]:
    line = bisect.bisect_right(self._line_starts, pos)
    return line, pos - self._line_starts[line - 1] + 1

  def _emit(self, kind: TokenKind, start: int, end: int) -> None:
    # Drop the \r of CRLF line endings from line comments
    while end - 1 > start and self._text[end - 1] == "\r":
      end -= 1
    line, column = self._locate(start)
    end_line, end_column = self._locate(end - 1)
    self._tokens.append(Token(
      kind=kind,
      text=self._text[start:end],
      line=line,
      column=column,
      end_line=end_line,
      end_column=end_column,
    ))

  def _error(self, pos: int, message: str) -> ScanError:
    line, column = self._locate(pos)
    return ScanError(line, column, message)

  def _operator_end(self, start: int) -> int:
    text = self._text
    end = start
    while end < len(text) and text[end] in _OPERATOR_CHARS:
      # A comment opener ends the operator run
      if end > start and text.startswith(("//", "/*"), end):
        break
      end += 1
    return end

  def _is_raw_string(self, pos: int) -> bool:
    text = self._text
    while pos < len(text) and text[pos] == "#":
      pos += 1
    return pos < len(text) and text[pos] == '"'

  def _skip_block_comment(self, start: int) -> int:
    text = self._text
    depth = 0
    pos = start
    while pos < len(text):
      if text.startswith("/*", pos):
        depth += 1
        pos += 2
      elif text.startswith("*/", pos):
        depth -= 1
        pos += 2
        if depth == 0:
          return pos
      else:
        pos += 1
    raise self._error(start, "unterminated block comment")

  def _skip_string(self, start: int) -> int:
    """Return the position just past the string literal at start."""
    text = self._text
    pos = start
    hashes = 0
    while text[pos] == "#":
      hashes += 1
      pos += 1

    multiline = text.startswith('"""', pos)
    delimiter = '"""' if multiline else '"'
    closing = delimiter + "#" * hashes
    escape = "\\" + "#" * hashes
    pos += len(delimiter)

    while pos < len(text):
      if text.startswith(escape, pos):
        pos += len(escape)
        if pos < len(text) and text[pos] == "(":
          pos = self._skip_interpolation(pos, start)
        else:
          pos += 1
        continue
      if text.startswith(closing, pos):
        return pos + len(closing)
      if text[pos] == "\n" and not multiline:
        break
      pos += 1

    raise self._error(start, "unterminated string literal")

  def _skip_interpolation(self, open_paren: int, string_start: int) -> int:
    """Return the position just past the interpolation's closing paren."""
    text = self._text
    depth = 0
    pos = open_paren
    while pos < len(text):
      ch = text[pos]
      if ch == '"' or (ch == "#" and self._is_raw_string(pos)):
        pos = self._skip_string(pos)
        continue
      if ch == "(":
        depth += 1
      elif ch == ")":
        depth -= 1
        if depth == 0:
          return pos + 1
      pos += 1
    raise self._error(string_start, "unterminated string literal")
