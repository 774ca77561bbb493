"""Whitespace and layout rules."""

from swiftstyle.rules.layout.indentation import IndentationRule
from swiftstyle.rules.layout.line_length import LineLengthRule
from swiftstyle.rules.layout.trailing_whitespace import TrailingWhitespaceRule

__all__ = [
  "IndentationRule",
  "LineLengthRule",
  "TrailingWhitespaceRule",
]
