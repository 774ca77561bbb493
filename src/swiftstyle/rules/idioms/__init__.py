"""Control-flow and optional-handling rules."""

from swiftstyle.rules.idioms.conditional_parens import RedundantConditionalParenRule
from swiftstyle.rules.idioms.force_unwrap import ForceUnwrapRule
from swiftstyle.rules.idioms.nesting_depth import NestingDepthRule

__all__ = [
  "ForceUnwrapRule",
  "NestingDepthRule",
  "RedundantConditionalParenRule",
]
