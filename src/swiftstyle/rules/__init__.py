"""Style rules and the engine that runs them."""

from swiftstyle.rules.base import Rule
from swiftstyle.rules.engine import RuleEngine, generate_summary
from swiftstyle.rules.registry import (
  RuleRegistry,
  get_all_rules,
  get_enabled_rules,
  list_rules,
)

__all__ = [
  "Rule",
  "RuleEngine",
  "RuleRegistry",
  "generate_summary",
  "get_all_rules",
  "get_enabled_rules",
  "list_rules",
]
