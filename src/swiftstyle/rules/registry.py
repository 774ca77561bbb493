"""Rule registration and discovery."""

from typing import Callable

from swiftstyle.config import ConfigError, LintConfig
from swiftstyle.rules.base import Rule

RuleFactory = Callable[[], Rule]

_rules: dict[str, RuleFactory] = {}


def register_rule(rule_id: str, factory: RuleFactory) -> None:
  """Register a rule factory.

  Args:
    rule_id: Unique identifier for the rule (e.g., 'ForceUnwrapRule').
    factory: Callable that returns a Rule instance.
  """
  _rules[rule_id] = factory


def get_all_rules() -> list[Rule]:
  """Get instances of all registered rules, in registration order."""
  return [factory() for factory in _rules.values()]


def get_enabled_rules(config: LintConfig) -> list[Rule]:
  """Get rules not disabled by config.

  Raises:
    ConfigError: If config disables or overrides a rule that does not exist.
  """
  rules = get_all_rules()
  known = {r.id for r in rules} | {r.name for r in rules}
  for field, keys in (
    ("disabled_rules", config.disabled_rules),
    ("severity_overrides", config.severity_overrides),
  ):
    unknown = [r for r in keys if r not in known]
    if unknown:
      raise ConfigError(f"Unknown rule(s) in {field}: {', '.join(unknown)}")

  return [rule for rule in rules if not config.is_disabled(rule.id, rule.name)]


def list_rules() -> list[str]:
  """List all registered rule IDs."""
  return list(_rules.keys())


class RuleRegistry:
  """Registry for lazy rule loading."""

  @staticmethod
  def load_all() -> None:
    """Load all rule modules to trigger registration.

    Call this before using get_all_rules() or get_enabled_rules()
    to ensure all rules are registered.
    """
    # Each module registers its rules at import time
    from swiftstyle.rules.declarations import (
      access_control,  # noqa: F401
      naming,  # noqa: F401
      section_marker,  # noqa: F401
    )
    from swiftstyle.rules.idioms import (
      conditional_parens,  # noqa: F401
      force_unwrap,  # noqa: F401
      nesting_depth,  # noqa: F401
    )
    from swiftstyle.rules.layout import (
      indentation,  # noqa: F401
      line_length,  # noqa: F401
      trailing_whitespace,  # noqa: F401
    )
