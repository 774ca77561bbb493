"""Rule engine that composes and executes rules."""

import dataclasses
import re
from typing import Sequence

from swiftstyle.config import LintConfig
from swiftstyle.models import Report, Severity, Token, TokenKind, Violation
from swiftstyle.rules.base import Rule
from swiftstyle.rules.registry import RuleRegistry, get_enabled_rules
from swiftstyle.scan import scan

# // swiftstyle:ignore [ids]  or  // swiftstyle:ignore-next-line [ids]
_SUPPRESSION = re.compile(r"swiftstyle:(ignore-next-line|ignore)\b(.*)")
_RULE_LIST_SPLIT = re.compile(r"[\s,]+")

# Line number -> suppressed rule ids; None means every rule
Suppressions = dict[int, set[str] | None]


class RuleEngine:
  """Runs rules over one file's text and builds its Report.

  Example:
    engine = RuleEngine(config)
    report = engine.check("Sources/App/View.swift", text)
  """

  VERSION = "rules-v1"

  def __init__(self, config: LintConfig | None = None, rules: list[Rule] | None = None):
    """Initialize the rule engine.

    Args:
      config: Rule configuration. Defaults are used if None.
      rules: Optional list of rules to use. If None, all registered rules
             not disabled by config are loaded.
    """
    self._config = config or LintConfig()
    if rules is None:
      RuleRegistry.load_all()
      rules = get_enabled_rules(self._config)
    self._rules = rules
    self._name_to_id = {r.name: r.id for r in rules}

  @property
  def rules(self) -> list[Rule]:
    return list(self._rules)

  def check(self, path: str, text: str) -> Report:
    """Scan text and evaluate every rule against it.

    Raises:
      ScanError: If text contains an unterminated literal or comment.
    """
    source = scan(text)
    suppressions = self._collect_suppressions(source.tokens)

    unique: dict[tuple[str, int, int | None], Violation] = {}
    for rule in self._rules:
      severity = self._severity_for(rule)
      for violation in rule.evaluate(source.lines, source.tokens, self._config):
        if violation.severity is not severity:
          violation = dataclasses.replace(violation, severity=severity)
        if _is_suppressed(violation, suppressions):
          continue
        unique.setdefault(violation.identity, violation)

    ordered = sorted(unique.values(), key=lambda v: v.sort_key)
    return Report(path=path, violations=tuple(ordered))

  def _severity_for(self, rule: Rule) -> Severity:
    overrides = self._config.severity_overrides
    return overrides.get(rule.id) or overrides.get(rule.name) or rule.severity

  def _collect_suppressions(self, tokens: Sequence[Token]) -> Suppressions:
    suppressions: Suppressions = {}
    for token in tokens:
      if token.kind is not TokenKind.COMMENT:
        continue
      match = _SUPPRESSION.search(token.text)
      if not match:
        continue

      target = token.line + 1 if match.group(1) == "ignore-next-line" else token.line
      listed = match.group(2).strip().removesuffix("*/")
      ids = {self._name_to_id.get(r, r) for r in _RULE_LIST_SPLIT.split(listed) if r}

      if not ids or suppressions.get(target, set()) is None:
        suppressions[target] = None
      else:
        suppressions.setdefault(target, set()).update(ids)
    return suppressions


def _is_suppressed(violation: Violation, suppressions: Suppressions) -> bool:
  if violation.line not in suppressions:
    return False
  ids = suppressions[violation.line]
  return ids is None or violation.rule_id in ids


def generate_summary(reports: Sequence[Report]) -> str:
  """Generate a summary of a lint run.

  Args:
    reports: Per-file reports.

  Returns:
    Human-readable summary string.
  """
  files = len(reports)
  failed_files = sum(1 for r in reports if r.error is not None)
  violations = [v for r in reports for v in r.violations]

  checked = f"Checked {files} file{'s' if files != 1 else ''}"
  if not violations and not failed_files:
    return f"{checked}. No issues found."

  by_severity: dict[Severity, int] = {}
  for violation in violations:
    by_severity[violation.severity] = by_severity.get(violation.severity, 0) + 1

  parts = []
  for severity in (Severity.ERROR, Severity.WARNING):
    if severity in by_severity:
      count = by_severity[severity]
      parts.append(f"{count} {severity.value}{'s' if count != 1 else ''}")

  summary = f"{checked}, found {len(violations)} issue{'s' if len(violations) != 1 else ''}"
  if parts:
    summary += f" ({', '.join(parts)})"
  if failed_files:
    summary += f"; {failed_files} file{'s' if failed_files != 1 else ''} could not be checked"
  return summary + "."
