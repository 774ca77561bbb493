"""Tests for rule engine infrastructure."""

from typing import Sequence

import pytest
from swiftstyle.config import ConfigError, LintConfig
from swiftstyle.models import Report, Severity, SourceLine, Token, Violation
from swiftstyle.rules import RuleEngine, generate_summary, get_all_rules, get_enabled_rules
from swiftstyle.rules.base import Rule, declaration_modifiers
from swiftstyle.rules.registry import list_rules
from swiftstyle.scan import ScanError, scan


class MockRule:
  """Mock rule for testing."""

  def __init__(
    self,
    rule_id: str = "MockRule",
    name: str = "mock-rule",
    severity: Severity = Severity.WARNING,
    violations: list[Violation] | None = None,
  ):
    self._id = rule_id
    self._name = name
    self._severity = severity
    self._violations = violations or []

  @property
  def id(self) -> str:
    return self._id

  @property
  def name(self) -> str:
    return self._name

  @property
  def description(self) -> str:
    return "Mock rule"

  @property
  def severity(self) -> Severity:
    return self._severity

  def evaluate(
    self,
    lines: Sequence[SourceLine],
    tokens: Sequence[Token],
    config: LintConfig,
  ) -> Sequence[Violation]:
    return self._violations


def _violation(
  line: int,
  column: int | None = 1,
  rule_id: str = "MockRule",
  message: str = "m",
) -> Violation:
  return Violation(rule_id=rule_id, line=line, column=column, message=message)


class TestViolation:
  def test_frozen_dataclass(self) -> None:
    violation = Violation(rule_id="LineLengthRule", line=4, column=None, message="Too long")

    assert violation.severity == Severity.WARNING
    with pytest.raises(AttributeError):
      violation.line = 5  # type: ignore[misc]

  def test_sort_key_orders_missing_column_first(self) -> None:
    with_column = _violation(3, column=1)
    without_column = _violation(3, column=None)

    ordered = sorted([with_column, without_column], key=lambda v: v.sort_key)

    assert ordered == [without_column, with_column]


class TestRuleProtocol:
  def test_mock_rule_implements_protocol(self) -> None:
    rule: Rule = MockRule()

    assert rule.id == "MockRule"
    assert rule.name == "mock-rule"
    assert rule.evaluate([], [], LintConfig()) == []

  def test_registered_rules_have_unique_ids_and_names(self) -> None:
    rules = get_all_rules()

    assert len({r.id for r in rules}) == len(rules)
    assert len({r.name for r in rules}) == len(rules)


class TestRuleRegistry:
  def test_all_rules_registered(self) -> None:
    assert set(list_rules()) >= {
      "AccessAndFinalDefaultRule",
      "ForceUnwrapRule",
      "IndentationRule",
      "LineLengthRule",
      "NamingDescriptivenessRule",
      "NestingDepthRule",
      "RedundantConditionalParenRule",
      "SectionMarkerRule",
      "TrailingWhitespaceRule",
    }

  def test_disable_by_id_and_name(self) -> None:
    config = LintConfig(disabled_rules=["ForceUnwrapRule", "line-length"])
    ids = {r.id for r in get_enabled_rules(config)}

    assert "ForceUnwrapRule" not in ids
    assert "LineLengthRule" not in ids
    assert "IndentationRule" in ids

  def test_unknown_disabled_rule_raises(self) -> None:
    with pytest.raises(ConfigError, match="NoSuchRule"):
      get_enabled_rules(LintConfig(disabled_rules=["NoSuchRule"]))

  def test_unknown_severity_override_raises(self) -> None:
    config = LintConfig(severity_overrides={"force-unwrap": "warning", "NoSuchRule": "error"})

    with pytest.raises(ConfigError, match="severity_overrides: NoSuchRule"):
      get_enabled_rules(config)


class TestDeclarationModifiers:
  def test_collects_modifiers_and_attributes(self) -> None:
    tokens = scan("@objc private(set) public final class Store {}").tokens
    class_index = next(i for i, t in enumerate(tokens) if t.text == "class")

    start, modifiers = declaration_modifiers(tokens, class_index)

    assert start == 0
    assert modifiers == {"private", "public", "final"}

  def test_stops_at_previous_statement(self) -> None:
    tokens = scan("let count = 1\nclass Store {}").tokens
    class_index = next(i for i, t in enumerate(tokens) if t.text == "class")

    start, modifiers = declaration_modifiers(tokens, class_index)

    assert start == class_index
    assert modifiers == set()


class TestRuleEngine:
  def test_empty_rules(self) -> None:
    engine = RuleEngine(rules=[])

    report = engine.check("View.swift", "let value = 1\n")

    assert report.path == "View.swift"
    assert report.violations == ()

  def test_clean_source_has_no_violations(self, clean_source: str) -> None:
    report = RuleEngine().check("CircleViewController.swift", clean_source)

    assert report.violations == ()
    assert report.error is None

  def test_sorts_by_line_then_rule(self) -> None:
    engine = RuleEngine(rules=[
      MockRule("ZetaRule", "zeta", violations=[_violation(2, rule_id="ZetaRule")]),
      MockRule("AlphaRule", "alpha", violations=[
        _violation(5, rule_id="AlphaRule"),
        _violation(2, rule_id="AlphaRule"),
      ]),
    ])

    report = engine.check("View.swift", "")

    assert [(v.line, v.rule_id) for v in report.violations] == [
      (2, "AlphaRule"),
      (2, "ZetaRule"),
      (5, "AlphaRule"),
    ]

  def test_deduplicates_same_rule_line_and_column(self) -> None:
    engine = RuleEngine(rules=[
      MockRule(violations=[_violation(3, 7, message="first"), _violation(3, 7, message="second")]),
    ])

    report = engine.check("View.swift", "")

    assert len(report.violations) == 1
    assert report.violations[0].message == "first"

  def test_applies_rule_severity(self) -> None:
    engine = RuleEngine(rules=[
      MockRule(severity=Severity.ERROR, violations=[_violation(1)]),
    ])

    report = engine.check("View.swift", "")

    assert report.violations[0].severity == Severity.ERROR

  def test_severity_override(self) -> None:
    config = LintConfig(severity_overrides={"force-unwrap": "warning"})
    engine = RuleEngine(config)

    report = engine.check("View.swift", "let name = user.name!\n")

    assert report.violations[0].rule_id == "ForceUnwrapRule"
    assert report.violations[0].severity == Severity.WARNING

  def test_deterministic(self, clean_source: str) -> None:
    text = clean_source + "class Legacy {\n   func run() { let x = y! }  \n}\n"
    engine = RuleEngine()

    assert engine.check("a.swift", text) == engine.check("a.swift", text)

  def test_scan_error_propagates(self) -> None:
    with pytest.raises(ScanError):
      RuleEngine().check("Broken.swift", 'let text = "open\n')

  def test_default_engine_checks_nesting(self) -> None:
    text = "func update() {\n  if first {\n    if second {\n      run()\n    }\n  }\n}\n"

    report = RuleEngine().check("a.swift", text)

    assert [(v.rule_id, v.line) for v in report.violations] == [("NestingDepthRule", 2)]

  def test_engine_builds_enabled_rules(self) -> None:
    engine = RuleEngine(LintConfig(disabled_rules=["golden-path"]))

    assert "NestingDepthRule" not in {r.id for r in engine.rules}

  def test_unknown_disabled_rule_raises(self) -> None:
    with pytest.raises(ConfigError):
      RuleEngine(LintConfig(disabled_rules=["bogus"]))


class TestSuppressions:
  def test_ignore_on_same_line(self) -> None:
    text = "let name = user.name! // swiftstyle:ignore force-unwrap\n"

    assert RuleEngine().check("a.swift", text).violations == ()

  def test_ignore_next_line(self) -> None:
    text = "// swiftstyle:ignore-next-line ForceUnwrapRule\nlet name = user.name!\n"

    assert RuleEngine().check("a.swift", text).violations == ()

  def test_ignore_without_ids_suppresses_all(self) -> None:
    text = "let x = user.name!  // swiftstyle:ignore\n"

    assert RuleEngine().check("a.swift", text).violations == ()

  def test_ignore_only_listed_rules(self) -> None:
    text = "// swiftstyle:ignore-next-line generic-name\nlet x = user.name!\n"

    violations = RuleEngine().check("a.swift", text).violations

    assert [v.rule_id for v in violations] == ["ForceUnwrapRule"]

  def test_block_comment_suppression(self) -> None:
    text = "/* swiftstyle:ignore-next-line force-unwrap, generic-name */\nlet x = user.name!\n"

    assert RuleEngine().check("a.swift", text).violations == ()

  def test_directive_inside_string_is_ignored(self) -> None:
    text = 'let note = "swiftstyle:ignore"; let name = user.name!\n'

    assert len(RuleEngine().check("a.swift", text).violations) == 1


class TestGenerateSummary:
  def test_no_issues(self) -> None:
    summary = generate_summary([Report(path="a.swift"), Report(path="b.swift")])

    assert summary == "Checked 2 files. No issues found."

  def test_single_file(self) -> None:
    assert generate_summary([Report(path="a.swift")]) == "Checked 1 file. No issues found."

  def test_counts_by_severity(self) -> None:
    report = Report(path="a.swift", violations=(
      Violation(rule_id="ForceUnwrapRule", line=1, severity=Severity.ERROR),
      Violation(rule_id="LineLengthRule", line=2),
      Violation(rule_id="IndentationRule", line=3),
    ))

    summary = generate_summary([report])

    assert summary == "Checked 1 file, found 3 issues (1 error, 2 warnings)."

  def test_reports_unreadable_files(self, sample_lint_result) -> None:
    summary = generate_summary(sample_lint_result.reports)

    assert summary == sample_lint_result.summary
