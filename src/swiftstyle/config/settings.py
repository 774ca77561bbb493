"""Lint configuration."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from swiftstyle.models import Severity

DEFAULT_INDENT_WIDTH = 2
DEFAULT_MAX_LINE_LENGTH = 100
DEFAULT_NESTING_DEPTH_LIMIT = 1

DEFAULT_GENERIC_NAMES = [
  "a",
  "b",
  "x",
  "bar",
  "button",
  "data",
  "foo",
  "label",
  "number",
  "obj",
  "temp",
  "tmp",
]


class ConfigError(Exception):
  """Configuration value is invalid."""


class LintConfig(BaseModel):
  """Rule configuration.

  Field names are snake_case; the camelCase spellings are accepted as
  aliases so config files written either way load the same.
  """

  model_config = ConfigDict(
    use_enum_values=False,
    populate_by_name=True,
    extra="forbid",
    frozen=True,
  )

  indent_width: int = Field(DEFAULT_INDENT_WIDTH, ge=1, alias="indentWidth")
  max_line_length: int = Field(DEFAULT_MAX_LINE_LENGTH, ge=1, alias="maxLineLength")
  nesting_depth_limit: int = Field(
    DEFAULT_NESTING_DEPTH_LIMIT, ge=0, alias="nestingDepthLimit"
  )
  generic_name_denylist: list[str] = Field(
    default_factory=lambda: list(DEFAULT_GENERIC_NAMES),
    alias="genericNameDenylist",
  )
  disabled_rules: list[str] = Field(default_factory=list, alias="disabledRules")
  warnings_fail_build: bool = Field(False, alias="warningsFailBuild")
  access_allowlist: list[str] = Field(default_factory=list, alias="accessAllowlist")
  severity_overrides: dict[str, Severity] = Field(
    default_factory=dict, alias="severityOverrides"
  )
  jobs: int | None = Field(None, ge=1)

  @field_validator("generic_name_denylist")
  @classmethod
  def _normalize_names(cls, names: list[str]) -> list[str]:
    normalized = [n.strip().lower() for n in names]
    if any(not n for n in normalized):
      raise ValueError("denylist entries must be non-empty")
    return normalized

  @field_validator("disabled_rules", "access_allowlist")
  @classmethod
  def _strip_entries(cls, entries: list[str]) -> list[str]:
    return [e.strip() for e in entries if e.strip()]

  @property
  def denied_names(self) -> frozenset[str]:
    return frozenset(self.generic_name_denylist)

  def is_disabled(self, rule_id: str, rule_name: str) -> bool:
    return rule_id in self.disabled_rules or rule_name in self.disabled_rules
