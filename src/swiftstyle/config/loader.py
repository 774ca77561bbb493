"""Configuration file loading."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from swiftstyle.config.settings import ConfigError, LintConfig

CONFIG_FILENAMES = [
  ".swiftstyle.yaml",
  ".swiftstyle.yml",
  "swiftstyle.yaml",
  "swiftstyle.yml",
]

logger = logging.getLogger("swiftstyle")


def find_config_file(config_path: Path | None = None) -> Path | None:
  """Find config file path, or None if no config exists.

  Raises:
    ConfigError: If an explicit config_path does not exist.
  """
  if config_path is not None:
    if not config_path.is_file():
      raise ConfigError(f"Config file not found: {config_path}")
    return config_path

  for filename in CONFIG_FILENAMES:
    path = Path.cwd() / filename
    if path.is_file():
      return path

  return None


def load_config(config_path: Path | None = None) -> LintConfig:
  """Load configuration from file or defaults."""
  path = find_config_file(config_path)
  if path:
    logger.debug("Loading config from %s", path)
    return _load_from_file(path)
  return LintConfig()


def apply_overrides(config: LintConfig, **overrides: Any) -> LintConfig:
  """Return a validated copy of config with non-None overrides applied."""
  updates = {k: v for k, v in overrides.items() if v is not None}
  if not updates:
    return config
  data = config.model_dump()
  data.update(updates)
  return parse_config(data)


def parse_config(data: dict) -> LintConfig:
  """Parse config dict into LintConfig.

  Raises:
    ConfigError: On unknown keys or invalid values.
  """
  try:
    return LintConfig.model_validate(data)
  except ValidationError as e:
    problems = "; ".join(
      f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
      for err in e.errors()
    )
    raise ConfigError(f"Invalid configuration: {problems}") from e


def _load_from_file(path: Path) -> LintConfig:
  """Load settings from a YAML file."""
  try:
    with open(path) as f:
      data = yaml.safe_load(f) or {}
  except (OSError, yaml.YAMLError) as e:
    raise ConfigError(f"Cannot load config {path}: {e}") from e

  if not isinstance(data, dict):
    raise ConfigError(f"Config {path} must be a mapping of options")

  return parse_config(data)
