"""Configuration management."""

from swiftstyle.config.loader import apply_overrides, load_config, parse_config
from swiftstyle.config.settings import ConfigError, LintConfig

__all__ = ["ConfigError", "LintConfig", "apply_overrides", "load_config", "parse_config"]
