"""Core lint orchestration."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from swiftstyle.config import LintConfig, apply_overrides, load_config
from swiftstyle.models import LintResult, Report
from swiftstyle.rules import RuleEngine, generate_summary
from swiftstyle.scan import FileError, ScanError, display_path, read_source, resolve_sources

logger = logging.getLogger("swiftstyle")

MAX_DEFAULT_WORKERS = 8


class LintOrchestrator:
  """Runs the scan, rule and report pipeline over a batch of files.

  Each file is independent, so files are checked in parallel worker
  threads sharing one read-only engine. Reports always come back in
  input order.
  """

  def __init__(self, config: LintConfig | None = None):
    """Build the engine up front so config problems surface before any file is read.

    Raises:
      ConfigError: If config disables an unknown rule.
    """
    self.config = config or LintConfig()
    self.engine = RuleEngine(self.config)

  def lint_files(
    self,
    patterns: list[str],
    cwd: Path | None = None,
    no_ignore: bool = False,
  ) -> LintResult:
    """Lint files, directories and glob patterns.

    Raises:
      FileError: If no files match.
    """
    base_path = cwd or Path.cwd()
    paths = resolve_sources(patterns, base_path, no_ignore=no_ignore)
    return self.lint_paths(paths, base_path)

  def lint_paths(self, paths: list[Path], base_path: Path | None = None) -> LintResult:
    """Lint resolved paths. Unreadable or unscannable files are reported, not raised."""
    base = base_path or Path.cwd()
    workers = self._worker_count(len(paths))
    logger.debug("Linting %d file(s) with %d worker(s)", len(paths), workers)

    if workers <= 1:
      reports = [self._lint_path(p, base) for p in paths]
    else:
      with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="lint") as pool:
        reports = list(pool.map(lambda p: self._lint_path(p, base), paths))

    return self._result(reports)

  def lint_text(self, text: str, path: str = "<input>") -> LintResult:
    """Lint in-memory source."""
    return self._result([self._lint_source(path, text)])

  def _lint_path(self, path: Path, base_path: Path) -> Report:
    shown = display_path(path, base_path)
    try:
      text = read_source(path)
    except FileError as e:
      logger.warning("Skipping %s: %s", shown, e)
      return Report(path=shown, error=f"io-error: {e}")
    return self._lint_source(shown, text)

  def _lint_source(self, path: str, text: str) -> Report:
    try:
      report = self.engine.check(path, text)
    except ScanError as e:
      logger.warning("Cannot scan %s: %s", path, e)
      return Report(path=path, error=f"scan-error: {e}")
    logger.debug("Checked %s: %d violation(s)", path, len(report.violations))
    return report

  def _result(self, reports: list[Report]) -> LintResult:
    return LintResult(
      reports=reports,
      summary=generate_summary(reports),
      warnings_fail_build=self.config.warnings_fail_build,
    )

  def _worker_count(self, file_count: int) -> int:
    if self.config.jobs is not None:
      size = self.config.jobs
    else:
      size = min(MAX_DEFAULT_WORKERS, os.cpu_count() or 1)
    return max(1, min(size, file_count))


def run_lint(
  files: list[str],
  config_path: Path | None = None,
  indent_width: int | None = None,
  max_line_length: int | None = None,
  nesting_depth_limit: int | None = None,
  disabled_rules: list[str] | None = None,
  warnings_fail_build: bool | None = None,
  jobs: int | None = None,
  no_ignore: bool = False,
  cwd: Path | None = None,
) -> LintResult:
  """Run a lint with the given options.

  Options left as None fall back to the config file, then to defaults.
  Disabled rules from the command line add to the config file's list.

  Raises:
    ConfigError: If the resulting configuration is invalid.
    FileError: If no files match.
  """
  config = load_config(config_path)
  config = apply_overrides(
    config,
    indent_width=indent_width,
    max_line_length=max_line_length,
    nesting_depth_limit=nesting_depth_limit,
    disabled_rules=[*config.disabled_rules, *disabled_rules] if disabled_rules else None,
    warnings_fail_build=warnings_fail_build,
    jobs=jobs,
  )

  orchestrator = LintOrchestrator(config)
  return orchestrator.lint_files(files, cwd=cwd, no_ignore=no_ignore)
