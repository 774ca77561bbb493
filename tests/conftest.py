"""Pytest fixtures."""

from pathlib import Path

import pytest
from swiftstyle.config import LintConfig
from swiftstyle.models import LintResult, Report, Severity, Violation
from swiftstyle.rules import RuleRegistry

RuleRegistry.load_all()

CLEAN_SOURCE = """\
import UIKit

final class CircleViewController: UIViewController {
  private let maximumWidth: CGFloat = 106.5
  private var titleLabel: UILabel?

  override func viewDidLoad() {
    super.viewDidLoad()
    guard let titleLabel = titleLabel else {
      return
    }
    titleLabel.text = "Circle!"
  }

  private func computeArea(radius: Double) -> Double {
    if radius > maximumWidth {
      return 0
    }
    return Double.pi * radius * radius
  }
}

// MARK: - UITableViewDataSource
extension CircleViewController: UITableViewDataSource {
  func tableView(_ tableView: UITableView, numberOfRowsInSection section: Int) -> Int {
    return 1
  }
}
"""


@pytest.fixture
def config() -> LintConfig:
  return LintConfig()


@pytest.fixture
def clean_source() -> str:
  return CLEAN_SOURCE


@pytest.fixture
def swift_project(tmp_path: Path) -> Path:
  """A small project with one clean file and one file with a force unwrap."""
  sources = tmp_path / "Sources"
  sources.mkdir()
  (sources / "Circle.swift").write_text(CLEAN_SOURCE)
  (sources / "Profile.swift").write_text(
    "final class Profile {\n"
    "  private func load() {\n"
    "    let name = user.name!\n"
    "  }\n"
    "}\n"
  )
  return tmp_path


@pytest.fixture
def sample_lint_result() -> LintResult:
  return LintResult(
    reports=[
      Report(
        path="Sources/Profile.swift",
        violations=(
          Violation(
            rule_id="ForceUnwrapRule",
            line=3,
            column=25,
            message="Force unwrap of 'name'",
            severity=Severity.ERROR,
          ),
          Violation(
            rule_id="LineLengthRule",
            line=7,
            column=None,
            message="Line exceeds 100 characters (120)",
            severity=Severity.WARNING,
          ),
        ),
      ),
      Report(
        path="Sources/Broken.swift",
        error="scan-error: line 2, column 9: unterminated string literal",
      ),
    ],
    summary="Checked 2 files, found 2 issues (1 error, 1 warning); 1 file could not be checked.",
  )


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
  """Run the test from inside tmp_path."""
  monkeypatch.chdir(tmp_path)
  return tmp_path
