"""Source file discovery and reading."""

import glob as globmod
from pathlib import Path

SWIFT_EXTENSION = "swift"


class FileError(Exception):
  """File operation failed."""


# Build output and dependency checkouts never hold first-party sources
_DEFAULT_EXCLUDES: set[str] = {
  ".build",
  ".git",
  ".swiftpm",
  "Carthage",
  "DerivedData",
  "Pods",
  "build",
}


def resolve_sources(
  patterns: list[str],
  cwd: Path | None = None,
  no_ignore: bool = False,
) -> list[Path]:
  """Expand files, directories and glob patterns into Swift source paths.

  Order follows the input patterns; duplicates are dropped.

  Raises:
    FileError: If nothing matches.
  """
  base_path = cwd or Path.cwd()
  expanded = _expand_directories(patterns, base_path)

  seen: set[Path] = set()
  result: list[Path] = []
  for pattern in expanded:
    for path in _expand_pattern(pattern, base_path):
      if path in seen:
        continue
      seen.add(path)
      result.append(path)

  if not no_ignore:
    result = [p for p in result if not _is_excluded(p, base_path)]

  if not result:
    raise FileError(_no_files_error(patterns, base_path))
  return result


def read_source(path: Path) -> str:
  """Read a source file as UTF-8 text.

  Raises:
    FileError: If the file is missing, unreadable or not valid UTF-8.
  """
  try:
    return path.read_text(encoding="utf-8")
  except (OSError, UnicodeDecodeError) as e:
    raise FileError(f"Cannot read {path}: {e}") from e


def display_path(path: Path, base_path: Path | None = None) -> str:
  """Path relative to base_path when possible."""
  base = base_path or Path.cwd()
  try:
    return str(path.relative_to(base))
  except ValueError:
    return str(path)


def _expand_directories(patterns: list[str], base_path: Path) -> list[str]:
  """Turn directory arguments into recursive Swift globs."""
  result: list[str] = []
  for pattern in patterns:
    p = Path(pattern)
    full_path = p if p.is_absolute() else base_path / p
    if full_path.is_dir():
      result.append(str(full_path / "**" / f"*.{SWIFT_EXTENSION}"))
    else:
      result.append(pattern)
  return result


def _expand_pattern(pattern: str, base_path: Path) -> list[Path]:
  """Expand a single pattern to matching paths.

  Plain paths are returned even if they don't exist so that the read
  fails and gets reported for that file.
  """
  p = Path(pattern)
  glob_path = p if p.is_absolute() else base_path / p

  if any(c in pattern for c in "*?["):
    matches = sorted(globmod.glob(str(glob_path), recursive=True))
    return [Path(m) for m in matches if Path(m).is_file()]
  return [glob_path]


def _is_excluded(path: Path, base_path: Path) -> bool:
  try:
    parts = path.relative_to(base_path).parts
  except ValueError:
    parts = path.parts
  return bool(set(parts[:-1]) & _DEFAULT_EXCLUDES)


def _no_files_error(patterns: list[str], base_path: Path) -> str:
  """Generate a helpful error message when no files are found."""
  dirs = [p for p in patterns if (base_path / p).is_dir() or Path(p).is_dir()]

  if dirs:
    return (
      f"No Swift files found in: {', '.join(dirs)}\n"
      "Try specifying files directly:\n"
      f"  swiftstyle '{dirs[0]}/**/*.swift'"
    )

  return (
    f"No files matched: {', '.join(patterns) or '(none given)'}\n"
    "Use paths or glob patterns like: swiftstyle 'Sources/**/*.swift'"
  )
