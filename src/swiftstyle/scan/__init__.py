"""Source scanning and file discovery."""

from swiftstyle.scan.files import FileError, display_path, read_source, resolve_sources
from swiftstyle.scan.scanner import ScanError, continuation_lines, scan, split_lines

__all__ = [
  "FileError",
  "ScanError",
  "continuation_lines",
  "display_path",
  "read_source",
  "resolve_sources",
  "scan",
  "split_lines",
]
