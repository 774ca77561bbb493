"""Style guide checker for Swift source files."""

__version__ = "0.1.0"
