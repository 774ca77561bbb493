"""Logging setup."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "swiftstyle"


def setup_logging(debug: bool = False) -> logging.Logger:
  """Route the package logger to stderr through rich.

  Safe to call more than once; the handler is only attached the first time.
  """
  logger = logging.getLogger(LOGGER_NAME)
  logger.setLevel(logging.DEBUG if debug else logging.WARNING)

  if not any(isinstance(h, RichHandler) for h in logger.handlers):
    handler = RichHandler(
      console=Console(stderr=True),
      show_time=False,
      show_path=debug,
      markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

  return logger
