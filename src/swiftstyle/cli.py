"""CLI interface using Typer."""

import os
import traceback
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from swiftstyle import __version__
from swiftstyle.config import ConfigError
from swiftstyle.log import setup_logging
from swiftstyle.lint import run_lint
from swiftstyle.output import FORMATS, get_formatter
from swiftstyle.rules import RuleRegistry, get_all_rules
from swiftstyle.scan import FileError

app = typer.Typer(
  name="swiftstyle",
  help="Check Swift sources against the house style guide",
  no_args_is_help=False,
)

console = Console()

EXIT_USAGE = 2


def _is_debug() -> bool:
  return os.environ.get("SWIFTSTYLE_DEBUG", "").lower() in ("1", "true", "yes")


def version_callback(value: bool) -> None:
  if value:
    console.print(f"swiftstyle {__version__}")
    raise typer.Exit()


@app.command()
def main(
  files: Optional[list[str]] = typer.Argument(
    None,
    help="Files, directories or glob patterns to check (default: current directory)",
  ),
  config: Path = typer.Option(None, "--config", "-c", help="Config file path"),
  format_type: str = typer.Option(
    "text", "--format", help=f"Output format: {', '.join(FORMATS)}"
  ),
  indent_width: int = typer.Option(None, "--indent-width", help="Spaces per indentation level"),
  max_line_length: int = typer.Option(None, "--max-line-length", help="Column limit"),
  nesting_depth: int = typer.Option(
    None, "--nesting-depth", help="Maximum conditional nesting inside a function"
  ),
  disable: Optional[list[str]] = typer.Option(
    None, "--disable", help="Rule id or name to disable (repeatable, comma-separated)"
  ),
  warnings_as_errors: bool = typer.Option(
    False, "--warnings-as-errors", help="Fail the run on warnings too"
  ),
  jobs: int = typer.Option(None, "--jobs", "-j", help="Parallel workers"),
  no_ignore: bool = typer.Option(
    False, "--no-ignore", help="Also check build and dependency directories"
  ),
  show_rules: bool = typer.Option(False, "--list-rules", help="List available rules and exit"),
  debug: bool = typer.Option(False, "--debug", "-d", help="Verbose logging and full tracebacks"),
  version: bool = typer.Option(None, "--version", "-v", callback=version_callback, is_eager=True),
) -> None:
  """Check Swift source files for style guide violations.

  Exits 0 when no file fails, 1 when a file has errors (or warnings with
  --warnings-as-errors) or cannot be checked, and 2 on bad configuration.
  """
  show_traceback = debug or _is_debug()
  setup_logging(show_traceback)

  if show_rules:
    _print_rules()
    return

  try:
    formatter = get_formatter(format_type)
    result = run_lint(
      files=files or ["."],
      config_path=config,
      indent_width=indent_width,
      max_line_length=max_line_length,
      nesting_depth_limit=nesting_depth,
      disabled_rules=_parse_rule_list(disable),
      warnings_fail_build=True if warnings_as_errors else None,
      jobs=jobs,
      no_ignore=no_ignore,
    )
  except (ConfigError, FileError, ValueError) as e:
    console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
    raise typer.Exit(EXIT_USAGE) from None
  except Exception as e:
    console.print(f"[red]Error:[/red] {escape(str(e))}")
    if show_traceback:
      console.print("\n[dim]Traceback:[/dim]")
      console.print(traceback.format_exc(), markup=False)
    raise typer.Exit(1) from None

  output = formatter.format(result)
  if output:
    console.print(output, markup=False, highlight=False, emoji=False, soft_wrap=True)

  raise typer.Exit(result.exit_code)


def _parse_rule_list(values: list[str] | None) -> list[str]:
  """Flatten repeated and comma-separated rule options."""
  rules: list[str] = []
  for value in values or []:
    rules.extend(part.strip() for part in value.split(",") if part.strip())
  return rules


def _print_rules() -> None:
  RuleRegistry.load_all()
  table = Table(show_header=True, header_style="bold")
  table.add_column("Rule", no_wrap=True)
  table.add_column("Name", no_wrap=True)
  table.add_column("Severity")
  table.add_column("Description")
  for rule in sorted(get_all_rules(), key=lambda r: r.id):
    table.add_row(rule.id, rule.name, rule.severity.value, rule.description)
  console.print(table)


if __name__ == "__main__":
  app()
