"""
Scan Command Handler.

Implements ``stencil-styles scan``: prints the stylesheet entry points linked
from a theme's templates, one per line.
"""

from pathlib import Path

from rich.markup import escape

from stencil_styles.discovery.templates import TEMPLATES_DIR, StylesheetTemplateScanner
from stencil_styles.utils.console import log_error, log_info


def handle_scan(theme_path: Path) -> int:
  """
  Handles the 'scan' command execution.

  Args:
      theme_path: Theme root holding ``templates/``.

  Returns:
      int: Exit code (0 for success, 1 if the theme has no templates).
  """
  if not (theme_path / TEMPLATES_DIR).is_dir():
    log_error(f"No templates directory in [path]{escape(str(theme_path))}[/path]")
    return 1

  entries = StylesheetTemplateScanner(theme_path).scan()
  for entry in entries:
    print(entry)
  log_info(f"Found {len(entries)} stylesheet entry point(s).")
  return 0
