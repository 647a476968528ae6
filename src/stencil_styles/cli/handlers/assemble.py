"""
Assemble Command Handler.

Implements ``stencil-styles assemble``: lists the import closure of the given
entry points, or writes the concatenated bundle.
"""

import sys
from pathlib import Path
from typing import List, Optional

from rich.markup import escape
from rich.table import Table

from stencil_styles.core.assembler import assemble
from stencil_styles.enums import AssembleMode
from stencil_styles.errors import StylesError
from stencil_styles.utils.console import console, log_error, log_success


def handle_assemble(entries: List[str], root: Path, bundle: bool, output_path: Optional[Path]) -> int:
  """
  Handles the 'assemble' command execution.

  Args:
      entries: Entry point names relative to ``root``.
      root: Stylesheet root directory.
      bundle: If True, emit the concatenated bundle instead of a listing.
      output_path: Bundle destination; stdout if None.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not root.is_dir():
    log_error(f"Stylesheet root not found: [path]{escape(str(root))}[/path]")
    return 1

  mode = AssembleMode.BUNDLE if bundle else AssembleMode.MAP
  try:
    assembly = assemble(entries, root, mode)
  except StylesError as e:
    log_error(escape(str(e)))
    return 1

  if bundle:
    if output_path is None:
      sys.stdout.write(assembly.bundle)
    else:
      output_path.parent.mkdir(parents=True, exist_ok=True)
      output_path.write_text(assembly.bundle, encoding="utf-8")
      log_success(f"Bundle written to [path]{escape(str(output_path))}[/path]")
    return 0

  table = Table(title="Stylesheet Closure")
  table.add_column("#", justify="right")
  table.add_column("Logical Path", style="cyan")
  table.add_column("Size", justify="right")
  for index, (key, content) in enumerate(assembly.files.items(), start=1):
    table.add_row(str(index), escape(key), f"{len(content)} chars")
  console.print(table)
  return 0
