"""
Compile Command Handler.

Implements ``stencil-styles compile``. For each entry point it:
1. Assembles the import closure below the stylesheet root.
2. Compiles it in a fresh session (primary backend, then fallback).
3. Vendor-prefixes the CSS when enabled.
4. Writes the result to ``--out`` or standard output.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.markup import escape

from stencil_styles import compile_css
from stencil_styles.config import StylesConfig
from stencil_styles.core import paths
from stencil_styles.core.assembler import assemble
from stencil_styles.core.session import CompileOptions
from stencil_styles.core.settings import set_setting
from stencil_styles.errors import StylesError
from stencil_styles.utils.console import log_error, log_info, log_success


def load_theme_settings(settings_path: Optional[Path], overrides: Dict[str, Any]) -> Dict[str, Any]:
  """
  Reads a JSON settings file and applies ``--setting`` overrides.

  Dotted override keys are stored as nested settings.

  Args:
      settings_path: JSON file holding theme settings, or None.
      overrides: Parsed ``key=value`` pairs.

  Returns:
      Dict[str, Any]: Theme settings.

  Raises:
      ValueError: If the file is not a JSON object.
  """
  settings: Dict[str, Any] = {}
  if settings_path:
    with open(settings_path, "rt", encoding="utf-8") as f:
      loaded = json.load(f)
    if not isinstance(loaded, dict):
      raise ValueError(f"Theme settings must be a JSON object: {settings_path}")
    settings.update(loaded)

  for key, value in overrides.items():
    set_setting(settings, key, value)
  return settings


def entry_import(entry_key: str) -> str:
  """Top-level source importing `entry_key` by its extensionless logical path."""
  stem = entry_key[: -len(paths.SOURCE_EXTENSION)] if entry_key.endswith(paths.SOURCE_EXTENSION) else entry_key
  return f'@import "{stem}";\n'


def _output_path(out: Path, entry_key: str, many: bool) -> Path:
  if not many and out.suffix == paths.COMPILED_EXTENSION:
    return out
  name = Path(entry_key).with_suffix(paths.COMPILED_EXTENSION)
  return out / name


def handle_compile(
  entries: List[str],
  root: Path,
  output_path: Optional[Path],
  settings_path: Optional[Path],
  setting_overrides: Dict[str, Any],
  source_map: Optional[bool],
  autoprefix: Optional[bool],
  primary: Optional[str],
  fallback: Optional[str],
  style: Optional[str],
) -> int:
  """
  Handles the 'compile' command execution.

  Args:
      entries: Entry point names relative to ``root``.
      root: Stylesheet root directory.
      output_path: A ``.css`` file (single entry) or a directory; stdout if None.
      settings_path: Optional JSON theme settings file.
      setting_overrides: ``--setting`` values.
      source_map: Override for source map embedding.
      autoprefix: Override for vendor prefixing.
      primary: Override for the primary backend.
      fallback: Override for the fallback backend (``"none"`` disables it).
      style: Override for the output style.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not root.is_dir():
    log_error(f"Stylesheet root not found: [path]{escape(str(root))}[/path]")
    return 1

  try:
    config = StylesConfig.load(
      primary_backend=primary,
      fallback_backend=fallback,
      output_style=style,
      source_map=source_map,
      autoprefix=autoprefix,
      search_path=root,
    )
    theme_settings = load_theme_settings(settings_path, setting_overrides)
  except (ValueError, OSError) as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  many = len(entries) > 1
  for entry in entries:
    try:
      assembly = assemble(entry, root)
      if not assembly.files:
        log_error(f"Nothing to compile for [path]{escape(entry)}[/path]")
        return 1
      entry_key = next(iter(assembly.files))
      # Reached through the importer so its imports resolve from its own directory.
      options = CompileOptions(
        data=entry_import(entry_key),
        files=assembly.files,
        theme_settings=theme_settings,
        source_map=config.source_map,
        dest=str(output_path) if output_path else None,
      )
      css = compile_css(options, config)
    except StylesError as e:
      log_error(f"Failed to compile [path]{escape(entry)}[/path]: {escape(str(e))}")
      return 1

    if output_path is None:
      sys.stdout.write(css)
      continue

    target = _output_path(output_path, entry_key, many)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(css, encoding="utf-8")
    log_success(f"Compiled [path]{escape(entry)}[/path] -> [path]{escape(str(target))}[/path]")

  log_info(f"Compiled {len(entries)} stylesheet(s).")
  return 0
