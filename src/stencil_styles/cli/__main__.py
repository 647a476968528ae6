"""
Main Entry Point for stencil-styles CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `stencil_styles.cli.handlers`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from stencil_styles import __version__
from stencil_styles.cli import handlers
from stencil_styles.compiler import available_backends
from stencil_styles.config import parse_cli_key_values
from stencil_styles.enums import OutputStyle
from stencil_styles.utils.console import set_verbosity


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="stencil-styles: Theme stylesheet compiler")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: COMPILE ---
  cmd_comp = subparsers.add_parser("compile", help="Compile entry stylesheets to CSS")
  cmd_comp.add_argument("entries", nargs="+", help="Entry points relative to --root (e.g. theme)")
  cmd_comp.add_argument("--root", type=Path, required=True, help="Stylesheet root directory")
  cmd_comp.add_argument("--settings", type=Path, default=None, help="Theme settings JSON file")
  cmd_comp.add_argument(
    "--setting",
    nargs="*",
    help="Theme setting overrides in key=value format (e.g. color-primary=#fff)",
  )
  cmd_comp.add_argument("--out", type=Path, default=None, help="Output .css file or directory (default: stdout)")
  cmd_comp.add_argument("--source-map", action="store_true", default=None, help="Embed a source map")
  cmd_comp.add_argument(
    "--no-autoprefix",
    dest="autoprefix",
    action="store_false",
    default=None,
    help="Skip vendor prefixing (Overrides config)",
  )
  cmd_comp.add_argument("--primary", default=None, help=f"Primary backend {available_backends()}")
  cmd_comp.add_argument("--fallback", default=None, help="Fallback backend, or 'none' to disable")
  cmd_comp.add_argument(
    "--style",
    default=None,
    choices=[style.value for style in OutputStyle],
    help="CSS output style (default: from toml, else nested)",
  )

  # --- Command: ASSEMBLE ---
  cmd_asm = subparsers.add_parser("assemble", help="List or bundle the import closure of entry stylesheets")
  cmd_asm.add_argument("entries", nargs="+", help="Entry points relative to --root")
  cmd_asm.add_argument("--root", type=Path, required=True, help="Stylesheet root directory")
  cmd_asm.add_argument("--bundle", action="store_true", help="Concatenate the closure instead of listing it")
  cmd_asm.add_argument("--out", type=Path, default=None, help="Bundle output file (default: stdout)")

  # --- Command: SCAN ---
  cmd_scan = subparsers.add_parser("scan", help="List stylesheet entry points linked from theme templates")
  cmd_scan.add_argument("theme", type=Path, help="Theme root directory")

  args = parser.parse_args(argv)
  set_verbosity(args.verbose)

  if args.command == "compile":
    overrides = parse_cli_key_values(args.setting)
    return handlers.handle_compile(
      args.entries,
      args.root,
      args.out,
      args.settings,
      overrides,
      args.source_map,
      args.autoprefix,
      args.primary,
      args.fallback,
      args.style,
    )

  elif args.command == "assemble":
    return handlers.handle_assemble(args.entries, args.root, args.bundle, args.out)

  elif args.command == "scan":
    return handlers.handle_scan(args.theme)

  return 0


if __name__ == "__main__":
  sys.exit(main())
