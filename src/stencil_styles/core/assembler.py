"""
Dependency Closure Assembler.

Builds the in-memory file set a `CompilationSession` compiles against. Starting
from one or more entry stylesheets under a stylesheet root, it follows every
``@import`` depth-first, in statement order, reading each reachable partial
exactly once.

Key properties:
- **Root-relative keys**: every file is keyed by its logical path relative to
  the stylesheet root, not relative to the file that imported it.
- **Canonical partial names**: a partial found on disk as ``tools/_grid.scss``
  is keyed ``tools/grid.scss``, which is what ``@import "tools/grid"`` resolves
  to in the virtual importer.
- **Untouched sources**: import statements are left in place; the compiler
  backend resolves them again through the virtual importer.
- **All or nothing**: a missing or unreadable file aborts the whole call.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field
from rich.markup import escape

from stencil_styles.core import paths
from stencil_styles.enums import AssembleMode
from stencil_styles.errors import StylesheetNotFoundError, StylesheetReadError
from stencil_styles.utils.console import log_info

logger = logging.getLogger(__name__)

FileSet = Dict[str, str]

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
# Line comments only when they start a line or follow whitespace, so that
# ``url(http://...)`` survives.
_LINE_COMMENT_RE = re.compile(r"(^|\s)//[^\n]*", re.MULTILINE)
_IMPORT_RE = re.compile(r"@import\s+([^;]+)")
_IMPORT_ARG_RE = re.compile(r"""url\([^)]*\)|(['"])(.+?)\1""")
_REMOTE_PREFIXES = ("http://", "https://", "//")


class Assembly(BaseModel):
  """
  Result of assembling the closure of one or more entry points.
  """

  files: FileSet = Field(default_factory=dict, description="Logical path -> raw source, in discovery order.")
  bundle: Optional[str] = Field(
    default=None,
    description="Entry sources followed by every other file, newline separated (bundle mode only).",
  )


def find_imports(source: str) -> List[str]:
  """
  Extracts the quoted specifiers of every ``@import`` in ``source``.

  Comments are ignored, ``url(...)`` arguments and remote URLs are skipped and
  comma separated lists yield each specifier in order.

  Args:
      source (str): Stylesheet text.

  Returns:
      List[str]: Specifiers in statement order (duplicates preserved).
  """
  stripped = _BLOCK_COMMENT_RE.sub("", source)
  stripped = _LINE_COMMENT_RE.sub(r"\1", stripped)

  found = []
  for statement in _IMPORT_RE.finditer(stripped):
    for arg in _IMPORT_ARG_RE.finditer(statement.group(1)):
      specifier = arg.group(2)
      if specifier is None or specifier.startswith(_REMOTE_PREFIXES):
        continue
      found.append(specifier)
  return found


class ClosureAssembler:
  """
  Walks the import graph of a stylesheet root.

  One instance accumulates one file set; create a new instance per call.
  """

  def __init__(self, root_directory: Union[str, Path]):
    self.root = Path(root_directory)
    self.files: FileSet = {}

  def _disk_path(self, logical_path: str) -> Path:
    return self.root / logical_path.lstrip("/")

  def _locate(self, specifier: str, importing_path: str) -> Optional[Tuple[str, Path]]:
    """
    Finds the on-disk file for a specifier.

    Returns:
        Optional[Tuple[str, Path]]: ``(logical key, disk path)``, or None when
        the specifier names compiled CSS that exists (terminal import).

    Raises:
        StylesheetNotFoundError: If no candidate exists on disk.
    """
    candidates = paths.resolve(specifier, importing_path)

    if paths.is_compiled_output(specifier) and self._disk_path(candidates[0]).is_file():
      logger.debug("Leaving compiled stylesheet import '%s' to the browser", specifier)
      return None

    for candidate in candidates:
      if paths.is_compiled_output(candidate):
        continue
      disk_path = self._disk_path(candidate)
      if disk_path.is_file():
        return paths.canonical_name(candidate), disk_path

    raise StylesheetNotFoundError(candidates[0])

  def _read(self, logical_path: str, disk_path: Path) -> str:
    try:
      return disk_path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
      raise StylesheetReadError(logical_path, e) from e

  def add(self, specifier: str, importing_path: str = paths.ROOT_MARKER) -> Optional[str]:
    """
    Adds the file ``specifier`` refers to, and everything it imports.

    Args:
        specifier (str): Import specifier or entry point.
        importing_path (str): Logical path of the importing file.

    Returns:
        Optional[str]: Logical key of the file, or None for a terminal import.
    """
    located = self._locate(specifier, importing_path)
    if located is None:
      return None

    key, disk_path = located
    if key in self.files:
      return key

    content = self._read(key, disk_path)
    self.files[key] = content
    logger.debug("Assembled %s", key)

    for child in find_imports(content):
      self.add(child, key)

    return key


def assemble(
  entry_points: Union[str, Sequence[str]],
  root_directory: Union[str, Path],
  mode: Union[AssembleMode, str] = AssembleMode.MAP,
) -> Assembly:
  """
  Collects the transitive ``@import`` closure of the entry stylesheet(s).

  Args:
      entry_points: One logical path or a sequence of them, relative to the root.
      root_directory: The stylesheet root on disk.
      mode: ``"map"`` for the file set only, ``"bundle"`` to also concatenate it.

  Returns:
      Assembly: The file set, plus the bundle string in bundle mode.

  Raises:
      StylesheetNotFoundError: If an entry point or an import is missing.
      StylesheetReadError: If a file cannot be read or decoded.
  """
  mode = AssembleMode(mode)
  if isinstance(entry_points, str):
    entry_points = [entry_points]

  assembler = ClosureAssembler(root_directory)
  entry_keys = []
  for entry in entry_points:
    key = assembler.add(paths.to_logical_path(entry))
    if key is not None and key not in entry_keys:
      entry_keys.append(key)

  log_info(f"Assembled {len(assembler.files)} stylesheet(s) from [path]{escape(str(root_directory))}[/path]")

  assembly = Assembly(files=assembler.files)
  if mode is AssembleMode.BUNDLE:
    ordered = entry_keys + [key for key in assembler.files if key not in entry_keys]
    assembly.bundle = "\n".join(assembler.files[key] for key in ordered)
  return assembly


def assemble_files(
  entry_points: Union[str, Sequence[str]],
  root_directory: Union[str, Path],
) -> FileSet:
  """Shortcut for ``assemble(...).files`` in map mode."""
  return assemble(entry_points, root_directory, AssembleMode.MAP).files
