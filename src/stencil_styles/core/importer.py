"""
Virtual Importer.

The import hook handed to every compiler backend. It answers each ``@import``
from the in-memory file set of the current session; the disk is never touched.

When a direct lookup fails, it falls back on the alias cache: a partial reached
through more than one relative route may contain imports written relative to
the route it was *first* imported through. Every file previously resolved from
a specifier related to the importing path is tried as an alternative base
directory. The first match in cache insertion order wins; the heuristic does
not try to rank competing matches.
"""

import logging
from typing import Dict, List, NamedTuple, Optional

from stencil_styles.core import paths
from stencil_styles.errors import ImportNotFoundError

logger = logging.getLogger(__name__)

AliasCache = Dict[str, List[str]]


class ImportResult(NamedTuple):
  """A resolved import: the logical path and the file's contents."""

  path: str
  contents: str


class VirtualImporter:
  """
  Resolves imports against a file set, recording the aliases it sees.

  Attributes:
      files (Dict[str, str]): Logical path -> source. Read only.
      aliases (AliasCache): Logical path -> specifiers that resolved to it.
  """

  def __init__(self, files: Dict[str, str], aliases: Optional[AliasCache] = None):
    self.files = files
    self.aliases: AliasCache = aliases if aliases is not None else {}

  def _first_present(self, candidates: List[str]) -> Optional[str]:
    for candidate in candidates:
      if candidate in self.files:
        return candidate
    return None

  def _related(self, alias: str, importing_path: str) -> bool:
    return alias in importing_path or importing_path in alias

  def _resolve_via_aliases(self, specifier: str, importing_path: str) -> Optional[str]:
    for known_path, specifiers in self.aliases.items():
      if not any(self._related(alias, importing_path) for alias in specifiers):
        continue
      candidates = paths.candidates_in(paths.base_directory(known_path), specifier)
      found = self._first_present(candidates)
      if found is not None:
        logger.debug("Resolved '%s' from %s via alias of %s", specifier, importing_path, known_path)
        return found
    return None

  def _register_alias(self, resolved_path: str, specifier: str) -> None:
    known = self.aliases.setdefault(resolved_path, [])
    if specifier not in known:
      known.append(specifier)

  def resolve_import(self, specifier: str, importing_path: str) -> ImportResult:
    """
    Resolves one import.

    Args:
        specifier (str): The ``@import`` argument as written.
        importing_path (str): Logical path of the importing file, or
            `paths.ROOT_MARKER` for the top-level source.

    Returns:
        ImportResult: The resolved logical path and its contents.

    Raises:
        ImportNotFoundError: If nothing in the file set matches. Carries the
            first resolved path that was attempted.
    """
    candidates = paths.resolve(specifier, importing_path)
    found = self._first_present(candidates)

    if found is None:
      found = self._resolve_via_aliases(specifier, importing_path)

    if found is None:
      attempted = candidates[0]
      if not paths.has_stylesheet_extension(attempted):
        attempted += paths.SOURCE_EXTENSION
      raise ImportNotFoundError(attempted)

    self._register_alias(found, specifier)
    return ImportResult(found, self.files[found])

  __call__ = resolve_import
