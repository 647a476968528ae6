"""
Sass Import Path Resolution.

Maps an ``@import`` specifier and the path of the importing stylesheet to the
ordered list of logical paths it may refer to. The functions here are pure:
they never look at the disk or at a file set, callers pick the first candidate
that exists in whatever store they are resolving against.

Logical paths always use POSIX separators, whatever the host OS.
"""

import posixpath
from typing import List

# Importing path reported by the backends for the top-level source text.
ROOT_MARKER = "stdin"

SOURCE_EXTENSION = ".scss"
COMPILED_EXTENSION = ".css"
STYLESHEET_EXTENSIONS = (SOURCE_EXTENSION, COMPILED_EXTENSION)

PARTIAL_PREFIX = "_"


def to_logical_path(path: str) -> str:
  """
  Normalises a path to the logical (POSIX) form used as a file-set key.

  Args:
      path (str): A path using OS or POSIX separators.

  Returns:
      str: The path with ``\\`` replaced by ``/``.
  """
  return path.replace("\\", "/")


def join_logical(base: str, specifier: str) -> str:
  """
  Joins ``specifier`` onto directory ``base``.

  Unlike `posixpath.join`, a leading ``/`` on the specifier does not discard
  the base: ``join_logical("/mock", "/path2.scss") == "/mock/path2.scss"``.

  Args:
      base (str): Directory part, possibly empty.
      specifier (str): Import specifier, possibly starting with ``/``.

  Returns:
      str: Normalised joined path.
  """
  specifier = to_logical_path(specifier)
  if not base:
    return posixpath.normpath(specifier)
  return posixpath.normpath(f"{to_logical_path(base)}/{specifier}")


def base_directory(importing_path: str) -> str:
  """
  Returns the directory imports inside ``importing_path`` are relative to.

  Args:
      importing_path (str): Logical path of the importing file, or `ROOT_MARKER`.

  Returns:
      str: The directory part ("" for the root marker or a root-level file).
  """
  if importing_path == ROOT_MARKER:
    return ""
  return posixpath.dirname(to_logical_path(importing_path))


def has_stylesheet_extension(specifier: str) -> bool:
  return specifier.endswith(STYLESHEET_EXTENSIONS)


def is_compiled_output(specifier: str) -> bool:
  """
  True when the specifier names generated CSS rather than Sass source.

  Such an import is terminal when the file exists: it is left to the browser
  instead of being pulled into the stylesheet graph.
  """
  return specifier.endswith(COMPILED_EXTENSION)


def _sibling(path: str) -> str:
  if path.endswith(SOURCE_EXTENSION):
    return path[: -len(SOURCE_EXTENSION)] + COMPILED_EXTENSION
  return path[: -len(COMPILED_EXTENSION)] + SOURCE_EXTENSION


def _partial(path: str) -> str:
  head, tail = posixpath.split(path)
  if tail.startswith(PARTIAL_PREFIX):
    return path
  return posixpath.join(head, PARTIAL_PREFIX + tail) if head else PARTIAL_PREFIX + tail


def candidates_in(directory: str, specifier: str) -> List[str]:
  """
  Candidate logical paths for ``specifier`` inside ``directory``.

  Priority order:
      1. the specifier exactly as given;
      2. with the ``.scss`` extension appended, unless it already has one;
      3. the ``_``-prefixed partial of (2);
      4. the ``.css``/``.scss`` sibling when the specifier carries an extension;
      5. the canonical (un-prefixed) name of each of the above.

  Args:
      directory (str): Directory the specifier is relative to.
      specifier (str): The raw import specifier.

  Returns:
      List[str]: De-duplicated candidates, highest priority first.
  """
  exact = join_logical(directory, specifier)
  ordered = [exact]

  if has_stylesheet_extension(exact):
    ordered.append(_partial(exact))
    ordered.append(_sibling(exact))
    ordered.append(_partial(_sibling(exact)))
  else:
    with_ext = exact + SOURCE_EXTENSION
    ordered.append(with_ext)
    ordered.append(_partial(with_ext))

  # The assembler keys partials by their un-prefixed name.
  ordered.extend([canonical_name(path) for path in ordered])

  return list(dict.fromkeys(ordered))


def resolve(specifier: str, importing_path: str) -> List[str]:
  """
  Resolves an import specifier against the importing file's location.

  Args:
      specifier (str): The quoted argument of an ``@import``.
      importing_path (str): Logical path of the importing file, or `ROOT_MARKER`
          when importing from the top-level source.

  Returns:
      List[str]: Ordered candidate logical paths; the first one present in the
      caller's store wins.
  """
  return candidates_in(base_directory(importing_path), specifier)


def canonical_name(path: str) -> str:
  """
  Strips the partial prefix from the file name of ``path``.

  ``tools/_onemore.scss`` -> ``tools/onemore.scss``.
  """
  head, tail = posixpath.split(path)
  if not tail.startswith(PARTIAL_PREFIX):
    return path
  tail = tail[len(PARTIAL_PREFIX) :]
  return posixpath.join(head, tail) if head else tail
