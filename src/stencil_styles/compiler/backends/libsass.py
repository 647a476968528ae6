"""
LibSass Backend.

Drives the C/C++ LibSass compiler through the ``libsass`` distribution
(import name ``sass``). This is the primary backend.

Adaptation notes:
- **Imports**: registered as a two-argument importer ``(path, prev)`` at
  priority 0. LibSass reports ``prev == "stdin"`` for the top-level source,
  which is the resolver's root marker. Unresolved ``.css`` imports are handed
  back to LibSass (``None``) so they are emitted as plain CSS imports.
- **Functions**: each `ThemeFunction` becomes a `sass.SassFunction` whose
  argument list keeps its defaults, producing signatures like
  ``stencilNumber($name, $unit: px)``.
- **Values**: LibSass passes strings as `str`; results are converted to
  `sass.SassNumber`, `sass.SassColor`, `str` or `None` (null).
"""

import re
from typing import Any, Callable, List, Optional, Tuple

import sass

from stencil_styles.compiler.backend import CompilerBackend, ImportHook, RenderRequest
from stencil_styles.compiler.registry import register_backend
from stencil_styles.core import paths
from stencil_styles.core.functions import ThemeFunction
from stencil_styles.core.values import Color, Number
from stencil_styles.errors import BackendError, ImportNotFoundError

_LOCATION_RE = re.compile(r"on line (\d+)(?::(\d+))?")


def to_python(value: Any) -> Any:
  """Converts a LibSass argument to the plain value theme functions expect."""
  if isinstance(value, sass.SassNumber):
    return value.value
  if isinstance(value, sass.SassColor):
    return Color(int(value.r), int(value.g), int(value.b), float(value.a))
  return value


def to_sass(value: Any) -> Any:
  """Converts a neutral theme function result to a LibSass value."""
  if isinstance(value, Number):
    return sass.SassNumber(value.value, value.unit)
  if isinstance(value, Color):
    return sass.SassColor(value.red, value.green, value.blue, value.alpha)
  return value


def adapt_function(function: ThemeFunction) -> sass.SassFunction:
  def call(*args: Any) -> Any:
    return to_sass(function.invoke(*(to_python(arg) for arg in args)))

  return sass.SassFunction(function.name, function.params, call)


def adapt_importer(hook: ImportHook) -> Callable[[str, str], Optional[List[Tuple[str, str]]]]:
  def importer(path: str, prev: str) -> Optional[List[Tuple[str, str]]]:
    try:
      result = hook(path, paths.to_logical_path(prev))
    except ImportNotFoundError:
      if paths.is_compiled_output(path):
        return None
      raise
    return [(result.path, result.contents)]

  return importer


def error_location(message: str) -> Tuple[Optional[int], Optional[int]]:
  """Extracts ``(line, column)`` from a LibSass error message, if present."""
  match = _LOCATION_RE.search(message)
  if not match:
    return None, None
  column = int(match.group(2)) if match.group(2) else None
  return int(match.group(1)), column


@register_backend("libsass")
class LibSassBackend(CompilerBackend):
  """
  Renders with ``sass.compile(string=...)``.
  """

  def render(self, request: RenderRequest) -> str:
    try:
      return sass.compile(
        string=request.source,
        output_style=request.output_style.value,
        source_map_embed=request.source_map,
        source_map_contents=request.source_map,
        custom_functions=[adapt_function(fn) for fn in request.functions.values()],
        importers=((0, adapt_importer(request.importer)),),
      )
    except sass.CompileError as e:
      message = str(e)
      line, column = error_location(message)
      raise BackendError(self.name, message, line, column) from e
