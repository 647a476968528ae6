"""
pyScss Backend.

Pure Python fallback compiler built on the ``pyScss`` distribution (import name
``scss``).

Adaptation notes:
- **Imports**: a `scss.extension.Extension` placed ahead of the core extension
  answers ``handle_import`` from the virtual importer, so the core extension
  never reaches the disk for anything in the file set.
- **Functions**: pyScss registers functions per arity; a function with
  defaulted parameters is registered once for every accepted arity.
- **Values**: arguments arrive as pyScss types and are unwrapped through
  ``.value``; results become `Number`, `Color`, unquoted `String` or `Null`.

Limitation: pyScss 1.4 without its compiled speedups falls back to a pure
Python expression scanner whose patterns use inline global flags, which
``re`` rejects on Python 3.11+ ("global flags not at the start of the
expression"). On such installs renders that evaluate property expressions
or function calls fail with `BackendError`.
"""

from pathlib import PurePosixPath
from typing import Any, Dict

from scss.compiler import Compiler
from scss.extension import Extension
from scss.extension.core import CoreExtension
from scss.namespace import Namespace
from scss.source import SourceFile
from scss.types import Color as ScssColor
from scss.types import Null, String
from scss.types import Number as ScssNumber

from stencil_styles.compiler.backend import CompilerBackend, ImportHook, RenderRequest
from stencil_styles.compiler.registry import register_backend
from stencil_styles.core import paths
from stencil_styles.core.functions import ThemeFunction
from stencil_styles.core.values import Color, Number
from stencil_styles.errors import BackendError, ImportNotFoundError


def to_python(value: Any) -> Any:
  if isinstance(value, Null):
    return None
  return getattr(value, "value", value)


def to_scss(value: Any) -> Any:
  if value is None:
    return Null()
  if isinstance(value, Number):
    return ScssNumber(value.value, unit=value.unit or None)
  if isinstance(value, Color):
    return ScssColor.from_rgb(value.red / 255.0, value.green / 255.0, value.blue / 255.0, value.alpha)
  if isinstance(value, str):
    return String.unquoted(value)
  return value


def adapt_function(function: ThemeFunction):
  def call(*args: Any) -> Any:
    return to_scss(function.invoke(*(to_python(arg) for arg in args)))

  return call


def build_namespace(functions: Dict[str, ThemeFunction]) -> Namespace:
  """Registers every theme function under each arity it accepts."""
  namespace = Namespace()
  for function in functions.values():
    call = adapt_function(function)
    for arity in range(function.required_arity, function.arity + 1):
      namespace.set_function(function.name, arity, call)
  return namespace


def importing_path(rule: Any) -> str:
  """Logical path of the file holding ``rule``; the root marker for the top-level string."""
  source_file = getattr(rule, "source_file", None)
  relpath = getattr(source_file, "relpath", None)
  if isinstance(relpath, PurePosixPath) and not str(relpath).startswith("string:"):
    return str(relpath)
  return paths.ROOT_MARKER


class VirtualImportExtension(Extension):
  """
  Serves ``@import`` from the session's virtual importer.
  """

  name = "stencil_virtual_import"

  def __init__(self, hook: ImportHook, namespace: Namespace):
    self.hook = hook
    self.namespace = namespace

  def handle_import(self, name, compilation, rule):
    try:
      result = self.hook(str(name), importing_path(rule))
    except ImportNotFoundError:
      if paths.is_compiled_output(str(name)):
        return None
      raise
    return SourceFile.from_string(result.contents, relpath=PurePosixPath(result.path), is_sass=False)


@register_backend("pyscss")
class PyScssBackend(CompilerBackend):
  """
  Renders with `scss.compiler.Compiler.compile_string`.

  Source maps are not supported by pyScss; the flag is ignored.
  """

  def render(self, request: RenderRequest) -> str:
    extension = VirtualImportExtension(request.importer, build_namespace(request.functions))
    compiler = Compiler(
      extensions=[extension, CoreExtension],
      output_style=request.output_style.value,
    )
    try:
      return compiler.compile_string(request.source)
    except Exception as e:
      raise BackendError(self.name, str(e)) from e
