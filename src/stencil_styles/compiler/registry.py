"""
Compiler Backend Registry.

Maps backend names (as used in configuration and on the command line) to
`CompilerBackend` classes. Concrete bindings register themselves with the
`register_backend` decorator when `stencil_styles.compiler.backends` is
imported.
"""

from typing import Dict, List, Type

from stencil_styles.compiler.backend import CompilerBackend
from stencil_styles.errors import UnknownBackendError

_BACKEND_REGISTRY: Dict[str, Type[CompilerBackend]] = {}


def register_backend(name: str):
  """
  Class decorator registering a backend under ``name``.

  Args:
      name (str): Registry key, also stored on the class as ``name``.
  """

  def wrapper(cls: Type[CompilerBackend]) -> Type[CompilerBackend]:
    cls.name = name
    _BACKEND_REGISTRY[name] = cls
    return cls

  return wrapper


def available_backends() -> List[str]:
  """Returns the registered backend names, sorted."""
  return sorted(_BACKEND_REGISTRY)


def get_backend_class(name: str) -> Type[CompilerBackend]:
  """
  Looks up a backend class.

  Raises:
      UnknownBackendError: If nothing is registered under ``name``.
  """
  try:
    return _BACKEND_REGISTRY[name]
  except KeyError:
    raise UnknownBackendError(name, available_backends()) from None


def get_backend(name: str) -> CompilerBackend:
  """Instantiates the backend registered under ``name``."""
  return get_backend_class(name)()
