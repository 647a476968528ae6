"""
Compiler backends: the rendering interface, the registry and the bundled
LibSass and pyScss bindings.
"""

from stencil_styles.compiler.backend import CompilerBackend, RenderRequest
from stencil_styles.compiler.registry import available_backends, get_backend, register_backend
from stencil_styles.compiler import backends

__all__ = [
  "CompilerBackend",
  "RenderRequest",
  "available_backends",
  "backends",
  "get_backend",
  "register_backend",
]
