"""
Bundled compiler backend bindings.

Importing this package registers every binding with the backend registry.
"""

from stencil_styles.compiler.backends.libsass import LibSassBackend
from stencil_styles.compiler.backends.pyscss import PyScssBackend

__all__ = ["LibSassBackend", "PyScssBackend"]
