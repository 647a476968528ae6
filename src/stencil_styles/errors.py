"""
Exception hierarchy for stencil-styles.

Only `UsageError` and the final `BackendError` of a compilation are meant to
reach callers of the core; the remaining types are absorbed or re-surfaced by
the compiler backend as part of its own failure.
"""

from typing import Optional


class StylesError(Exception):
  """Base class for every error raised by this package."""


class UsageError(StylesError):
  """The API was driven in a way it does not support."""


class SessionReuseError(UsageError):
  """A `CompilationSession` received a second ``compile`` call."""

  def __init__(self) -> None:
    super().__init__("This CompilationSession was already used. Create a new session per compilation.")


class ResolutionError(StylesError):
  """An import specifier could not be resolved."""


class ImportNotFoundError(ResolutionError):
  """
  Raised by the virtual importer when no file in the set matches.

  Attributes:
      path (str): The fully resolved path that was attempted.
  """

  def __init__(self, path: str) -> None:
    self.path = path
    super().__init__(f"{path} doesn't exist!")


class AssemblyError(StylesError):
  """The dependency closure of an entry stylesheet could not be built."""

  def __init__(self, path: str, reason: str) -> None:
    self.path = path
    super().__init__(f"{reason}: {path}")


class StylesheetNotFoundError(AssemblyError):
  def __init__(self, path: str) -> None:
    super().__init__(path, "Stylesheet not found")


class StylesheetReadError(AssemblyError):
  def __init__(self, path: str, cause: Exception) -> None:
    super().__init__(path, f"Unable to read stylesheet ({cause})")


class BackendError(StylesError):
  """
  A compiler backend failed to render the stylesheet.

  Attributes:
      backend (str): Registry name of the failing backend.
      message (str): The backend's own error text.
      line (Optional[int]): Source line reported by the backend, if any.
      column (Optional[int]): Source column reported by the backend, if any.
  """

  def __init__(
    self,
    backend: str,
    message: str,
    line: Optional[int] = None,
    column: Optional[int] = None,
  ) -> None:
    self.backend = backend
    self.message = message
    self.line = line
    self.column = column
    super().__init__(message)

  @property
  def kind(self) -> str:
    """Name of the underlying exception type, or of this class."""
    cause = self.__cause__
    return type(cause).__name__ if cause is not None else type(self).__name__


class UnknownBackendError(StylesError, KeyError):
  """No backend is registered under the requested name."""

  def __init__(self, name: str, known: list) -> None:
    self.name = name
    super().__init__(f"Unknown compiler backend: '{name}'. Available backends: {known}")

  def __str__(self) -> str:
    return self.args[0]


class PostProcessError(StylesError):
  """The CSS post-processor rejected its input or could not run."""
