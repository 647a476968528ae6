"""
Compiler Backend Protocol.

Defines the interface of a stylesheet compiler binding and the request it
receives. A backend renders Sass source to CSS using the supplied import hook
for every ``@import`` and exposing the supplied theme functions; it must never
resolve imports against the real filesystem.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from stencil_styles.core.functions import ThemeFunction
from stencil_styles.core.importer import ImportResult
from stencil_styles.enums import OutputStyle

# (specifier, importing_path) -> ImportResult, raising ImportNotFoundError.
ImportHook = Callable[[str, str], ImportResult]


class RenderRequest(BaseModel):
  """
  Everything a backend needs for one render.
  """

  model_config = ConfigDict(arbitrary_types_allowed=True)

  source: str = Field(default="", description="Top-level Sass source text.")
  functions: Dict[str, ThemeFunction] = Field(default_factory=dict, description="Custom functions by name.")
  importer: ImportHook = Field(description="Virtual import hook.")
  dest: Optional[str] = Field(default=None, description="Output path hint, used for source map URLs.")
  source_map: bool = Field(default=False, description="Embed a source map in the CSS.")
  output_style: OutputStyle = Field(default=OutputStyle.NESTED, description="CSS formatting style.")


class CompilerBackend(ABC):
  """
  Abstract base class for compiler backend bindings.

  Attributes:
      name (str): Registry key of the backend.
  """

  name: str = "abstract"

  @abstractmethod
  def render(self, request: RenderRequest) -> str:
    """
    Compiles the request's source to CSS.

    Args:
        request (RenderRequest): Source, functions, import hook and options.

    Returns:
        str: The compiled CSS text.

    Raises:
        BackendError: If compilation fails for any reason.
    """
    pass
