"""
Compilation Session.

A single-use unit of work owning the file set and alias cache of exactly one
compilation. Construct a fresh session per request; sessions share nothing, so
independent requests may compile in parallel, each with its own session.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from stencil_styles.compiler.backend import RenderRequest
from stencil_styles.core.arbiter import EngineArbiter
from stencil_styles.core.functions import build_theme_functions
from stencil_styles.core.importer import AliasCache, VirtualImporter
from stencil_styles.enums import ArbiterOutcome, OutputStyle
from stencil_styles.errors import SessionReuseError


class CompileOptions(BaseModel):
  """
  Input of `CompilationSession.compile`.
  """

  data: str = Field(default="", description="Top-level Sass source text.")
  files: Optional[Dict[str, str]] = Field(default=None, description="Logical path -> source, from the assembler.")
  theme_settings: Optional[Dict[str, Any]] = Field(default=None, description="Theme settings for the stencil functions.")
  source_map: bool = Field(default=False, description="Embed a source map in the output.")
  dest: Optional[str] = Field(default=None, description="Output path hint.")


class CompilationSession:
  """
  Compiles one stylesheet, then refuses further work.

  Attributes:
      arbiter (EngineArbiter): Primary/fallback backend pair.
      output_style (OutputStyle): CSS formatting passed to the backends.
      files (Dict[str, str]): File set of the in-flight compilation; empty
          outside of `compile`.
      aliases (AliasCache): Specifiers seen by the importer during `compile`.
  """

  def __init__(self, arbiter: EngineArbiter, output_style: OutputStyle = OutputStyle.NESTED):
    self.arbiter = arbiter
    self.output_style = OutputStyle(output_style)
    self.files: Dict[str, str] = {}
    self.aliases: AliasCache = {}
    self._used = False
    self._outcome: Optional[ArbiterOutcome] = None

  @property
  def outcome(self) -> Optional[ArbiterOutcome]:
    """Which backend slot produced the CSS; None before `compile` completes."""
    return self._outcome

  def compile(self, options: CompileOptions) -> str:
    """
    Compiles ``options.data`` against ``options.files``.

    Args:
        options (CompileOptions): Source, file set, settings and output flags.

    Returns:
        str: The compiled CSS.

    Raises:
        SessionReuseError: On any call after the first.
        BackendError: When the arbiter exhausts its backends.
    """
    if self._used:
      raise SessionReuseError()
    self._used = True

    self.files = dict(options.files or {})
    self.aliases = {}
    try:
      request = RenderRequest(
        source=options.data,
        functions=build_theme_functions(options.theme_settings),
        importer=VirtualImporter(self.files, self.aliases),
        dest=options.dest,
        source_map=options.source_map,
        output_style=self.output_style,
      )
      try:
        result = self.arbiter.run(request)
      finally:
        self._outcome = self.arbiter.outcome
      return result.css
    finally:
      self.files.clear()
      self.aliases = {}
