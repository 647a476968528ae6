"""
stencil-styles Package.

Compiles theme stylesheets (SCSS) against an in-memory file set, exposing the
theme settings to the stylesheets through ``stencil*`` Sass functions, with a
fallback compiler backend when the primary one fails.

Usage
-----

Single Entry Point
^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import stencil_styles as sts

    files = sts.assemble("theme", "assets/scss").files
    css = sts.compile_css(
        sts.CompileOptions(
            data=files["theme.scss"],
            files=files,
            theme_settings={"color-primary": "#ff0000"},
        )
    )

Explicit Session
^^^^^^^^^^^^^^^^

.. code-block:: python

    from stencil_styles import CompilationSession, CompileOptions, EngineArbiter, get_backend

    arbiter = EngineArbiter(get_backend("libsass"), get_backend("pyscss"))
    session = CompilationSession(arbiter)
    css = session.compile(CompileOptions(data="a { width: stencilNumber('w'); }"))
    print(session.outcome)
"""

from typing import Optional

from stencil_styles.compiler import get_backend
from stencil_styles.config import StylesConfig
from stencil_styles.core.arbiter import EngineArbiter
from stencil_styles.core.assembler import assemble, assemble_files
from stencil_styles.core.postprocess import PostCssProcessor, PostProcessor, PrefixOptions, auto_prefix
from stencil_styles.core.session import CompilationSession, CompileOptions
from stencil_styles.discovery import StylesheetTemplateScanner

__version__ = "0.1.0"


def build_arbiter(config: StylesConfig) -> EngineArbiter:
  """Instantiates the configured primary and fallback backends."""
  fallback = get_backend(config.fallback_backend) if config.fallback_backend else None
  return EngineArbiter(get_backend(config.primary_backend), fallback)


def compile_css(
  options: CompileOptions,
  config: Optional[StylesConfig] = None,
  processor: Optional[PostProcessor] = None,
) -> str:
  """
  Compiles a stylesheet with a fresh session and optionally vendor-prefixes it.

  Args:
      options (CompileOptions): Source text, file set and theme settings.
      config (Optional[StylesConfig]): Backend and output configuration.
          Defaults to ``StylesConfig()``.
      processor (Optional[PostProcessor]): Prefixer to use when
          ``config.autoprefix`` is set. Defaults to `PostCssProcessor` running
          ``config.postcss_command``.

  Returns:
      str: The compiled CSS.

  Raises:
      BackendError: If every configured backend fails.
  """
  config = config or StylesConfig()
  session = CompilationSession(build_arbiter(config), config.output_style)
  css = session.compile(options)

  if config.autoprefix:
    processor = processor or PostCssProcessor(config.postcss_command)
    css = auto_prefix(css, PrefixOptions(browsers=config.browsers), processor)
  return css


__all__ = [
  "CompilationSession",
  "CompileOptions",
  "EngineArbiter",
  "PostCssProcessor",
  "PostProcessor",
  "PrefixOptions",
  "StylesConfig",
  "StylesheetTemplateScanner",
  "assemble",
  "assemble_files",
  "auto_prefix",
  "build_arbiter",
  "compile_css",
  "get_backend",
  "__version__",
]
