"""
CSS Post-processing.

Vendor prefixing of compiled CSS is best effort: `auto_prefix` never raises
and hands back the unmodified text when the processor cannot run or rejects
its input.
"""

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Union

from pydantic import BaseModel, Field

from stencil_styles.errors import PostProcessError

logger = logging.getLogger(__name__)

DEFAULT_POSTCSS_COMMAND = ["postcss", "--use", "autoprefixer", "--no-map"]
DEFAULT_BROWSERS = ["> 1%", "last 2 versions", "Firefox ESR"]


class PrefixOptions(BaseModel):
  """Vendor-targeting configuration passed to a post-processor."""

  browsers: List[str] = Field(default_factory=lambda: list(DEFAULT_BROWSERS), description="Browserslist queries.")


class PostProcessor(ABC):
  """
  Abstract base class for CSS transformers.
  """

  @abstractmethod
  def process(self, css: str, options: PrefixOptions) -> str:
    """
    Transforms CSS text.

    Raises:
        PostProcessError: If the input is rejected or the tool fails.
    """
    pass


class PostCssProcessor(PostProcessor):
  """
  Pipes CSS through the PostCSS command line with the autoprefixer plugin.

  Browser targets are handed over through the ``BROWSERSLIST`` environment
  variable.
  """

  def __init__(self, command: Optional[Sequence[str]] = None, timeout: Optional[float] = 60):
    self.command = list(command or DEFAULT_POSTCSS_COMMAND)
    self.timeout = timeout

  def process(self, css: str, options: PrefixOptions) -> str:
    env = dict(os.environ, BROWSERSLIST=", ".join(options.browsers))
    try:
      proc = subprocess.run(
        self.command,
        input=css,
        capture_output=True,
        text=True,
        env=env,
        timeout=self.timeout,
      )
    except (OSError, subprocess.SubprocessError) as e:
      raise PostProcessError(f"Unable to run {self.command[0]}: {e}") from e

    if proc.returncode != 0:
      raise PostProcessError(proc.stderr.strip() or f"{self.command[0]} exited with {proc.returncode}")
    return proc.stdout


def auto_prefix(
  css: Any,
  options: Optional[PrefixOptions] = None,
  processor: Optional[PostProcessor] = None,
) -> str:
  """
  Adds vendor prefixes to ``css``.

  Args:
      css: CSS text. Bytes are decoded as UTF-8; any other type yields ``""``.
      options (Optional[PrefixOptions]): Browser targets.
      processor (Optional[PostProcessor]): Defaults to `PostCssProcessor`.

  Returns:
      str: Prefixed CSS, or the input text unchanged on any failure.
  """
  text: Union[str, None] = None
  if isinstance(css, bytes):
    try:
      text = css.decode("utf-8")
    except UnicodeDecodeError:
      return ""
  elif isinstance(css, str):
    text = css
  if text is None:
    return ""

  processor = processor or PostCssProcessor()
  try:
    return processor.process(text, options or PrefixOptions())
  except Exception as e:
    logger.debug("Skipping vendor prefixing: %s", e)
    return text
