"""
Engine Arbiter.

An explicit two-slot choice between a primary and a fallback compiler backend.

Lifecycle of one `EngineArbiter.run`:

.. code-block:: text

    idle -> primary_attempted -> done
                              -> fallback_attempted -> done

The primary's failure is logged once and never surfaced when the fallback
succeeds. When both fail, the fallback's error propagates. There is no third
attempt and the two backends never run concurrently.
"""

import logging
from typing import Optional

from pydantic import BaseModel, Field
from rich.markup import escape

from stencil_styles.compiler.backend import CompilerBackend, RenderRequest
from stencil_styles.enums import ArbiterOutcome, ArbiterState
from stencil_styles.errors import BackendError
from stencil_styles.utils.console import log_warning

logger = logging.getLogger(__name__)


class ArbiterResult(BaseModel):
  """Tagged result of a successful run."""

  css: str = Field(description="Compiled CSS text.")
  outcome: ArbiterOutcome = Field(description="Which slot produced the CSS.")
  backend: str = Field(description="Registry name of the backend that produced the CSS.")


class EngineArbiter:
  """
  Runs a render on the primary backend, falling back once on failure.

  Attributes:
      primary (CompilerBackend): Backend tried first.
      fallback (Optional[CompilerBackend]): Backend tried after a primary failure.
      state (ArbiterState): Position in the lifecycle of the current run.
      outcome (Optional[ArbiterOutcome]): Outcome of the last run, if finished.
  """

  def __init__(self, primary: CompilerBackend, fallback: Optional[CompilerBackend] = None):
    self.primary = primary
    self.fallback = fallback
    self.state = ArbiterState.IDLE
    self.outcome: Optional[ArbiterOutcome] = None

  def _render(self, backend: CompilerBackend, request: RenderRequest) -> str:
    try:
      return backend.render(request)
    except BackendError:
      raise
    except Exception as e:
      raise BackendError(backend.name, str(e)) from e

  def run(self, request: RenderRequest) -> ArbiterResult:
    """
    Renders ``request``.

    Args:
        request (RenderRequest): Passed unchanged to each backend tried.

    Returns:
        ArbiterResult: CSS text and the producing slot.

    Raises:
        BackendError: The fallback's error if both fail, or the primary's when
            no fallback is configured.
    """
    self.state = ArbiterState.PRIMARY_ATTEMPTED
    self.outcome = None
    try:
      css = self._render(self.primary, request)
    except BackendError as primary_error:
      if self.fallback is None:
        self.state = ArbiterState.DONE
        self.outcome = ArbiterOutcome.PRIMARY_FAILED
        raise

      log_warning(
        f"[backend]{escape(self.primary.name)}[/backend] failed "
        f"({escape(primary_error.kind)}): {escape(primary_error.message)}. "
        f"Retrying with [backend]{escape(self.fallback.name)}[/backend]."
      )
      return self._run_fallback(request)

    self.state = ArbiterState.DONE
    self.outcome = ArbiterOutcome.PRIMARY_SUCCEEDED
    return ArbiterResult(css=css, outcome=self.outcome, backend=self.primary.name)

  def _run_fallback(self, request: RenderRequest) -> ArbiterResult:
    self.state = ArbiterState.FALLBACK_ATTEMPTED
    try:
      css = self._render(self.fallback, request)
    except BackendError:
      self.outcome = ArbiterOutcome.BOTH_FAILED
      raise
    finally:
      self.state = ArbiterState.DONE

    self.outcome = ArbiterOutcome.FALLBACK_SUCCEEDED
    logger.debug("Fallback backend %s produced %d characters", self.fallback.name, len(css))
    return ArbiterResult(css=css, outcome=self.outcome, backend=self.fallback.name)
