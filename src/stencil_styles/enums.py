"""
Enumerations for stencil-styles.
"""

from enum import Enum


class AssembleMode(str, Enum):
  """Output shape of the dependency closure assembler."""

  MAP = "map"
  BUNDLE = "bundle"


class ArbiterState(str, Enum):
  """Lifecycle of a single `EngineArbiter.run` call."""

  IDLE = "idle"
  PRIMARY_ATTEMPTED = "primary_attempted"
  FALLBACK_ATTEMPTED = "fallback_attempted"
  DONE = "done"


class ArbiterOutcome(str, Enum):
  """Which backend produced the CSS (or that none did)."""

  PRIMARY_SUCCEEDED = "primary_succeeded"
  FALLBACK_SUCCEEDED = "fallback_succeeded"
  BOTH_FAILED = "both_failed"
  # Primary failed and no fallback slot was configured.
  PRIMARY_FAILED = "primary_failed"


class OutputStyle(str, Enum):
  """CSS formatting styles understood by every bundled backend."""

  NESTED = "nested"
  EXPANDED = "expanded"
  COMPACT = "compact"
  COMPRESSED = "compressed"
