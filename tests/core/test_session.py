"""
Tests for the Compilation Session.

Verifies:
1. Single use: a second compile is rejected without affecting the first.
2. The render request carries source, file-set importer and theme functions.
3. The file set is cleared after success and after failure.
4. Outcome reporting.
"""

from unittest.mock import MagicMock

import pytest

from stencil_styles.compiler.backend import CompilerBackend
from stencil_styles.core.arbiter import EngineArbiter
from stencil_styles.core.session import CompilationSession, CompileOptions
from stencil_styles.enums import ArbiterOutcome, OutputStyle
from stencil_styles.errors import BackendError, SessionReuseError, UsageError


class RecordingBackend(CompilerBackend):
  """Resolves one import and one function call, then returns CSS."""

  name = "recording"

  def __init__(self):
    self.seen = {}

  def render(self, request):
    self.seen["files_during_render"] = dict(request.importer.files)
    self.seen["import"] = request.importer("vars", "stdin")
    self.seen["number"] = request.functions["stencilNumber"]("font-size")
    self.seen["style"] = request.output_style
    return "compiled:" + request.source


class FailingBackend(CompilerBackend):
  name = "failing"

  def render(self, request):
    raise BackendError(self.name, "nope")


def test_compile_runs_arbiter_with_virtual_files(theme_settings):
  """
  Scenario: Source plus a file set and theme settings.
  Expectation: The backend sees the files through the importer and the
  settings through the functions.
  """
  backend = RecordingBackend()
  session = CompilationSession(EngineArbiter(backend), OutputStyle.COMPRESSED)

  css = session.compile(
    CompileOptions(data="@import 'vars';", files={"vars.scss": "$a: 1;"}, theme_settings=theme_settings)
  )

  assert css == "compiled:@import 'vars';"
  assert backend.seen["import"].path == "vars.scss"
  assert backend.seen["number"].value == 14.0
  assert backend.seen["style"] is OutputStyle.COMPRESSED
  assert session.outcome is ArbiterOutcome.PRIMARY_SUCCEEDED


def test_second_compile_is_rejected():
  """
  Scenario: compile() called twice on one session.
  Expectation: SessionReuseError (a UsageError) on the second call only.
  """
  session = CompilationSession(EngineArbiter(RecordingBackend()))
  first = session.compile(CompileOptions(data="a", files={"vars.scss": ""}))

  with pytest.raises(SessionReuseError) as excinfo:
    session.compile(CompileOptions(data="b"))

  assert first == "compiled:a"
  assert isinstance(excinfo.value, UsageError)
  assert not isinstance(excinfo.value, BackendError)


def test_files_cleared_after_success():
  backend = RecordingBackend()
  session = CompilationSession(EngineArbiter(backend))
  files = {"vars.scss": "$a: 1;"}

  session.compile(CompileOptions(data="a", files=files))

  assert backend.seen["files_during_render"] == files
  assert session.files == {}
  assert session.aliases == {}
  assert files == {"vars.scss": "$a: 1;"}


def test_files_cleared_after_failure():
  """
  Scenario: Every backend fails.
  Expectation: Error propagates; the session holds no file contents.
  """
  session = CompilationSession(EngineArbiter(FailingBackend()))

  with pytest.raises(BackendError, match="nope"):
    session.compile(CompileOptions(data="a", files={"x.scss": "secret"}))

  assert session.files == {}
  assert session.outcome is ArbiterOutcome.PRIMARY_FAILED


def test_missing_files_default_to_empty_set():
  backend = MagicMock(spec=CompilerBackend)
  backend.name = "mock"
  backend.render.return_value = "css"
  session = CompilationSession(EngineArbiter(backend))

  assert session.compile(CompileOptions(data="a")) == "css"
  request = backend.render.call_args[0][0]
  assert request.importer.files == {}
