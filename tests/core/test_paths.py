"""
Tests for Sass Import Path Resolution.

Verifies:
1. Joining keeps the base directory even for specifiers starting with '/'.
2. Candidate order: exact, '.scss', partial, then '.css'/'.scss' siblings.
3. Canonical (un-prefixed) partial names.
4. Root marker handling.
"""

from stencil_styles.core import paths


def test_join_keeps_base_for_absolute_specifier():
  """
  Scenario: Specifier starts with '/'.
  Expectation: It is still joined under the importing directory.
  """
  assert paths.join_logical("/mock", "/path2.scss") == "/mock/path2.scss"
  assert paths.join_logical("", "theme") == "theme"


def test_join_normalises_parent_segments():
  assert paths.join_logical("tools", "../vars") == "vars"
  assert paths.join_logical("a/b", "./c/../d") == "a/b/d"


def test_to_logical_path_uses_posix_separators():
  assert paths.to_logical_path("tools\\grid\\_a.scss") == "tools/grid/_a.scss"


def test_base_directory_of_root_marker_is_empty():
  """
  Scenario: Import issued from the top-level source.
  Expectation: Resolution is relative to the stylesheet root.
  """
  assert paths.base_directory(paths.ROOT_MARKER) == ""
  assert paths.base_directory("tools/onemore.scss") == "tools"
  assert paths.base_directory("theme.scss") == ""


def test_resolve_extensionless_specifier():
  """
  Scenario: '@import "tools/onemore"' from the root.
  Expectation: Exact, '.scss' and partial candidates, in that order.
  """
  assert paths.resolve("tools/onemore", paths.ROOT_MARKER) == [
    "tools/onemore",
    "tools/onemore.scss",
    "tools/_onemore.scss",
  ]


def test_resolve_relative_to_importing_file():
  """
  Scenario: '/path2' imported by '/mock/path1.scss'.
  Expectation: First candidates live in '/mock'.
  """
  candidates = paths.resolve("/path2", "/mock/path1.scss")

  assert candidates[0] == "/mock/path2"
  assert candidates[1] == "/mock/path2.scss"
  assert "/mock/_path2.scss" in candidates


def test_resolve_css_specifier_includes_scss_sibling():
  """
  Scenario: Specifier carries a '.css' extension.
  Expectation: Partial and '.scss' siblings follow the exact path.
  """
  assert paths.resolve("a.css", "x/y.scss") == ["x/a.css", "x/_a.css", "x/a.scss", "x/_a.scss"]


def test_resolve_partial_specifier_adds_canonical_name():
  """
  Scenario: Specifier already names the partial file.
  Expectation: The un-prefixed key is appended as a lower priority candidate.
  """
  candidates = paths.resolve("tools/_grid.scss", paths.ROOT_MARKER)

  assert candidates[0] == "tools/_grid.scss"
  assert candidates.index("tools/grid.scss") > 0


def test_candidates_are_unique():
  candidates = paths.candidates_in("", "_a")
  assert len(candidates) == len(set(candidates))


def test_canonical_name():
  assert paths.canonical_name("tools/_onemore.scss") == "tools/onemore.scss"
  assert paths.canonical_name("_vars.scss") == "vars.scss"
  assert paths.canonical_name("theme.scss") == "theme.scss"


def test_extension_predicates():
  assert paths.has_stylesheet_extension("a.scss")
  assert paths.has_stylesheet_extension("a.css")
  assert not paths.has_stylesheet_extension("a")
  assert paths.is_compiled_output("vendor/normalize.css")
  assert not paths.is_compiled_output("a.scss")
