"""
Tests for the Dependency Closure Assembler.

Verifies:
1. Transitive closure with each file exactly once (shared imports, cycles).
2. Root-relative, canonical keys in discovery order.
3. Bundle mode ordering and content.
4. Terminal '.css' imports and import statement parsing.
5. Missing and unreadable files abort the call.
"""

import pytest

from stencil_styles.core.assembler import assemble, assemble_files, find_imports
from stencil_styles.enums import AssembleMode
from stencil_styles.errors import AssemblyError, StylesheetNotFoundError, StylesheetReadError


def test_closure_contains_each_file_once(scss_root):
  """
  Scenario: '_vars' and 'tools/_onemore' are imported from two places.
  Expectation: Four files, keyed relative to the root in depth-first order.
  """
  files = assemble_files("theme", scss_root)

  assert list(files) == ["theme.scss", "tools/onemore.scss", "vars.scss", "components.scss"]
  assert files["vars.scss"] == "$gutter: 10px;\n"


def test_sources_are_left_untouched(scss_root):
  files = assemble_files("theme", scss_root)
  assert '@import "../vars";' in files["tools/onemore.scss"]


def test_cycle_terminates(tmp_path, make_tree):
  """
  Scenario: a imports b, b imports a.
  Expectation: Both files once; no infinite recursion.
  """
  root = make_tree(tmp_path, {"a.scss": '@import "b";', "b.scss": '@import "a";'})

  files = assemble_files("a", root)

  assert sorted(files) == ["a.scss", "b.scss"]


def test_multiple_entry_points_share_files(scss_root):
  files = assemble_files(["theme", "components"], scss_root)
  assert list(files).count("components.scss") == 1
  assert len(files) == 4


def test_bundle_mode_orders_entries_first(scss_root):
  """
  Scenario: 'components' is passed as a second entry point.
  Expectation: Bundle = entries in given order, then the remaining files.
  """
  assembly = assemble(["theme", "components"], scss_root, AssembleMode.BUNDLE)
  files = assembly.files

  expected = "\n".join(
    [files["theme.scss"], files["components.scss"], files["tools/onemore.scss"], files["vars.scss"]]
  )
  assert assembly.bundle == expected


def test_bundle_is_superset_of_map(scss_root):
  assembly = assemble("theme", scss_root, "bundle")

  for content in assembly.files.values():
    assert content in assembly.bundle


def test_map_mode_has_no_bundle(scss_root):
  assert assemble("theme", scss_root).bundle is None


def test_existing_css_import_is_terminal(tmp_path, make_tree):
  """
  Scenario: '@import "plain.css"' where plain.css exists.
  Expectation: Left to the browser, not part of the file set.
  """
  root = make_tree(tmp_path, {"main.scss": '@import "plain.css";\na { b: c; }', "plain.css": "p { x: y; }"})

  assert list(assemble_files("main", root)) == ["main.scss"]


def test_css_import_resolves_to_scss_sibling(tmp_path, make_tree):
  root = make_tree(tmp_path, {"main.scss": '@import "grid.css";', "_grid.scss": ".g { x: y; }"})

  assert list(assemble_files("main", root)) == ["main.scss", "grid.scss"]


def test_missing_import_raises(tmp_path, make_tree):
  """
  Scenario: An import names a file that does not exist.
  Expectation: StylesheetNotFoundError carrying the first attempted path.
  """
  root = make_tree(tmp_path, {"main.scss": '@import "missing";'})

  with pytest.raises(StylesheetNotFoundError) as excinfo:
    assemble("main", root)

  assert excinfo.value.path == "missing"
  assert isinstance(excinfo.value, AssemblyError)


def test_missing_entry_point_raises(tmp_path):
  with pytest.raises(StylesheetNotFoundError):
    assemble("nothing", tmp_path)


def test_undecodable_file_raises(tmp_path, make_tree):
  root = make_tree(tmp_path, {"main.scss": '@import "bad";', "bad.scss": b"\xff\xfe\xfa"})

  with pytest.raises(StylesheetReadError) as excinfo:
    assemble("main", root)

  assert excinfo.value.path == "bad.scss"


def test_find_imports_parses_lists_and_skips_urls():
  """
  Scenario: Comma lists, url(), remote URLs and commented-out imports.
  Expectation: Only local quoted specifiers, in statement order.
  """
  source = """
  @import "a", 'b';
  // @import "commented";
  /* @import "blocked"; */
  @import url(foo.css);
  @import "https://fonts.example.com/css";
  @import "c";
  .x { background: url(http://example.com/i.png); }
  """

  assert find_imports(source) == ["a", "b", "c"]
