"""
Tests for the Stylesheet Template Scanner.

Verifies:
1. Helper calls in text nodes are found; those inside HTML comments are not.
2. '/css/' links resolve to their '/scss/' sources.
3. Root entry points become stems, nested ones keep their sub-path.
4. Vendor files, compiled-only CSS and unknown paths are dropped.
5. Results are de-duplicated across templates in first-seen order.
"""

from unittest.mock import patch

import pytest

from stencil_styles.discovery.templates import StylesheetTemplateScanner

BASE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  {{{stylesheet '/assets/css/theme.css'}}}
  <!-- {{{stylesheet '/assets/css/commented.css'}}} -->
  {{{stylesheet '/assets/css/vendor/lib.css'}}}
  {{{stylesheet '/assets/css/plain.css'}}}
</head>
<body>
  <div>{{{stylesheet '/assets/scss/pages/home.scss'}}}</div>
</body>
</html>
"""

PAGE_TEMPLATE = """<div>
  {{{stylesheet '/assets/css/theme.css'}}}
  {{{stylesheet '/assets/css/missing.css'}}}
</div>
"""


@pytest.fixture
def theme(tmp_path, make_tree):
  return make_tree(
    tmp_path / "theme",
    {
      "templates/layout/base.html": BASE_TEMPLATE,
      "templates/pages/page.html": PAGE_TEMPLATE,
      "templates/readme.txt": "{{{stylesheet '/assets/css/ignored.css'}}}",
      "assets/scss/theme.scss": "body { a: b; }",
      "assets/scss/commented.scss": "",
      "assets/scss/ignored.scss": "",
      "assets/scss/vendor/lib.scss": "",
      "assets/scss/pages/home.scss": "",
      "assets/css/plain.css": "",
    },
  )


def test_scan_returns_normalised_entry_points(theme):
  """
  Scenario: Two templates with root, nested, vendor, commented and missing links.
  Expectation: Only the root stem and the nested sub-path, once each.
  """
  with patch("stencil_styles.discovery.templates.log_warning"):
    assert StylesheetTemplateScanner(theme).scan() == ["theme", "pages/home.scss"]


def test_unresolvable_path_is_logged(theme):
  scanner = StylesheetTemplateScanner(theme)

  with patch("stencil_styles.discovery.templates.log_warning") as mock_warn:
    assert scanner.resolve_location("/assets/css/missing.css") is None

  mock_warn.assert_called_once()
  assert "missing.css" in mock_warn.call_args[0][0]


def test_comment_is_ignored(theme):
  scanner = StylesheetTemplateScanner(theme)
  content = "<!-- {{stylesheet '/assets/css/theme.css'}} -->"

  assert scanner.stylesheets_in(content) == []


@pytest.mark.parametrize(
  "link, expected",
  [
    ("/assets/css/theme.css", "theme"),
    ("assets/scss/theme.scss", "theme"),
    ("/assets/scss/pages/home.scss", "pages/home.scss"),
    ("/assets/css/vendor/lib.css", None),
    ("/assets/css/plain.css", None),
  ],
)
def test_resolve_location(theme, link, expected):
  assert StylesheetTemplateScanner(theme).resolve_location(link) == expected
