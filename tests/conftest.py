"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Theme settings and on-disk stylesheet tree fixtures.
- Global backend registry isolation to prevent tests with stub backends from leaking.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'stencil_styles' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Register the bundled backends so they are part of the restored baseline.
import stencil_styles.compiler  # noqa: E402
from stencil_styles.compiler.registry import _BACKEND_REGISTRY  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_backend_registry():
  """
  Ensures that stub backends registered by a test do not leak into others.
  """
  original_registry = _BACKEND_REGISTRY.copy()
  yield
  _BACKEND_REGISTRY.clear()
  _BACKEND_REGISTRY.update(original_registry)


@pytest.fixture
def theme_settings():
  """Representative theme settings, flat and nested."""
  return {
    "font-size": "14px",
    "color-primary": "#ff0000",
    "color-short": "#abc",
    "global": {"h1": {"font-size": {"value": "2.5"}}},
    "logo": "img/logo-{:size}.png",
    "logo-size": "250x100",
    "bad-size": "250",
    "label": "Hello",
    "body-font": "Google_Karla_400",
    "heading-font": "Times New Roman_700,400",
  }


def write_tree(root: Path, files: dict) -> Path:
  """Writes ``{relative path: text}`` below ``root``."""
  for relative, content in files.items():
    target = root / relative
    target.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
      target.write_bytes(content)
    else:
      target.write_text(content, encoding="utf-8")
  return root


@pytest.fixture
def make_tree():
  """Factory writing a stylesheet tree; see `write_tree`."""
  return write_tree


@pytest.fixture
def scss_root(tmp_path):
  """
  A stylesheet root with an entry point, nested partials and a shared import.

  theme.scss -> tools/_onemore.scss -> _vars.scss
             -> components.scss -> _vars.scss, tools/_onemore.scss
  """
  return write_tree(
    tmp_path / "scss",
    {
      "theme.scss": '@import "tools/onemore";\n@import "components";\nbody { color: red; }\n',
      "tools/_onemore.scss": '@import "../vars";\n.one { width: $gutter; }\n',
      "_vars.scss": "$gutter: 10px;\n",
      "components.scss": '@import "vars";\n@import "tools/onemore";\n.card { margin: $gutter; }\n',
    },
  )
