"""
Tests for dotted-path theme setting access.
"""

from stencil_styles.core.settings import get_setting, set_setting


def test_literal_dotted_key_wins():
  settings = {"a.b": 1, "a": {"b": 2}}
  assert get_setting(settings, "a.b") == 1


def test_nested_lookup():
  settings = {"global": {"h1": {"size": "2em"}}, "fonts": ["Karla", "Roboto"]}

  assert get_setting(settings, "global.h1.size") == "2em"
  assert get_setting(settings, "fonts.1") == "Roboto"


def test_missing_returns_default():
  settings = {"a": {"b": 1}, "fonts": ["Karla"]}

  assert get_setting(settings, "a.c") is None
  assert get_setting(settings, "a.b.c", default=0) == 0
  assert get_setting(settings, "fonts.5", default="x") == "x"
  assert get_setting(None, "a", default=3) == 3


def test_set_setting_creates_nested_dicts():
  settings = {"a": "scalar"}

  set_setting(settings, "a.b.c", 1)
  set_setting(settings, "top", True)

  assert settings == {"a": {"b": {"c": 1}}, "top": True}
