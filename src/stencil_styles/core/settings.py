"""
Dotted-path access to theme settings.
"""

from typing import Any, Mapping, Optional

_MISSING = object()


def get_setting(settings: Optional[Mapping[str, Any]], path: Any, default: Any = None) -> Any:
  """
  Looks up ``path`` in a nested settings mapping.

  A key that literally contains dots takes precedence over walking the nested
  structure, so both ``{"a.b": 1}`` and ``{"a": {"b": 1}}`` answer ``"a.b"``.
  Sequence items are addressed by integer segments (``"fonts.0"``).

  Args:
      settings: Theme settings, possibly None.
      path: Dotted setting name. Non-string names are stringified.
      default: Returned when any segment is missing.

  Returns:
      Any: The setting value, or ``default``.
  """
  if not settings or path is None:
    return default

  path = str(path)
  if path in settings:
    return settings[path]

  current: Any = settings
  for segment in path.split("."):
    current = _step(current, segment)
    if current is _MISSING:
      return default
  return current


def _step(container: Any, segment: str) -> Any:
  if isinstance(container, Mapping):
    return container.get(segment, _MISSING)
  if isinstance(container, (list, tuple)):
    try:
      return container[int(segment)]
    except (ValueError, IndexError):
      return _MISSING
  return _MISSING


def set_setting(settings: dict, path: str, value: Any) -> None:
  """
  Stores ``value`` under a dotted ``path``, creating nested dicts as needed.

  Args:
      settings (dict): Mapping to modify in place.
      path (str): Dotted setting name.
      value (Any): Value to store.
  """
  *parents, leaf = path.split(".")
  current = settings
  for segment in parents:
    nested = current.get(segment)
    if not isinstance(nested, dict):
      nested = {}
      current[segment] = nested
    current = nested
  current[leaf] = value
