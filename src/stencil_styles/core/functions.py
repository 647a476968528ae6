"""
Theme Function Bridge.

Builds the custom Sass functions that let stylesheets read theme settings:

.. code-block:: scss

    h1 {
      font-size: stencilNumber('global.h1.font-size.value', rem);
      color: stencilColor('color-primary');
      font-family: stencilFontFamily('body-font');
    }

Each function is a `ThemeFunction` holding a plain Python callable that takes
plain Python arguments (setting names as `str`) and returns the neutral values
of `stencil_styles.core.values`. Backends adapt both sides to their own
registration conventions. A missing or malformed setting never fails the
compilation: numbers fall back to ``0`` and everything else to ``null``.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from stencil_styles.core.settings import get_setting
from stencil_styles.core.values import NULL, Color, Number

GOOGLE_PROVIDER = "Google"
SIZE_PLACEHOLDER = "{:size}"

_NUMBER_PREFIX_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_IMAGE_SIZE_RE = re.compile(r"\d+x\d+")
_QUOTES_RE = re.compile(r"['\"]")


@dataclass(frozen=True)
class ThemeFunction:
  """
  A custom function exposed to stylesheet source.

  Attributes:
      name (str): Function name as called from Sass (``stencilNumber``).
      params (Tuple[str, ...]): Sass parameter declarations, defaults included
          (``("$name", "$unit: px")``).
      invoke (Callable): Implementation taking plain Python arguments.
  """

  name: str
  params: Tuple[str, ...]
  invoke: Callable[..., Any]

  @property
  def arity(self) -> int:
    return len(self.params)

  @property
  def required_arity(self) -> int:
    return sum(1 for param in self.params if ":" not in param)

  @property
  def signature(self) -> str:
    """Sass signature, e.g. ``stencilNumber($name, $unit: px)``."""
    return f"{self.name}({', '.join(self.params)})"

  def __call__(self, *args: Any) -> Any:
    return self.invoke(*args)


def parse_float(value: Any) -> float:
  """
  Reads the leading number of a setting value; anything unparseable is ``0``.

  ``"14px"`` -> 14.0, ``"1.5"`` -> 1.5, ``"abc"`` -> 0.0, ``None`` -> 0.0.
  """
  if isinstance(value, bool):
    return 0.0
  if isinstance(value, (int, float)):
    return float(value) if value == value else 0.0
  if not isinstance(value, str):
    return 0.0
  match = _NUMBER_PREFIX_RE.match(value)
  return float(match.group()) if match else 0.0


def default_font_parser(value: Any, kind: str) -> Optional[str]:
  """
  Returns the family or weight of a ``family_weights[_extra]`` font value.

  ``+`` stands for a space, only the first of comma separated weights is used,
  quotes are stripped and families are re-wrapped in double quotes.

  Eg: ``"Open+Sans_400,700_sans"`` -> ``'"Open Sans"'`` (family), ``'400'`` (weight).

  Args:
      value: The raw font setting.
      kind (str): ``"family"`` or ``"weight"``.

  Returns:
      Optional[str]: The formatted segment, or None if absent.
  """
  if not isinstance(value, str):
    return NULL

  is_family = kind == "family"
  segments = value.split("_")
  index = 0 if is_family else 1
  if index >= len(segments) or not segments[index]:
    return NULL

  formatted = segments[index].split(",")[0].replace("+", " ")
  formatted = _QUOTES_RE.sub("", formatted)
  if not formatted:
    return NULL

  if is_family:
    # Sass strings from functions are emitted unquoted.
    formatted = f'"{formatted}"'
  return formatted


def google_font_parser(value: str, kind: str) -> Optional[str]:
  """
  Drops the ``Google_`` provider prefix and defers to `default_font_parser`.

  Eg: ``"Google_Open+Sans_700"`` -> ``default_font_parser("Open+Sans_700", kind)``.
  """
  return default_font_parser("_".join(value.split("_")[1:]), kind)


def stencil_font(value: Any, kind: str) -> Optional[str]:
  """
  Dispatches a font setting to the parser of its provider.

  Args:
      value: The raw font setting (``"Google_Open+Sans_700"``, ``"Arial_400"``).
      kind (str): ``"family"`` or ``"weight"``.

  Returns:
      Optional[str]: The parsed segment, or None.
  """
  if isinstance(value, str) and value.split("_")[0] == GOOGLE_PROVIDER:
    return google_font_parser(value, kind)
  return default_font_parser(value, kind)


def build_theme_functions(theme_settings: Optional[Mapping[str, Any]]) -> Dict[str, ThemeFunction]:
  """
  Creates the theme functions bound to one set of theme settings.

  Args:
      theme_settings: Nested settings, addressed with dotted names.

  Returns:
      Dict[str, ThemeFunction]: Functions keyed by their Sass name.
  """
  settings = theme_settings or {}

  def lookup(name: Any) -> Any:
    return get_setting(settings, name)

  def stencil_number(name: Any, unit: Any = "px") -> Number:
    return Number(parse_float(lookup(name)), unit if isinstance(unit, str) else "")

  def stencil_color(name: Any) -> Optional[Color]:
    value = lookup(name)
    if not value or isinstance(value, bool):
      return NULL
    # Numeric settings such as 123456 (from JSON or the CLI) are hex digits.
    if isinstance(value, int):
      value = str(value)
    if not isinstance(value, str):
      return NULL
    return Color.from_hex(value)

  def stencil_string(name: Any) -> Optional[str]:
    value = lookup(name)
    return str(value) if value else NULL

  def stencil_image(image: Any, size: Any) -> Optional[str]:
    template = lookup(image)
    dimensions = lookup(size)
    if (
      isinstance(template, str)
      and SIZE_PLACEHOLDER in template
      and isinstance(dimensions, str)
      and _IMAGE_SIZE_RE.fullmatch(dimensions)
    ):
      return template.replace(SIZE_PLACEHOLDER, dimensions, 1)
    return NULL

  def stencil_font_family(name: Any) -> Optional[str]:
    return stencil_font(lookup(name), "family")

  def stencil_font_weight(name: Any) -> Optional[str]:
    return stencil_font(lookup(name), "weight")

  functions = [
    ThemeFunction("stencilNumber", ("$name", "$unit: px"), stencil_number),
    ThemeFunction("stencilColor", ("$name",), stencil_color),
    ThemeFunction("stencilString", ("$name",), stencil_string),
    ThemeFunction("stencilImage", ("$image", "$size"), stencil_image),
    ThemeFunction("stencilFontFamily", ("$name",), stencil_font_family),
    ThemeFunction("stencilFontWeight", ("$name",), stencil_font_weight),
  ]
  return {function.name: function for function in functions}
