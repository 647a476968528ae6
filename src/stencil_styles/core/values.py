"""
Backend-neutral Sass values.

Theme functions return these plain values; each compiler backend converts them
to its own type system. Strings are returned as `str` and the Sass ``null`` is
represented by `None` (`NULL`).
"""

from typing import NamedTuple, Optional

NULL = None


class Number(NamedTuple):
  """A Sass number with an optional unit (``14px``, ``1.5em``, ``3``)."""

  value: float
  unit: str = ""


class Color(NamedTuple):
  """An RGBA color; channels in 0-255, alpha in 0-1."""

  red: int
  green: int
  blue: int
  alpha: float = 1.0

  @classmethod
  def from_hex(cls, text: str) -> Optional["Color"]:
    """
    Parses ``#rrggbb``, ``rrggbb``, ``#rgb`` or ``rgb`` as an opaque color.

    Args:
        text (str): Hex notation, with or without the leading ``#``.

    Returns:
        Optional[Color]: The color, or None if ``text`` is not valid hex.
    """
    digits = text[1:] if text.startswith("#") else text
    if len(digits) == 3:
      digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6:
      return None
    try:
      packed = int(digits, 16)
    except ValueError:
      return None
    return cls((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF, 1.0)
