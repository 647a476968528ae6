"""
Stylesheet Template Scanner.

Finds the stylesheets a theme's templates link to with the
``{{stylesheet '/assets/css/theme.css'}}`` helper, and normalises each to the
entry point name the assembler expects below ``assets/scss``.

Only text nodes are inspected, so a helper call inside an HTML comment is
ignored.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import PreformattedString
from rich.markup import escape

from stencil_styles.utils.console import log_warning

logger = logging.getLogger(__name__)

STYLESHEET_RE = re.compile(r"""{{\s*stylesheet\s*([\/a-zA-Z'"\.-]+)\s*""", re.IGNORECASE)
TEMPLATES_DIR = "templates"
VENDOR_DIR = "vendor"

# "/assets/scss/theme.scss" splits into at most four parts.
_ROOT_DEPTH = 4


def _is_stylesheet_text(node) -> bool:
  # Comments, doctypes and CDATA are PreformattedString subclasses.
  return not isinstance(node, PreformattedString) and "stylesheet" in node


class StylesheetTemplateScanner:
  """
  Lists the Sass entry points referenced by a theme's templates.

  Attributes:
      theme_path (Path): Theme root holding ``templates/`` and ``assets/``.
  """

  def __init__(self, theme_path: Union[str, Path]):
    self.theme_path = Path(theme_path)

  def scan(self) -> List[str]:
    """
    Scans every template below ``templates/``.

    Returns:
        List[str]: Entry point names, de-duplicated in first-seen order.
    """
    templates = self.theme_path / TEMPLATES_DIR
    found: List[str] = []
    for template in sorted(templates.rglob("*.html")):
      logger.debug("Scanning template %s", template)
      content = template.read_text(encoding="utf-8")
      for name in self.stylesheets_in(content):
        if name is not None and name not in found:
          found.append(name)
    return found

  def stylesheets_in(self, content: str) -> List[Optional[str]]:
    """Entry point names referenced by one template (None where unresolvable)."""
    soup = BeautifulSoup(content, "html.parser")
    names = []
    for text in soup.find_all(string=_is_stylesheet_text):
      for match in STYLESHEET_RE.finditer(str(text)):
        names.append(self.resolve_location(match.group(1)[1:-1]))
    return names

  def resolve_location(self, file_path: str) -> Optional[str]:
    """
    Maps a linked stylesheet path to its Sass entry point name.

    ``/assets/css/theme.css`` -> ``theme`` when ``assets/scss/theme.scss``
    exists; ``/assets/scss/pages/home.scss`` -> ``pages/home.scss``. Compiled
    CSS that has no Sass source and vendor files yield None.
    """
    possible = [
      file_path,
      file_path.replace("/css/", "/scss/", 1),
      file_path.replace("/scss/", "/css/", 1),
      file_path.replace("/css/", "/scss/", 1).replace(".css", ".scss", 1),
      file_path.replace("/scss/", "/css/", 1).replace(".scss", ".css", 1),
    ]
    for location in possible:
      full_path = self.theme_path / location.lstrip("/")
      if not full_path.is_file():
        continue
      if full_path.suffix == ".css" or VENDOR_DIR in Path(location).parts:
        return None
      if len(location.split("/")) <= _ROOT_DEPTH:
        return full_path.stem
      return self._strip_root_folder(location)

    log_warning(f"Couldn't validate scss compilation for this file path: [path]{escape(file_path)}[/path]")
    return None

  def _strip_root_folder(self, location: str) -> str:
    parts = location.split("/")
    if parts[0] == "":
      parts.pop(0)
    return "/".join(parts[2:])
