"""
Runtime Configuration Store.

Settings are read from ``[tool.stencil_styles]`` in the nearest
``pyproject.toml`` and overridden by explicit (CLI) arguments.
"""

import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator
from rich.markup import escape

from stencil_styles.compiler.registry import available_backends
from stencil_styles.core.postprocess import DEFAULT_BROWSERS, DEFAULT_POSTCSS_COMMAND
from stencil_styles.enums import OutputStyle
from stencil_styles.utils.console import log_warning

TOOL_SECTION = "stencil_styles"
NO_BACKEND = "none"


class StylesConfig(BaseModel):
  """
  Global configuration container for stylesheet compilation.
  """

  primary_backend: str = Field("libsass", description="Backend tried first (e.g. 'libsass').")
  fallback_backend: Optional[str] = Field("pyscss", description="Backend tried after a primary failure; None disables.")
  output_style: OutputStyle = Field(OutputStyle.NESTED, description="CSS formatting style.")
  source_map: bool = Field(False, description="Embed source maps in the compiled CSS.")
  autoprefix: bool = Field(True, description="Run the vendor prefixer over the compiled CSS.")
  browsers: List[str] = Field(default_factory=lambda: list(DEFAULT_BROWSERS), description="Browserslist queries.")
  postcss_command: List[str] = Field(
    default_factory=lambda: list(DEFAULT_POSTCSS_COMMAND),
    description="Command line of the PostCSS prefixer, reading stdin.",
  )

  @field_validator("primary_backend", "fallback_backend")
  @classmethod
  def validate_backend(cls, v: Optional[str]) -> Optional[str]:
    """
    Normalises a backend name and checks it is registered.

    Raises:
        ValueError: If the backend is not found in the registry.
    """
    if v is None:
      return None
    v_clean = v.lower().strip()
    if v_clean == NO_BACKEND:
      return None
    known = available_backends()
    # Unregistered names are accepted while the registry is empty.
    if known and v_clean not in known:
      raise ValueError(f"Unknown compiler backend: '{v_clean}'. Supported backends: {known}")
    return v_clean

  @field_validator("postcss_command")
  @classmethod
  def validate_command(cls, v: List[str]) -> List[str]:
    if not v:
      raise ValueError("postcss_command must not be empty")
    return v

  @classmethod
  def load(
    cls,
    primary_backend: Optional[str] = None,
    fallback_backend: Optional[str] = None,
    output_style: Optional[str] = None,
    source_map: Optional[bool] = None,
    autoprefix: Optional[bool] = None,
    browsers: Optional[List[str]] = None,
    search_path: Optional[Path] = None,
  ) -> "StylesConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        primary_backend (Optional[str]): Override for the primary backend.
        fallback_backend (Optional[str]): Override for the fallback backend;
            ``"none"`` disables the fallback.
        output_style (Optional[str]): Override for the output style.
        source_map (Optional[bool]): Override for source map embedding.
        autoprefix (Optional[bool]): Override for vendor prefixing.
        browsers (Optional[List[str]]): Override for browser targets.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        StylesConfig: The fully resolved configuration object.
    """
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())

    overrides = {
      "primary_backend": primary_backend,
      "fallback_backend": fallback_backend,
      "output_style": output_style,
      "source_map": source_map,
      "autoprefix": autoprefix,
      "browsers": browsers,
    }
    values = {key: value for key, value in toml_config.items() if key in cls.model_fields}
    values.update({key: value for key, value in overrides.items() if value is not None})
    return cls(**values)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches upwards for 'pyproject.toml' and extracts the tool section.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Ignoring unreadable [path]{escape(str(toml_path))}[/path]: {escape(str(e))}")
        return {}, None
      return data.get("tool", {}).get(TOOL_SECTION, {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Types are inferred (int, float, bool, or string).

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.
  """
  if not items:
    return {}

  config = {}
  for item in items:
    if "=" not in item:
      log_warning(f"Ignoring invalid setting format: '{escape(item)}'. Expected 'key=value'.")
      continue

    key, val_str = item.split("=", 1)
    key = key.strip()
    val_str = val_str.strip()

    final_val: Any = val_str
    if val_str.lower() == "true":
      final_val = True
    elif val_str.lower() == "false":
      final_val = False
    else:
      try:
        if "." in val_str or "e" in val_str.lower():
          final_val = float(val_str)
        else:
          final_val = int(val_str)
      except ValueError:
        pass

    config[key] = final_val

  return config
