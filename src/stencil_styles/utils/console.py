"""
Console and Logging Utilities.

All user-facing output of stencil-styles goes through the standard `logging`
library, rendered by `rich`.

The module provides:
1.  **Package Logger**: Messages are emitted on the ``stencil_styles`` logger,
    which carries a single `RichHandler`. Records still propagate to the root
    logger, so host applications (and pytest's ``caplog``) can observe them.
2.  **Swappable Console**: A proxy around the Rich Console lets the output
    destination (terminal, file, in-memory buffer) change at runtime via
    `set_console`, without modules re-importing the `console` object.

Attributes:
    console (_ConsoleProxy): Stable module-level reference to the active console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAME = "stencil_styles"

# Sits between INFO and WARNING.
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "backend": "bold magenta",
  }
)

_logger = logging.getLogger(LOGGER_NAME)


class _ConsoleProxy:
  """
  Forwards printing to a replaceable `rich.console.Console`.

  Replacing the backend also re-binds the package log handler, so that
  ``log_info(...)`` and ``console.print(...)`` always land in the same place.

  Attributes:
      _backend (Console): The active Rich Console instance.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME, stderr=True)
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    """
    Installs a new Console and re-binds the log handler to it.

    Args:
        new_console (Console): Console to write to from now on.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    """Returns to a fresh console writing to standard error."""
    self._backend = Console(theme=_THEME, stderr=True)
    self._configure_logging()

  @property
  def backend(self) -> Console:
    return self._backend

  def _configure_logging(self) -> None:
    for handler in list(_logger.handlers):
      if isinstance(handler, RichHandler):
        _logger.removeHandler(handler)

    handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    _logger.addHandler(handler)
    if _logger.level == logging.NOTSET:
      _logger.setLevel(logging.INFO)

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects console output and package logging to ``new_console``.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Restores the default standard error console."""
  console.reset()


def get_console() -> Console:
  """
  Returns:
      Console: The active Rich Console.
  """
  return console.backend


def set_verbosity(verbose: bool) -> None:
  """
  Switches the package logger between INFO and DEBUG.

  Args:
      verbose (bool): True to include debug records.
  """
  _logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): Message text; may contain rich markup such as ``[path]``.
  """
  _logger.info(msg, extra={"markup": True})


def log_success(msg: str) -> None:
  """Logs a message at the custom SUCCESS level."""
  _logger.log(SUCCESS_LEVEL_NUM, msg, extra={"markup": True})


def log_warning(msg: str) -> None:
  """Logs a warning."""
  _logger.warning(msg, extra={"markup": True})


def log_error(msg: str) -> None:
  """Logs an error."""
  _logger.error(msg, extra={"markup": True})
