from .assemble import handle_assemble
from .compile import handle_compile
from .scan import handle_scan

__all__ = [
  "handle_assemble",
  "handle_compile",
  "handle_scan",
]
