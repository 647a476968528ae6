"""
Entry point for module execution (``python -m stencil_styles``).

This module delegates execution to the CLI handler in ``stencil_styles.cli.__main__``.
"""

import sys
from stencil_styles.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
