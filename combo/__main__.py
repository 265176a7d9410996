"""Module entrypoint for ``python -m combo``.

All argument parsing and session setup happen in ``combo.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
