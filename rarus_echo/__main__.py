"""Package entry point for ``python -m rarus_echo``.

Delegates to the CLI's main() and exits with its return code.
"""

import sys

from rarus_echo.cli import main

if __name__ == "__main__":
    sys.exit(main())
