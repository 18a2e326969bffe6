"""
Module execution entry point.

Allows running with: python -m mintgate_cli
"""

import sys
from mintgate_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
