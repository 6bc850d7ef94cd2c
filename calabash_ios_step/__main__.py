"""
Entry point for `python -m calabash_ios_step`.
"""

import sys

from calabash_ios_step.main import main

if __name__ == "__main__":
    sys.exit(main())
