"""Allow running with: python -m scrimflow"""

import sys

from .cli import main

sys.exit(main())
