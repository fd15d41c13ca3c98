"""Allow ``python -m shuttle``."""

import sys

from .cli import main

sys.exit(main())
