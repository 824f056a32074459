"""Allow ``python -m splashcraft``."""

import sys

from .cli import main

sys.exit(main())
