"""Allow ``python -m dvsa_bot``."""

import sys

from .cli import main

sys.exit(main())
