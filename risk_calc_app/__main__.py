"""Allow ``python -m risk_calc_app``."""

import sys

from .cli import main

sys.exit(main())
