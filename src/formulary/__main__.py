"""Allow running as `python -m formulary`."""

import sys

from formulary.cli import main

sys.exit(main())
