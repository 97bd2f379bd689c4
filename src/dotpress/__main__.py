"""Allow ``python -m dotpress``."""

import sys

from dotpress.cli import main

sys.exit(main())
