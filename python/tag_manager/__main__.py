"""Allow running the tag manager with ``python -m tag_manager``."""

import sys

from tag_manager.main import main

sys.exit(main())
