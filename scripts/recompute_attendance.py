from __future__ import annotations

import sys

from tkms.cli import recompute_main

if __name__ == "__main__":
    sys.exit(recompute_main())
