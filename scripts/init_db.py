from __future__ import annotations

import sys

from tkms.cli import init_db_main

if __name__ == "__main__":
    sys.exit(init_db_main())
