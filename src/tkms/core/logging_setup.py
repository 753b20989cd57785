from __future__ import annotations

import logging

LOG_FORMAT = "[tkms] %(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Install the console handler on the ``tkms`` logger (once)."""
    root = logging.getLogger("tkms")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)

    if not any(getattr(h, "_tkms_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._tkms_handler = True
        root.addHandler(handler)
