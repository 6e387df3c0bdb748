"""easyhighlight - highlight spans that stay anchored while documents change.

The engine tracks highlighted ranges per open document, shifts them as the
user types, and trims or splits them when highlighting is cleared over a
selection. Editor integration (commands, drawing, color prompts) lives
outside this package.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

from easyhighlight.engine import HighlightEngine
from easyhighlight.events import ChangeQueue, pump_changes
from easyhighlight.models import (
    ChangeEvent,
    Highlight,
    InvalidChangeError,
    InvalidRangeError,
    Position,
    Range,
)
from easyhighlight.recorder import Recorder

if TYPE_CHECKING:
    from easyhighlight.config import LoggingConfig

__version__ = "0.1.0"

__all__ = [
    "ChangeEvent",
    "ChangeQueue",
    "Highlight",
    "HighlightEngine",
    "InvalidChangeError",
    "InvalidRangeError",
    "Position",
    "Range",
    "Recorder",
    "pump_changes",
    "setup_logging",
]


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure package logging to the console and, optionally, a file.

    Args:
        config: Logging settings; read from ``get_settings()`` if omitted.
    """
    if config is None:
        from easyhighlight.config import get_settings

        config = get_settings().log

    package_logger = logging.getLogger("easyhighlight")
    package_logger.setLevel(logging.DEBUG)

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    package_logger.addHandler(console_handler)

    if config.log_dir is None:
        return

    config.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = config.log_dir / f"easyhighlight.{os.getpid()}.log"

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    package_logger.addHandler(file_handler)

    package_logger.info("Logging configured. Log file: %s", log_file.absolute())
