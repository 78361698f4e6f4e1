import logging
import os
from typing import Optional


def setup_logging(level: Optional[str] = None) -> None:
    """
    Console logging for scripts using the client.

    Uses LOG_LEVEL from the environment when level is None (default INFO).
    """
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
