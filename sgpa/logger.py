# sgpa/logger.py
import logging
import sys
from typing import Optional

from sgpa.config import CONFIG


def resolve_level(name: str) -> int:
    # unknown names fall back to INFO
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.INFO


_logger = logging.getLogger("sgpa")
if not _logger.handlers:
    _logger.setLevel(resolve_level(CONFIG.LOG_LEVEL))
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if name:
        return _logger.getChild(name)
    return _logger
