from __future__ import annotations

import logging
import os
from typing import Optional

from .search import SEARCH_DEPTH

_TRUTHY = ('1', 'true', 'yes', 'on')


def env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def search_depth() -> int:
    """Search depth for the HARD tier, from PARLOR_SEARCH_DEPTH (default 5)."""
    raw = os.getenv('PARLOR_SEARCH_DEPTH')
    if not raw:
        return SEARCH_DEPTH
    try:
        depth = int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("ignoring non-integer PARLOR_SEARCH_DEPTH=%r", raw)
        return SEARCH_DEPTH
    return depth if depth >= 1 else SEARCH_DEPTH


def default_difficulty() -> str:
    return os.getenv('PARLOR_DEFAULT_DIFFICULTY', 'medium').strip().lower()


def configure_logging(level: Optional[int] = None) -> None:
    """Basic logging setup; PARLOR_DEBUG=1 turns on DEBUG output from the search and AI modules."""
    if level is None:
        level = logging.DEBUG if env_flag('PARLOR_DEBUG') else logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
