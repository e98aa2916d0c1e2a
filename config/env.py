"""
Purpose: Read tunable overrides from the environment (.env supported).
What it does:
- loads a .env file once (python-dotenv) so local overrides work in dev
- parses typed values and fails loudly when a value cannot be parsed
- warns about variables under a known prefix that nothing reads (typos)

Example in .env:
MATCH_TIMING_WINDOW_MIN=240
REWARDS_COUPON_CHANCE=0.25

Rule: policies decide defaults, this module only parses.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_loaded = False


def load_environment(dotenv_path: Optional[str] = None) -> None:
    """Load .env into os.environ without clobbering variables already set."""
    global _loaded
    if _loaded and dotenv_path is None:
        return
    load_dotenv(dotenv_path=dotenv_path, override=False)
    _loaded = True


def _raw(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_float(name: str, default: float) -> float:
    value = _raw(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


def env_int(name: str, default: int) -> int:
    value = _raw(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def env_int_tuple(name: str, default: Tuple[int, ...]) -> Tuple[int, ...]:
    """Comma separated integers, e.g. REWARDS_MILESTONE_RIDES=5,10,25"""
    value = _raw(name)
    if value is None:
        return default
    try:
        return tuple(int(part) for part in value.split(",") if part.strip())
    except ValueError:
        raise ValueError(f"{name} must be comma separated integers, got {value!r}") from None


def warn_unknown_overrides(prefix: str, known: Iterable[str]) -> List[str]:
    """
    Log a WARNING for each environment variable starting with prefix that is
    not in known. Returns the offending names, sorted.
    """
    known = set(known)
    unknown = sorted(name for name in os.environ if name.startswith(prefix) and name not in known)
    for name in unknown:
        logger.warning(f"Ignoring unknown override {name} (expected one of {sorted(known)})")
    return unknown
