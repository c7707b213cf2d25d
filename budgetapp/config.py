"""Configuration for the Budget Buddy front ends.

Values come from the environment, optionally seeded from a ``.env`` file in the
working directory.
"""

from __future__ import annotations

import logging
import os
from decimal import Decimal
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_LOG_LEVEL = "ERROR"
DEFAULT_MAX_AMOUNT = Decimal("100000")


def load_environment(env_file: Optional[Path] = None) -> None:
    """Load ``.env`` values without overriding variables already set."""
    load_dotenv(dotenv_path=env_file, override=False)


def get_log_level() -> str:
    return os.getenv("BUDGETBUDDY_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def get_log_file() -> Optional[Path]:
    value = os.getenv("BUDGETBUDDY_LOG_FILE")
    return Path(value) if value else None


def get_max_amount() -> Decimal:
    raw = os.getenv("BUDGETBUDDY_MAX_AMOUNT")
    if not raw:
        return DEFAULT_MAX_AMOUNT
    try:
        return Decimal(raw)
    except ArithmeticError:
        logging.getLogger(__name__).warning(
            "Ignoring invalid BUDGETBUDDY_MAX_AMOUNT=%r, using %s", raw, DEFAULT_MAX_AMOUNT
        )
        return DEFAULT_MAX_AMOUNT


def configure_logging(level: Optional[str] = None, log_file: Optional[Path] = None) -> None:
    """Route all ledger logging to stderr, or to ``log_file`` when one is configured."""
    level = (level or get_log_level()).upper()
    log_file = log_file or get_log_file()
    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(level=getattr(logging, level, logging.ERROR), handlers=[handler], force=True)
