"""
Utility helpers: logging config and identity-code text conversion.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .errors import InvalidCodeError

_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
_CODE_HEX_LEN = 12


def init_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    name: str = "umi_inspector",
) -> logging.Logger:
    """Configure a console logger + optional rotating file handler."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.propagate = False  # avoid duplicate logs if root has handlers

    # Console
    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(ch)

    # File (rotating)
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5)
        fh.setLevel(log_level)
        fh.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(fh)

    return logger


def parse_code(text: str) -> bytes:
    """Decode a 12-character hex identity code into its 6 bytes."""
    text = text.strip()
    if len(text) != _CODE_HEX_LEN:
        raise InvalidCodeError(
            f"{text}: invalid code length (should have {_CODE_HEX_LEN} characters)"
        )
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise InvalidCodeError(f"{text}: invalid hex code") from e
