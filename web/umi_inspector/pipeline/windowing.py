"""
Windowing utilities.

Counting may split each identity's stream into fixed, tumbling windows.
A window is identified by its start: the timestamp truncated to a multiple
of the width. All times are epoch seconds (UTC).
"""

from __future__ import annotations

import math
from typing import Optional


def window_start(ts: float, width: Optional[float]) -> Optional[float]:
    """
    Return the start of the window holding ts, or None when width is 0/None.

    None means "no windowing": every timestamp shares the same (absent)
    window. A start of 0.0 is a real window and must not be confused with it.
    """
    if not width or width <= 0:
        return None
    return math.floor(ts / width) * float(width)
