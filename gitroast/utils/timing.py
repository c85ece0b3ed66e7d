from __future__ import annotations

import time
from typing import Optional


def now_perf() -> float:
    return time.perf_counter()


def elapsed_ms(start: float, *, end: Optional[float] = None) -> int:
    if end is None:
        end = time.perf_counter()
    return max(0, int((float(end) - float(start)) * 1000))


def now_epoch_ms() -> int:
    return int(time.time() * 1000)
