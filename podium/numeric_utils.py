from __future__ import annotations

import math
from typing import Any


def as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        parsed = float(value)
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def as_int(value: Any) -> int | None:
    parsed = as_float(value)
    if parsed is None:
        return None
    return int(round(parsed))


def non_negative_float(value: Any) -> float:
    parsed = as_float(value)
    if parsed is None or parsed < 0:
        return 0.0
    return parsed


def non_negative_int(value: Any) -> int:
    parsed = as_int(value)
    if parsed is None or parsed < 0:
        return 0
    return parsed
