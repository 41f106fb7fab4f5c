from __future__ import annotations

import numpy as np

# Delta E bands shown next to each match.
IMPERCEPTIBLE_BELOW = 2.0
EXCELLENT_BELOW = 5.0
GOOD_BELOW = 10.0

# Distance between #000000 and #FFFFFF.
MAX_RGB_DISTANCE = 441.67


def cie76_percentage(distance: float | np.ndarray) -> float | np.ndarray:
    """One percentage point lost per unit of Delta E, clamped to [0, 100]."""
    scores = np.clip(100.0 - np.asarray(distance, dtype=np.float64), 0.0, 100.0)
    return float(scores) if scores.ndim == 0 else scores


def rgb_percentage(distance: float | np.ndarray) -> float | np.ndarray:
    distance = np.asarray(distance, dtype=np.float64)
    scores = np.clip(100.0 - (distance / MAX_RGB_DISTANCE) * 100.0, 0.0, 100.0)
    return float(scores) if scores.ndim == 0 else scores


def quality_band(distance: float) -> str:
    if distance < IMPERCEPTIBLE_BELOW:
        return "imperceptible"
    if distance < EXCELLENT_BELOW:
        return "excellent"
    if distance < GOOD_BELOW:
        return "good"
    return "fair"
