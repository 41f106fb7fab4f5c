from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from skimage.color import deltaE_cie76

from .colorspace import hex_to_rgb, is_valid_hex, rgb_to_lab
from .models import RGB, CatalogItem, MatchResult
from .scoring import cie76_percentage, quality_band, rgb_percentage

logger = logging.getLogger(__name__)

METRICS = ("cie76", "rgb")


def find_matches(
    target: str,
    catalog: Sequence[CatalogItem],
    top_k: int = 10,
    brand_filter: str | None = None,
    metric: str = "cie76",
) -> list[MatchResult]:
    """Rank catalog entries by closeness to ``target``, closest first.

    Entries whose ``color_hex`` is missing or malformed are left out. Ties keep
    the catalog order. Raises ``InvalidColorFormat`` for a malformed target.
    """
    if metric not in METRICS:
        raise ValueError(f"unknown metric '{metric}', expected one of {METRICS}")
    if top_k < 1:
        raise ValueError("top_k must be a positive integer")

    target_rgb = hex_to_rgb(target)
    candidates, candidate_rgb = comparable_candidates(catalog, brand_filter)
    if not candidates:
        return []

    if metric == "cie76":
        distances = _cie76_distances(target_rgb, candidate_rgb)
        percentages = cie76_percentage(distances)
    else:
        distances = _rgb_distances(target_rgb, candidate_rgb)
        percentages = rgb_percentage(distances)

    order = np.argsort(distances, kind="stable")[:top_k]
    return [
        MatchResult(
            entry=candidates[int(idx)],
            distance=float(distances[int(idx)]),
            percentage=float(percentages[int(idx)]),
            quality=quality_band(float(distances[int(idx)]))
            if metric == "cie76"
            else None,
        )
        for idx in order
    ]


def comparable_candidates(
    catalog: Sequence[CatalogItem],
    brand_filter: str | None = None,
) -> tuple[list[CatalogItem], np.ndarray]:
    """Apply the brand filter and drop entries whose color cannot be parsed."""
    candidates: list[CatalogItem] = []
    rgb_rows: list[RGB] = []
    skipped = 0

    for entry in catalog:
        if brand_filter and entry.brand != brand_filter:
            continue
        if not is_valid_hex(entry.color_hex):
            skipped += 1
            continue
        candidates.append(entry)
        rgb_rows.append(hex_to_rgb(entry.color_hex))

    if skipped:
        logger.debug("skipped %d catalog entries without a comparable color", skipped)

    return candidates, np.asarray(rgb_rows, dtype=np.int64).reshape(-1, 3)


def count_incomparable(
    catalog: Sequence[CatalogItem], brand_filter: str | None = None
) -> int:
    return sum(
        1
        for entry in catalog
        if not (brand_filter and entry.brand != brand_filter)
        and not is_valid_hex(entry.color_hex)
    )


def _cie76_distances(target_rgb: RGB, candidate_rgb: np.ndarray) -> np.ndarray:
    # Convert each distinct color once so equal colors share one Lab row.
    stacked = np.vstack([np.asarray(target_rgb, dtype=np.int64), candidate_rgb])
    unique_rgb, inverse = np.unique(stacked, axis=0, return_inverse=True)
    inverse = inverse.reshape(-1)
    unique_lab = rgb_to_lab(unique_rgb)

    target_lab = unique_lab[inverse[0]].reshape(1, 3)
    candidate_lab = unique_lab[inverse[1:]]
    return np.asarray(deltaE_cie76(target_lab, candidate_lab), dtype=np.float64)


def _rgb_distances(target_rgb: RGB, candidate_rgb: np.ndarray) -> np.ndarray:
    diff = candidate_rgb.astype(np.float64) - np.asarray(target_rgb, dtype=np.float64)
    return np.sqrt(np.sum(np.square(diff), axis=-1))
