from __future__ import annotations

import logging
from pathlib import Path

from .catalog import list_brands, load_catalog
from .colorspace import normalize_hex
from .matcher import count_incomparable, find_matches
from .models import CatalogEntry, MatchReport

logger = logging.getLogger(__name__)


class PaintMatchingPipeline:
    def __init__(self, fallback_catalog_path: str | Path | None = None) -> None:
        self.default_fallback_catalog_path = (
            Path(__file__).resolve().parents[2] / "data" / "paints.csv"
        )
        if fallback_catalog_path is None:
            fallback_catalog_path = self.default_fallback_catalog_path
        self.fallback_catalog_path = Path(fallback_catalog_path)

    def load(self, catalog_path: str | None) -> tuple[list[CatalogEntry], str]:
        if catalog_path is None:
            return load_catalog(self.fallback_catalog_path), "bundled"
        return load_catalog(catalog_path), "user"

    def brands(self, catalog_path: str | None = None) -> list[str]:
        catalog, _ = self.load(catalog_path)
        return list_brands(catalog)

    def run(
        self,
        target: str,
        catalog_path: str | None = None,
        top_k: int = 10,
        brand_filter: str | None = None,
        metric: str = "cie76",
    ) -> MatchReport:
        canonical_target = normalize_hex(target)
        catalog, catalog_source = self.load(catalog_path)

        warnings: list[str] = []
        if brand_filter and brand_filter not in list_brands(catalog):
            warnings.append("unknown_brand")

        matches = find_matches(
            target,
            catalog,
            top_k=top_k,
            brand_filter=brand_filter,
            metric=metric,
        )
        skipped = count_incomparable(catalog, brand_filter)
        if not matches:
            warnings.append("no_comparable_paints")

        logger.debug(
            "matched %s against %d paints (%s): %d results, %d skipped",
            canonical_target,
            len(catalog),
            catalog_source,
            len(matches),
            skipped,
        )

        return MatchReport(
            target=canonical_target,
            metric=metric,
            matches=matches,
            catalog_source=catalog_source,
            skipped=skipped,
            warnings=warnings,
        )
