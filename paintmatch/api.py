from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Literal

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from paintmatch.config import configure_logging, settings
from paintmatch.src.color_matching.catalog import CatalogValidationError
from paintmatch.src.color_matching.colorspace import InvalidColorFormat
from paintmatch.src.color_matching.pipeline import PaintMatchingPipeline

logger = logging.getLogger(__name__)


class MatchRequest(BaseModel):
    target: str = Field(..., description="Target color as #RRGGBB")
    top_k: int = Field(default=10, ge=1, description="Maximum paints to return")
    brand_filter: str | None = Field(
        default=None,
        description="Only consider paints of this brand (exact match)",
    )
    catalog_path: str | None = Field(
        default=None,
        description="Optional path or URL to a paint catalog (.csv/.json)",
    )
    metric: Literal["cie76", "rgb"] = Field(
        default="cie76",
        description="cie76 for perceptual Delta E, rgb for Euclidean RGB distance",
    )


class PaintItem(BaseModel):
    id: str | None = None
    brand: str
    name: str | None = None
    type: str | None = None
    color_hex: str | None = None


class MatchItem(BaseModel):
    entry: PaintItem
    distance: float
    percentage: float
    quality: str | None


class MatchResponse(BaseModel):
    target: str
    catalog_source: str
    matches: list[MatchItem]
    skipped: int
    warnings: list[str]


class BrandsResponse(BaseModel):
    brands: list[str]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    yield


app = FastAPI(
    lifespan=lifespan,
    title=settings.app_name,
    version="1.0.0",
    description="Rank catalog paints by perceptual closeness to a color.",
)


def _build_pipeline() -> PaintMatchingPipeline:
    return PaintMatchingPipeline()


def _catalog_path(requested: str | None) -> str | None:
    if requested:
        return requested
    return str(settings.catalog_path) if settings.catalog_path else None


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/match", response_model=MatchResponse)
async def match_paints(payload: MatchRequest) -> MatchResponse:
    pipeline = _build_pipeline()
    try:
        report = await run_in_threadpool(
            pipeline.run,
            payload.target,
            _catalog_path(payload.catalog_path),
            payload.top_k,
            payload.brand_filter,
            payload.metric,
        )
    except InvalidColorFormat as exc:
        raise HTTPException(
            status_code=400, detail=f"invalid_color_format: {exc}"
        ) from exc
    except CatalogValidationError as exc:
        logger.warning("rejected catalog %s: %s", payload.catalog_path, exc)
        raise HTTPException(status_code=400, detail=f"invalid_catalog: {exc}") from exc

    matches = [
        MatchItem(
            entry=PaintItem(
                id=getattr(match.entry, "id", None),
                brand=match.entry.brand,
                name=getattr(match.entry, "name", None),
                type=getattr(match.entry, "type", None),
                color_hex=match.entry.color_hex,
            ),
            distance=float(match.distance),
            percentage=float(match.percentage),
            quality=match.quality,
        )
        for match in report.matches
    ]
    return MatchResponse(
        target=report.target,
        catalog_source=report.catalog_source,
        matches=matches,
        skipped=report.skipped,
        warnings=report.warnings,
    )


@app.get("/brands", response_model=BrandsResponse)
async def list_catalog_brands(
    catalog_path: str | None = Query(default=None),
) -> BrandsResponse:
    pipeline = _build_pipeline()
    try:
        brands = await run_in_threadpool(pipeline.brands, _catalog_path(catalog_path))
    except CatalogValidationError as exc:
        raise HTTPException(status_code=400, detail=f"invalid_catalog: {exc}") from exc
    return BrandsResponse(brands=brands)
