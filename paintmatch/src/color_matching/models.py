from __future__ import annotations

from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any, Protocol

RGB = tuple[int, int, int]
LAB = tuple[float, float, float]


class CatalogItem(Protocol):
    """Anything the matcher can rank: a brand label and a nullable hex color."""

    @property
    def brand(self) -> str: ...

    @property
    def color_hex(self) -> str | None: ...


@dataclass(frozen=True)
class CatalogEntry:
    id: str
    brand: str
    name: str
    type: str | None = None
    color_hex: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "brand": self.brand,
            "name": self.name,
            "type": self.type,
            "color_hex": self.color_hex,
        }


@dataclass(frozen=True)
class MatchResult:
    entry: CatalogItem
    distance: float
    percentage: float
    quality: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "entry": _entry_to_dict(self.entry),
            "distance": float(self.distance),
            "percentage": float(self.percentage),
            "quality": self.quality,
        }


@dataclass(frozen=True)
class MatchReport:
    target: str
    metric: str
    matches: list[MatchResult]
    catalog_source: str
    skipped: int = 0
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": self.target,
            "metric": self.metric,
            "matches": [match.to_dict() for match in self.matches],
            "catalog_source": self.catalog_source,
            "skipped": int(self.skipped),
            "warnings": list(self.warnings),
        }


def _entry_to_dict(entry: CatalogItem) -> dict[str, Any]:
    to_dict = getattr(entry, "to_dict", None)
    if callable(to_dict):
        return dict(to_dict())
    if is_dataclass(entry) and not isinstance(entry, type):
        return asdict(entry)
    return {"brand": entry.brand, "color_hex": entry.color_hex}
