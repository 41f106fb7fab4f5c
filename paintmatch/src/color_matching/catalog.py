from __future__ import annotations

import csv
import io
import json
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from urllib.parse import urlparse

import requests

from .colorspace import is_valid_hex, normalize_hex
from .models import CatalogEntry, CatalogItem

logger = logging.getLogger(__name__)

PAINT_TYPES = (
    "base",
    "layer",
    "shade",
    "dry",
    "technical",
    "contrast",
    "air",
    "spray",
)

_FIELD_ALIASES = {"hex": "color_hex", "colour_hex": "color_hex", "color": "color_hex"}


class CatalogValidationError(ValueError):
    pass


def load_catalog(source: str | Path) -> list[CatalogEntry]:
    """Load paints from a local or HTTP(S) ``.csv``/``.json`` catalog."""
    text, suffix, label = _read_source(source)

    if suffix == ".csv":
        records = _read_csv(text, label)
    elif suffix == ".json":
        records = _read_json(text, label)
    else:
        raise CatalogValidationError(
            f"unsupported catalog format '{suffix}'. Use .csv or .json"
        )

    return _build_entries(records, label)


def list_brands(catalog: Iterable[CatalogItem]) -> list[str]:
    return sorted({entry.brand for entry in catalog if entry.brand})


def dump_catalog(entries: Sequence[CatalogEntry], output_path: str | Path) -> None:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps({"paints": [entry.to_dict() for entry in entries]}, indent=2)
    path.write_text(payload + "\n", encoding="utf-8")


def _read_source(source: str | Path) -> tuple[str, str, str]:
    source_str = str(source)
    if source_str.startswith(("http://", "https://")):
        response = requests.get(source_str, timeout=10)
        response.raise_for_status()
        suffix = Path(urlparse(source_str).path).suffix.lower()
        return response.text, suffix, source_str

    path = Path(source)
    if not path.exists():
        raise CatalogValidationError(f"catalog file does not exist: {path}")
    return path.read_text(encoding="utf-8"), path.suffix.lower(), str(path)


def _read_csv(text: str, label: str) -> list[tuple[str, dict[str, object]]]:
    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames:
        raise CatalogValidationError(f"catalog csv has no header: {label}")
    return [(f"{label}:{idx}", row) for idx, row in enumerate(reader, start=2)]


def _read_json(text: str, label: str) -> list[tuple[str, dict[str, object]]]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogValidationError(f"catalog at {label} is not valid json") from exc

    if isinstance(payload, dict):
        if "paints" not in payload or not isinstance(payload["paints"], list):
            raise CatalogValidationError(
                f"json catalog at {label} must be a list or include a 'paints' list"
            )
        records = payload["paints"]
    elif isinstance(payload, list):
        records = payload
    else:
        raise CatalogValidationError(
            f"json catalog at {label} must be a list or object with 'paints'"
        )

    rows: list[tuple[str, dict[str, object]]] = []
    for idx, record in enumerate(records, start=1):
        if not isinstance(record, dict):
            raise CatalogValidationError(
                f"invalid catalog entry at {label}:{idx} (expected object)"
            )
        rows.append((f"{label}:{idx}", record))
    return rows


def _build_entries(
    records: list[tuple[str, dict[str, object]]], label: str
) -> list[CatalogEntry]:
    entries: list[CatalogEntry] = []
    seen: set[str] = set()

    for location, record in records:
        entry = _parse_entry(record, location)
        if entry is None:
            continue
        key = f"{entry.brand}|{entry.name}"
        if key in seen:
            logger.warning("%s: duplicate paint '%s', keeping the first", location, key)
            continue
        seen.add(key)
        entries.append(entry)

    logger.info("loaded %d paints from %s", len(entries), label)
    return entries


def _parse_entry(raw_entry: dict[str, object], location: str) -> CatalogEntry | None:
    normalized: dict[str, object] = {}
    for key, value in raw_entry.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        normalized[_FIELD_ALIASES.get(name, name)] = value

    brand = _as_clean_str(normalized.get("brand"))
    name = _as_clean_str(normalized.get("name"))
    if not brand or not name:
        logger.warning("%s: skipping paint without brand or name", location)
        return None

    paint_type = _as_clean_str(normalized.get("type"))
    if paint_type:
        paint_type = paint_type.lower()
        if paint_type not in PAINT_TYPES:
            logger.warning("%s: invalid paint type '%s' for %s", location, paint_type, name)
            return None

    color_hex = _as_clean_str(normalized.get("color_hex"))
    if color_hex and is_valid_hex(color_hex):
        color_hex = normalize_hex(color_hex)

    paint_id = _as_clean_str(normalized.get("id")) or f"{brand}|{name}"
    return CatalogEntry(
        id=paint_id, brand=brand, name=name, type=paint_type, color_hex=color_hex
    )


def _as_clean_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None
