from .catalog import CatalogValidationError, list_brands, load_catalog
from .colorspace import InvalidColorFormat, delta_e_cie76, hex_to_lab, parse_hex
from .matcher import find_matches
from .models import CatalogEntry, CatalogItem, MatchReport, MatchResult
from .pipeline import PaintMatchingPipeline

__all__ = [
    "CatalogEntry",
    "CatalogItem",
    "CatalogValidationError",
    "InvalidColorFormat",
    "MatchReport",
    "MatchResult",
    "PaintMatchingPipeline",
    "delta_e_cie76",
    "find_matches",
    "hex_to_lab",
    "list_brands",
    "load_catalog",
    "parse_hex",
]
