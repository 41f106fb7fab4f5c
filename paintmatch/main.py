from __future__ import annotations

import argparse
import json

from paintmatch.config import configure_logging, settings
from paintmatch.src.color_matching.catalog import CatalogValidationError
from paintmatch.src.color_matching.colorspace import InvalidColorFormat
from paintmatch.src.color_matching.io import write_report_json
from paintmatch.src.color_matching.matcher import METRICS
from paintmatch.src.color_matching.pipeline import PaintMatchingPipeline


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paintmatch",
        description="Find the catalog paints closest to a color (CIE76 Delta E).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING...). Defaults to PAINTMATCH_LOG_LEVEL.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    match = subparsers.add_parser(
        "match",
        help="Rank catalog paints by closeness to a target color.",
    )
    match.add_argument(
        "--color", required=True, help="Target color as #RRGGBB (the '#' is optional)."
    )
    match.add_argument(
        "--catalog",
        default=None,
        help="Path or URL to a paint catalog (.csv/.json). Defaults to the bundled one.",
    )
    match.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="Maximum number of paints to return.",
    )
    match.add_argument(
        "--brand",
        default=None,
        help="Only consider paints from this brand (exact, case-sensitive).",
    )
    match.add_argument(
        "--metric",
        choices=METRICS,
        default=None,
        help="Distance metric. cie76 is perceptual, rgb is plain Euclidean RGB.",
    )
    match.add_argument(
        "--out",
        default=None,
        help="Optional JSON output path. If omitted, prints JSON to stdout.",
    )

    brands = subparsers.add_parser("brands", help="List the brands in a catalog.")
    brands.add_argument(
        "--catalog",
        default=None,
        help="Path or URL to a paint catalog (.csv/.json). Defaults to the bundled one.",
    )

    return parser


def _catalog_arg(value: str | None) -> str | None:
    if value:
        return value
    return str(settings.catalog_path) if settings.catalog_path else None


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    pipeline = PaintMatchingPipeline()

    if args.command == "match":
        top_k = args.top_k if args.top_k is not None else settings.default_top_k
        if top_k < 1:
            parser.error("--top-k must be a positive integer")
        try:
            report = pipeline.run(
                target=args.color,
                catalog_path=_catalog_arg(args.catalog),
                top_k=top_k,
                brand_filter=args.brand,
                metric=args.metric or settings.default_metric,
            )
        except InvalidColorFormat as exc:
            parser.error(str(exc))
        except CatalogValidationError as exc:
            parser.error(f"invalid catalog: {exc}")

        if args.out:
            write_report_json(report, args.out)
        else:
            print(json.dumps(report.to_dict(), indent=2))
        return

    if args.command == "brands":
        try:
            brands = pipeline.brands(_catalog_arg(args.catalog))
        except CatalogValidationError as exc:
            parser.error(f"invalid catalog: {exc}")
        print(json.dumps({"brands": brands}, indent=2))
        return

    parser.error("unknown command")


if __name__ == "__main__":
    main()
