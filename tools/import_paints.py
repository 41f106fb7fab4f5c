import argparse
import sys
from collections import Counter
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from paintmatch.config import configure_logging
from paintmatch.src.color_matching.catalog import (
    CatalogValidationError,
    dump_catalog,
    load_catalog,
)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Merge a paint CSV export into a JSON paint catalog."
    )
    parser.add_argument(
        "--input-csv",
        required=True,
        help="CSV with brand,name,type,color_hex columns (id optional).",
    )
    parser.add_argument(
        "--catalog",
        required=True,
        help="JSON catalog to merge into. Created if it does not exist.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be inserted without writing the catalog.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level for row validation messages.",
    )
    return parser.parse_args(argv)


def merge_paints(existing, incoming):
    existing_keys = {f"{p.brand}|{p.name}" for p in existing}
    to_insert = [p for p in incoming if f"{p.brand}|{p.name}" not in existing_keys]
    return list(existing) + to_insert, to_insert


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)

    catalog_path = Path(args.catalog)
    try:
        incoming = load_catalog(args.input_csv)
        existing = load_catalog(catalog_path) if catalog_path.exists() else []
    except CatalogValidationError as exc:
        raise SystemExit(f"import failed: {exc}") from exc

    print(f"Parsed {len(incoming)} paints from {args.input_csv}")

    merged, inserted = merge_paints(existing, incoming)
    if not inserted:
        print("All paints already exist. No import needed.")
        return 0

    if not args.dry_run:
        dump_catalog(merged, catalog_path)

    by_type = Counter(p.type or "unknown" for p in inserted)
    print(f"{'Would insert' if args.dry_run else 'Inserted'} {len(inserted)} new paints:")
    for paint_type, count in sorted(by_type.items()):
        print(f"  {paint_type}: {count}")
    print(f"Catalog now holds {len(merged) if not args.dry_run else len(existing)} paints.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
