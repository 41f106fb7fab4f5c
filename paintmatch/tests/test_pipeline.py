from __future__ import annotations

import json

import pytest

from paintmatch.src.color_matching.colorspace import InvalidColorFormat
from paintmatch.src.color_matching.io import write_report_json
from paintmatch.src.color_matching.pipeline import PaintMatchingPipeline


def _write_catalog(path):
    path.write_text(
        "brand,name,type,color_hex\n"
        "Citadel,Macragge Blue,base,#1F2E63\n"
        "Citadel,Mephiston Red,base,#7E1719\n"
        "Citadel,'Ardcoat,technical,\n"
        "Vallejo,Flat Red,layer,#A3191A\n",
        encoding="utf-8",
    )
    return path


def test_bundled_catalog_is_used_without_a_path():
    report = PaintMatchingPipeline().run("#1f2e63", top_k=3)

    assert report.catalog_source == "bundled"
    assert report.target == "#1F2E63"
    assert report.matches[0].entry.name == "Macragge Blue"
    assert report.matches[0].percentage == 100.0
    assert report.skipped == 2
    assert report.warnings == []


def test_user_catalog_with_brand_filter(tmp_path):
    catalog = _write_catalog(tmp_path / "paints.csv")

    report = PaintMatchingPipeline().run(
        "#b01010", catalog_path=str(catalog), top_k=5, brand_filter="Citadel"
    )

    assert report.catalog_source == "user"
    assert [m.entry.name for m in report.matches] == ["Mephiston Red", "Macragge Blue"]
    assert report.skipped == 1


def test_fallback_path_override(tmp_path):
    catalog = _write_catalog(tmp_path / "fallback.csv")

    report = PaintMatchingPipeline(fallback_catalog_path=catalog).run("#A3191A", top_k=1)

    assert report.catalog_source == "bundled"
    assert report.matches[0].entry.name == "Flat Red"


def test_unknown_brand_reports_warnings(tmp_path):
    catalog = _write_catalog(tmp_path / "paints.csv")

    report = PaintMatchingPipeline().run(
        "#000000", catalog_path=str(catalog), brand_filter="Tamiya"
    )

    assert report.matches == []
    assert report.warnings == ["unknown_brand", "no_comparable_paints"]


def test_invalid_target_fails_before_loading_catalog(tmp_path):
    with pytest.raises(InvalidColorFormat):
        PaintMatchingPipeline().run("#12", catalog_path=str(tmp_path / "missing.csv"))


def test_brands_lists_catalog_brands(tmp_path):
    catalog = _write_catalog(tmp_path / "paints.csv")

    assert PaintMatchingPipeline().brands(str(catalog)) == ["Citadel", "Vallejo"]
    assert "Citadel" in PaintMatchingPipeline().brands()


def test_report_json_is_written(tmp_path):
    catalog = _write_catalog(tmp_path / "paints.csv")
    report = PaintMatchingPipeline().run("#3b82f6", catalog_path=str(catalog), top_k=1)

    out = tmp_path / "reports" / "match.json"
    write_report_json(report, out)

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["target"] == "#3B82F6"
    assert payload["metric"] == "cie76"
    assert payload["matches"][0]["entry"]["name"] == "Macragge Blue"
    assert payload["matches"][0]["quality"] == "fair"
    assert payload["matches"][0]["percentage"] > 50.0
