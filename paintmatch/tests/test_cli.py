from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]


def _run(*args, check=True):
    cmd = [sys.executable, "-m", "paintmatch.main", *args]
    return subprocess.run(
        cmd, cwd=REPO_ROOT, check=check, capture_output=True, text=True
    )


def test_cli_match_smoke(tmp_path):
    catalog_path = tmp_path / "paints.csv"
    catalog_path.write_text(
        "brand,name,type,color_hex\n"
        "Citadel,Macragge Blue,base,#1F2E63\n"
        "Citadel,Mephiston Red,base,#7E1719\n",
        encoding="utf-8",
    )
    out_path = tmp_path / "result.json"

    completed = _run(
        "match",
        "--color",
        "#3b82f6",
        "--catalog",
        str(catalog_path),
        "--top-k",
        "1",
        "--out",
        str(out_path),
    )

    assert completed.returncode == 0
    payload = json.loads(out_path.read_text(encoding="utf-8"))
    assert payload["catalog_source"] == "user"
    assert len(payload["matches"]) == 1
    assert payload["matches"][0]["entry"]["name"] == "Macragge Blue"
    assert payload["matches"][0]["percentage"] > 50.0


def test_cli_prints_to_stdout_with_bundled_catalog():
    completed = _run("match", "--color", "231f20", "--brand", "Citadel", "--top-k", "2")

    payload = json.loads(completed.stdout)
    assert payload["catalog_source"] == "bundled"
    assert payload["matches"][0]["entry"]["name"] == "Abaddon Black"
    assert payload["matches"][0]["distance"] == 0.0


def test_cli_rejects_invalid_color():
    completed = _run("match", "--color", "notacolor", check=False)

    assert completed.returncode == 2
    assert "invalid hex color" in completed.stderr


def test_cli_lists_brands():
    completed = _run("brands")

    assert json.loads(completed.stdout) == {
        "brands": ["Army Painter", "Citadel", "Vallejo"]
    }
