from __future__ import annotations

import json
from pathlib import Path

from .models import MatchReport


def write_report_json(report: MatchReport, output_path: str | Path) -> None:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(report.to_dict(), indent=2)
    path.write_text(payload + "\n", encoding="utf-8")
