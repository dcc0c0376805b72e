"""Minimal IO helpers for the optimizer runner."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple


def load_payload(path: Path) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Read ``{"facilities": [...], "regions": [...]}`` from a JSON file."""
    if not path.is_file():
        raise FileNotFoundError(f"Input payload missing: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Input payload must be a JSON object: {path}")
    facilities = data.get("facilities") or []
    regions = data.get("regions") or data.get("region_summaries") or []
    return list(facilities), list(regions)


def write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_to_json(payload), encoding="utf-8")


def _to_json(payload: object) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)
