from __future__ import annotations

import copy
from pathlib import Path
from typing import Dict
import yaml

DEFAULT_CONFIG: Dict[str, object] = {
    "row_loaders": {
        "csv": "budget_analyzer.loaders.csv_rows.CSVRowLoader",
        "xlsx": "budget_analyzer.loaders.excel_rows.ExcelRowLoader",
        "xls": "budget_analyzer.loaders.excel_rows.ExcelRowLoader",
    },
    "output_modules": {
        "csv": "budget_analyzer.outputs.csv_output.CSVOutput",
        "excel": "budget_analyzer.outputs.excel_output.ExcelOutput",
    },
    "output_dir": "data",
    "log_level": "WARNING",
    "processing": {
        "categorize_delay": 0,
        "recommend_delay": 0,
    },
    # None keeps the built-in table; otherwise a list of {name, keywords}
    "categories": None,
}


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


def load_config(path: str | Path | None = None) -> Dict[str, object]:
    """Load a YAML config file on top of DEFAULT_CONFIG.

    A missing path (or file) yields the defaults.
    """
    if path is None:
        return copy.deepcopy(DEFAULT_CONFIG)
    target = Path(path)
    if not target.exists():
        return copy.deepcopy(DEFAULT_CONFIG)
    with target.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {target} must contain a mapping")
    return _merge_defaults(data, DEFAULT_CONFIG)


def processing_delays(config: Dict[str, object]) -> tuple[float, float]:
    processing = config.get("processing") or {}
    return (
        float(processing.get("categorize_delay") or 0),  # type: ignore[union-attr]
        float(processing.get("recommend_delay") or 0),  # type: ignore[union-attr]
    )
