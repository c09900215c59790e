"""
Results Export
==============
Writes a roster result to JSON for the web client or later analysis.
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from roster.models.result import RosterResult
from roster.utils.logging_setup import get_logger

logger = get_logger("roster.io.results_export")


def result_payload(result: RosterResult, run_name: Optional[str] = None) -> Dict[str, Any]:
    """Wire-format result plus run metadata and a summary."""
    payload = result.to_dict()
    payload["meta"] = {
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "run_name": run_name,
    }
    payload["summary"] = result.summary()
    return payload


def export_result_json(
    result: RosterResult,
    path: Union[str, Path],
    run_name: Optional[str] = None,
) -> Path:
    """
    Export a result to a JSON file.

    Returns:
        Path to the written file
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(result_payload(result, run_name), f, indent=2, ensure_ascii=False)

    logger.info(f"Results exported to {output_path}")
    return output_path
