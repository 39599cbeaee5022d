from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from hr_audit.models.manager_batch import ManagerBatch

"""Hand-off of the grouped output to the delivery side.

The batches are written as one JSON document (a list of batch objects) that
report and notification tooling consumes.
"""

__all__ = [
    "batches_to_json",
    "write_batches",
]


def batches_to_json(batches: Sequence[ManagerBatch]) -> str:
    # default=str covers time-of-day cells and other non-JSON scalars
    return json.dumps([b.to_dict() for b in batches], ensure_ascii=False, indent=2, default=str)


def write_batches(batches: Sequence[ManagerBatch], path: Path) -> Path:
    """Write batches to ``path`` (parent directories are created)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(batches_to_json(batches) + "\n", encoding="utf-8")
    return path
