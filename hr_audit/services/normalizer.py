from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from hr_audit.models.cells import is_blank
from hr_audit.models.config_models import RenameSentinel

"""Schema normalization by content sniffing.

Source sheets do not have stable headers, so a column is identified by what it
contains: the ordered sentinel table is checked against every cell of the
column and the first sentinel found anywhere in it names the column. The result
is resolved once for the whole sheet and never re-evaluated per row.
"""

__all__ = [
    "normalize_headers",
    "resolve_column",
]


def resolve_column(
    raw_name: str, values: Sequence[Any], sentinels: Sequence[RenameSentinel]
) -> str:
    """Resolve one column name.

    Returns the field of the first sentinel (in declaration order) contained
    in any upper-cased cell of ``values``; otherwise the trimmed raw name.
    """
    texts = [str(v).upper() for v in values if not is_blank(v)]
    for entry in sentinels:
        needle = entry.sentinel.upper()
        if any(needle in text for text in texts):
            return entry.field
    return str(raw_name).strip()


def normalize_headers(
    header: Sequence[str],
    columns: Sequence[Sequence[Any]],
    sentinels: Sequence[RenameSentinel],
) -> list[str]:
    """Map every raw header to its canonical name.

    Args:
        header: Raw header names in sheet order
        columns: Column-major body values, aligned with ``header``
        sentinels: Ordered (sentinel, field) pairs, first match wins

    Returns:
        Resolved names, same length and positions as ``header``
    """
    resolved: list[str] = []
    for index, raw_name in enumerate(header):
        values = columns[index] if index < len(columns) else []
        resolved.append(resolve_column(raw_name, values, sentinels))
    return resolved
