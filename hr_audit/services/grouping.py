from __future__ import annotations

from collections.abc import Iterable

from hr_audit.models.config_models import INCLUDED_ONLY, RETAIN_ALL
from hr_audit.models.evaluated_record import EvaluatedRecord
from hr_audit.models.manager_batch import NO_EMAIL_KEY, ManagerBatch

"""Batch grouping: one batch per manager email, in first-encounter order."""

__all__ = [
    "group_batches",
]


def group_batches(
    records: Iterable[EvaluatedRecord], policy: str = RETAIN_ALL
) -> list[ManagerBatch]:
    """Partition evaluated records by manager.

    Parameters
    ----------
    records: evaluated records in source order
    policy: ``retain_all`` keeps every record (flags decide downstream);
        ``included_only`` drops records with no true condition first

    Records without a manager email are grouped under ``NoEmail``. Member order
    is the input order; batches are never re-sorted.
    """
    if policy not in (RETAIN_ALL, INCLUDED_ONLY):
        raise ValueError(f"unknown inclusion policy: {policy}")

    members: dict[str, list[EvaluatedRecord]] = {}
    names: dict[str, str] = {}
    for evaluated in records:
        if policy == INCLUDED_ONLY and not evaluated.should_include:
            continue
        key = evaluated.record.manager_email or NO_EMAIL_KEY
        members.setdefault(key, []).append(evaluated)
        if evaluated.record.manager_name and key not in names:
            names[key] = evaluated.record.manager_name

    return [
        ManagerBatch(manager_email=key, manager_name=names.get(key), records=tuple(group))
        for key, group in members.items()
    ]
