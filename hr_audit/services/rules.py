from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta
from typing import Any

from hr_audit.models.cells import cell_text, is_blank, is_missing_email, is_numeric
from hr_audit.models.config_models import (
    EMAIL,
    JOB_PROPERTY,
    RETIRE_CAUSE,
    RETIRE_DATE,
    EngineConfig,
)
from hr_audit.models.employee_record import EmployeeRecord
from hr_audit.models.evaluated_record import EvaluatedRecord
from .duplicates import DuplicateIndex

"""Rule evaluation.

Five independent conditions are evaluated per record; any combination may be
true at once:

1. retire inconsistency: exactly one of Retire Date / Retire Cause is blank
2. missing critical field: active employee (no Retire Date) with a blank
   important field
3. identity duplicate
4. email reused under the same manager
5. designated job category without an email

Each true condition contributes exactly one phrase to the reason string, in
the order above.
"""

__all__ = [
    "REASON_SEPARATOR",
    "build_reason",
    "evaluate_record",
    "render_dates",
    "serial_to_iso",
]

REASON_SEPARATOR = "; "
MISSING_FIELDS_SEPARATOR = ", "


def serial_to_iso(serial: float | int, epoch: date) -> str:
    """Convert a spreadsheet serial day number to ``YYYY-MM-DD``.

    The serial is the count of whole days since ``epoch``; the fractional part
    (time of day) is ignored.
    """
    return (epoch + timedelta(days=int(serial))).isoformat()


def render_dates(values: dict[str, Any], date_fields: Sequence[str], epoch: date) -> dict[str, Any]:
    """Copy of ``values`` with numeric date fields rendered as ISO dates."""
    rendered = dict(values)
    for name in date_fields:
        value = rendered.get(name)
        if not is_numeric(value):
            continue
        try:
            rendered[name] = serial_to_iso(value, epoch)
        except OverflowError:
            # Out of calendar range: keep the raw serial
            continue
    return rendered


def build_reason(flags: Sequence[bool], phrases: Sequence[str]) -> str:
    return REASON_SEPARATOR.join(p for flag, p in zip(flags, phrases) if flag)


def _missing_important(record: EmployeeRecord, important: Sequence[str]) -> list[str]:
    return [name for name in important if is_blank(record.get(name))]


def evaluate_record(
    record: EmployeeRecord, index: DuplicateIndex, config: EngineConfig
) -> EvaluatedRecord:
    retire_date_blank = is_blank(record.get(RETIRE_DATE))
    retire_cause_blank = is_blank(record.get(RETIRE_CAUSE))

    cond1 = retire_date_blank != retire_cause_blank
    missing = _missing_important(record, config.important_fields) if retire_date_blank else []
    cond2 = bool(missing)
    cond3 = index.is_identity_duplicate(record)
    cond4 = index.is_contact_duplicate(record)
    job = cell_text(record.get(JOB_PROPERTY)).upper()
    cond5 = (
        job == config.job_category_sentinel.strip().upper()
        and is_missing_email(record.get(EMAIL))
    )

    flags = (cond1, cond2, cond3, cond4, cond5)
    return EvaluatedRecord(
        record=record,
        rendered=render_dates(record.values(), config.date_fields, config.date_epoch),
        cond1=cond1,
        cond2=cond2,
        cond3=cond3,
        cond4=cond4,
        cond5=cond5,
        missing_fields=MISSING_FIELDS_SEPARATOR.join(missing),
        reason=build_reason(flags, config.reasons.ordered()),
    )
