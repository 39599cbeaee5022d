from __future__ import annotations

from datetime import date

import pytest

from hr_audit.models.config_models import (
    IMPORTANT_FIELD_PROFILES,
    EngineConfig,
    ReasonPhrases,
)
from hr_audit.models.employee_record import EmployeeRecord
from hr_audit.services.duplicates import DuplicateIndex, build_duplicate_index
from hr_audit.services.rules import build_reason, evaluate_record, render_dates, serial_to_iso

PHRASES = ReasonPhrases()


def _record(row: dict, manager: str = "boss@corp.example") -> EmployeeRecord:
    header = list(row)
    return EmployeeRecord.from_row(2, header, [row[c] for c in header]).with_manager(manager, "Boss")


def _evaluate(row: dict, config: EngineConfig | None = None, index: DuplicateIndex | None = None):
    rec = _record(row)
    return evaluate_record(rec, index or build_duplicate_index([rec]), config or EngineConfig())


@pytest.mark.parametrize("serial,expected", [
    (1, "1899-12-31"),
    (45292, "2024-01-01"),
    (45658, "2025-01-01"),
    (45658.99, "2025-01-01"),  # time of day ignored
])
def test_serial_to_iso(serial, expected):
    assert serial_to_iso(serial, date(1899, 12, 30)) == expected


def test_render_dates_only_converts_numeric_date_fields():
    values = {"Hire Date": 45292, "Date of Birth": "1990-05-01", "Retire Date": None, "Employee Id": 45292}
    rendered = render_dates(values, ("Hire Date", "Date of Birth", "Retire Date"), date(1899, 12, 30))
    assert rendered == {
        "Hire Date": "2024-01-01",
        "Date of Birth": "1990-05-01",
        "Retire Date": None,
        "Employee Id": 45292,
    }
    assert values["Hire Date"] == 45292


def test_render_dates_keeps_out_of_range_serial():
    rendered = render_dates({"Hire Date": 10**12}, ("Hire Date",), date(1899, 12, 30))
    assert rendered["Hire Date"] == 10**12


def test_clean_record_has_no_flags(employee_row):
    ev = _evaluate(employee_row())
    assert ev.flags == (False, False, False, False, False)
    assert ev.should_include is False
    assert ev.reason == ""
    assert ev.missing_fields == ""


def test_retire_date_without_cause_only_cond1(employee_row):
    ev = _evaluate(employee_row(**{"Retire Date": 45658, "Retire Cause": None}))
    assert ev.cond1 is True
    assert ev.cond2 is False
    assert ev.reason == PHRASES.retire_inconsistency
    assert ev.rendered["Retire Date"] == "2025-01-01"


def test_retire_cause_without_date_sets_cond1_and_cond2(employee_row):
    ev = _evaluate(employee_row(**{"Retire Cause": "Resignation", "City": "  "}))
    assert ev.cond1 is True
    assert ev.cond2 is True
    assert ev.missing_fields == "City"


def test_retired_employee_with_blank_important_field_not_cond2(employee_row):
    ev = _evaluate(employee_row(**{"Retire Date": 45000, "Retire Cause": "Pension", "City": None}))
    assert ev.flags == (False, False, False, False, False)


def test_missing_fields_listed_in_profile_order(employee_row):
    ev = _evaluate(employee_row(**{"City": None, "Date of Birth": "", "Division": None}))
    assert ev.cond2 is True
    assert ev.missing_fields == "Date of Birth, Division, City"
    assert ev.reason == PHRASES.missing_fields


def test_extended_profile_checks_more_fields(employee_row):
    row = employee_row(**{"Company": None})
    assert _evaluate(row).cond2 is False
    extended = EngineConfig(important_fields=IMPORTANT_FIELD_PROFILES["extended"], important_fields_profile="extended")
    ev = _evaluate(row, extended)
    assert ev.cond2 is True
    # columns absent from the sheet read as blank
    assert "Company" in ev.missing_fields and "Gender" in ev.missing_fields


def test_administrative_without_email_sets_cond5(employee_row):
    for email in (None, "", "null", "NULL"):
        ev = _evaluate(employee_row(**{"Job Property": " administrative ", "email": email}))
        assert ev.cond5 is True
        assert ev.reason == PHRASES.missing_contact


def test_administrative_with_email_not_cond5(employee_row):
    assert _evaluate(employee_row(**{"Job Property": "ADMINISTRATIVE"})).cond5 is False


def test_cond5_regardless_of_other_fields(employee_row):
    row = employee_row(**{"Job Property": "ADMINISTRATIVE", "email": None, "Retire Cause": "x", "City": None})
    ev = _evaluate(row)
    assert ev.cond5 is True
    assert ev.flags == (True, True, False, False, True)


def test_duplicate_flags_from_index(employee_row):
    a = _record(employee_row(Surname="Smith", Name="John", **{"Date of Birth": 30000, "email": "x@corp.example"}))
    b = _record(employee_row(Surname="Smith", Name="John", **{"Date of Birth": 30000, "email": "x@corp.example"}))
    index = build_duplicate_index([a, b])
    ev = evaluate_record(a, index, EngineConfig())
    assert ev.cond3 and ev.cond4
    assert ev.is_duplicate
    assert ev.reason == f"{PHRASES.identity_duplicate}; {PHRASES.contact_duplicate}"


def test_reason_follows_condition_order_and_flags(employee_row):
    row = employee_row(**{"Retire Cause": "x", "City": None, "Job Property": "ADMINISTRATIVE", "email": "null"})
    ev = _evaluate(row)
    phrases = PHRASES.ordered()
    present = [p for p in phrases if p in ev.reason]
    assert present == [p for flag, p in zip(ev.flags, phrases) if flag]
    assert ev.reason.split("; ") == present


def test_build_reason_custom_phrases():
    assert build_reason((True, False, True, False, False), ("a", "b", "c", "d", "e")) == "a; c"
    assert build_reason((False,) * 5, ("a", "b", "c", "d", "e")) == ""


def test_custom_job_category_sentinel(employee_row):
    cfg = EngineConfig(job_category_sentinel="clerical")
    assert _evaluate(employee_row(**{"Job Property": "CLERICAL", "email": None}), cfg).cond5 is True
    assert _evaluate(employee_row(**{"Job Property": "ADMINISTRATIVE", "email": None}), cfg).cond5 is False
