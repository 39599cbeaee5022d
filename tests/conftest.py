# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from hr_audit.logging.init import reset_logging
from hr_audit.models.table import Table

EMPLOYEE_HEADER = [
    "Company",
    "Employee Id",
    "Surname",
    "Name",
    "Job Property",
    "Date of Birth",
    "Hire Date",
    "Division",
    "Department",
    "City",
    "Retire Date",
    "Retire Cause",
    "email",
]

DIRECTORY_HEADER = ["Department", "Manager Email", "Manager Name"]


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("HR_AUDIT_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source:
  workbook: ./data/employees.xlsx
  data_sheet: Employees
  approved_units_sheet: ApprovedUnits
  directory_sheet: Managers
output_path: ./out/batches.json
unit_field: Department
rename_sentinels:
  - sentinel: "@"
    field: email
important_fields_profile: minimal
job_category_sentinel: ADMINISTRATIVE
date_epoch: "1899-12-30"
inclusion_policy: retain_all
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "audit.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def employee_row() -> Callable[..., dict[str, Any]]:
    """Factory for a clean, fully populated active employee row."""
    counter = {"n": 0}

    def _make(**overrides: Any) -> dict[str, Any]:
        counter["n"] += 1
        n = counter["n"]
        row: dict[str, Any] = {
            "Company": "ACME",
            "Employee Id": 1000 + n,
            "Surname": f"Surname{n}",
            "Name": f"Name{n}",
            "Job Property": "TECHNICAL",
            "Date of Birth": 30000 + n,
            "Hire Date": 45292,
            "Division": "Sales",
            "Department": "D1",
            "City": "Athens",
            "Retire Date": None,
            "Retire Cause": None,
            "email": f"person{n}@corp.example",
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture()
def table_factory() -> Callable[..., Table]:
    """Build a Table from row dicts (keys missing from a dict read as None)."""

    def _make(rows: list[dict[str, Any]], header: list[str] | None = None, sheet_name: str = "Employees") -> Table:
        cols = header if header is not None else EMPLOYEE_HEADER
        body = [[r.get(c) for c in cols] for r in rows]
        return Table(sheet_name=sheet_name, header=list(cols), rows=body, first_row_number=2)

    return _make


@pytest.fixture()
def directory_table() -> Table:
    return Table(
        sheet_name="Managers",
        header=list(DIRECTORY_HEADER),
        rows=[
            ["D1", "boss1@corp.example", "Alice Boss"],
            ["D2", "boss2@corp.example", "Bob Boss"],
        ],
    )


@pytest.fixture()
def make_workbook() -> Callable[[Path, dict[str, list[list[object]]]], Path]:
    """Write a real .xlsx; every sheet is given as a list of rows (header included)."""

    def _make(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
        return path

    return _make
