from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

"""Config dataclasses for the employee record audit.

These are the typed counterparts of config/audit.yml. The loader in
hr_audit/config/loader.py builds them after schema validation; the engine only
ever sees these objects, never raw YAML.
"""

# Canonical field vocabulary
COMPANY = "Company"
EMPLOYEE_ID = "Employee Id"
SURNAME = "Surname"
NAME = "Name"
GENDER = "Gender"
EMPLOYMENT_RELATION = "Employment Relation"
JOB_PROPERTY = "Job Property"
DATE_OF_BIRTH = "Date of Birth"
HIRE_DATE = "Hire Date"
DIVISION = "Division"
DEPARTMENT = "Department"
JOB_DESCRIPTION = "Job Description"
CITY = "City"
SUPERVISOR_ID = "Supervisor Id"
NOMINAL_SALARY = "Nominal Salary"
TAX_NO = "Tax No."
BASE_SALARY = "Base Salary"
RETIRE_DATE = "Retire Date"
RETIRE_CAUSE = "Retire Cause"
EMAIL = "email"

CANONICAL_FIELDS: tuple[str, ...] = (
    COMPANY,
    EMPLOYEE_ID,
    SURNAME,
    NAME,
    GENDER,
    EMPLOYMENT_RELATION,
    JOB_PROPERTY,
    DATE_OF_BIRTH,
    HIRE_DATE,
    DIVISION,
    DEPARTMENT,
    JOB_DESCRIPTION,
    CITY,
    SUPERVISOR_ID,
    NOMINAL_SALARY,
    TAX_NO,
    BASE_SALARY,
    RETIRE_DATE,
    RETIRE_CAUSE,
    EMAIL,
)

IMPORTANT_FIELD_PROFILES: dict[str, tuple[str, ...]] = {
    "minimal": (DATE_OF_BIRTH, HIRE_DATE, DIVISION, DEPARTMENT, CITY),
    "extended": (
        COMPANY,
        EMPLOYEE_ID,
        SURNAME,
        NAME,
        GENDER,
        EMPLOYMENT_RELATION,
        JOB_PROPERTY,
        DATE_OF_BIRTH,
        HIRE_DATE,
        DIVISION,
        DEPARTMENT,
        JOB_DESCRIPTION,
        CITY,
        SUPERVISOR_ID,
        NOMINAL_SALARY,
        TAX_NO,
        BASE_SALARY,
    ),
}

DEFAULT_DATE_FIELDS: tuple[str, ...] = (DATE_OF_BIRTH, HIRE_DATE, RETIRE_DATE)
DEFAULT_DATE_EPOCH = date(1899, 12, 30)
DEFAULT_JOB_CATEGORY_SENTINEL = "ADMINISTRATIVE"

RETAIN_ALL = "retain_all"
INCLUDED_ONLY = "included_only"
INCLUSION_POLICIES = (RETAIN_ALL, INCLUDED_ONLY)


@dataclass(frozen=True)
class RenameSentinel:
    """One entry of the ordered header renaming table.

    A raw column becomes ``field`` when any of its cells, upper-cased, contains
    ``sentinel`` (upper-cased).
    """
    sentinel: str
    field: str


@dataclass(frozen=True)
class ReasonPhrases:
    """Human-readable phrase per rule condition, in evaluation order."""
    retire_inconsistency: str = "Retire date and retire cause are inconsistent"
    missing_fields: str = "Important fields are missing"
    identity_duplicate: str = "Duplicate employee (same surname, name and date of birth)"
    contact_duplicate: str = "Email used by more than one employee under the same manager"
    missing_contact: str = "Missing email for administrative employee"

    def ordered(self) -> tuple[str, str, str, str, str]:
        return (
            self.retire_inconsistency,
            self.missing_fields,
            self.identity_duplicate,
            self.contact_duplicate,
            self.missing_contact,
        )


@dataclass(frozen=True)
class DirectoryColumns:
    """Header aliases used to locate the manager directory columns.

    Matching is case-insensitive on trimmed header text; the first alias found
    in the header wins.
    """
    unit: tuple[str, ...] = ("Department", "Unit", "Organizational Unit")
    email: tuple[str, ...] = ("Manager Email", "Email", "Contact")
    name: tuple[str, ...] = ("Manager Name", "Manager", "Name")


@dataclass(frozen=True)
class EngineConfig:
    """Everything the audit engine needs besides the input tables."""
    rename_sentinels: tuple[RenameSentinel, ...] = ()
    important_fields: tuple[str, ...] = IMPORTANT_FIELD_PROFILES["minimal"]
    important_fields_profile: str = "minimal"
    job_category_sentinel: str = DEFAULT_JOB_CATEGORY_SENTINEL
    date_fields: tuple[str, ...] = DEFAULT_DATE_FIELDS
    date_epoch: date = DEFAULT_DATE_EPOCH
    unit_field: str = DEPARTMENT
    directory_columns: DirectoryColumns = field(default_factory=DirectoryColumns)
    reasons: ReasonPhrases = field(default_factory=ReasonPhrases)
    inclusion_policy: str = RETAIN_ALL


@dataclass(frozen=True)
class SourceConfig:
    """Workbook location and sheet names."""
    workbook: str
    data_sheet: str
    approved_units_sheet: str
    directory_sheet: str
    header_row: int = 1  # 1-based sheet row holding the header


@dataclass(frozen=True)
class AuditConfig:
    """Root configuration object for one audit run."""
    source: SourceConfig
    output_path: str
    engine: EngineConfig
