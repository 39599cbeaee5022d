from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from hr_audit.models.cells import cell_text, is_missing_email
from hr_audit.models.config_models import DATE_OF_BIRTH, EMAIL, NAME, SURNAME
from hr_audit.models.employee_record import EmployeeRecord

"""Dataset-wide duplicate detection.

Whether a row is a duplicate depends on rows that may come after it, so both
lookup tables are built in a dedicated pass over the whole filtered and
enriched population before any row is evaluated. The tables are not modified
afterwards.

- identity: (surname, name, date of birth) -> occurrences
- contact: manager email -> person email -> occurrences. Email reuse is only
  a problem inside one manager's batch, so counts are keyed on the same
  manager email string the batches are grouped by.
"""

__all__ = [
    "DuplicateIndex",
    "build_duplicate_index",
    "contact_key",
    "identity_key",
]

IdentityKey = tuple[str, str, str]


def identity_key(record: EmployeeRecord) -> IdentityKey:
    return (
        cell_text(record.get(SURNAME)),
        cell_text(record.get(NAME)),
        cell_text(record.get(DATE_OF_BIRTH)),
    )


def contact_key(record: EmployeeRecord) -> tuple[str, str] | None:
    """(batch manager email, lower-cased person email); None when the email is missing."""
    email = record.get(EMAIL)
    if is_missing_email(email):
        return None
    return (record.manager_email, cell_text(email).lower())


@dataclass(frozen=True)
class DuplicateIndex:
    identity_counts: Mapping[IdentityKey, int] = field(default_factory=dict)
    contact_counts: Mapping[str, Mapping[str, int]] = field(default_factory=dict)

    def is_identity_duplicate(self, record: EmployeeRecord) -> bool:
        return self.identity_counts.get(identity_key(record), 0) > 1

    def is_contact_duplicate(self, record: EmployeeRecord) -> bool:
        key = contact_key(record)
        if key is None:
            return False
        manager, email = key
        return self.contact_counts.get(manager, {}).get(email, 0) > 1


def build_duplicate_index(records: Iterable[EmployeeRecord]) -> DuplicateIndex:
    """Count identity and contact keys over the complete record set."""
    identity: Counter[IdentityKey] = Counter()
    contacts: dict[str, Counter[str]] = {}
    for record in records:
        identity[identity_key(record)] += 1
        key = contact_key(record)
        if key is not None:
            manager, email = key
            contacts.setdefault(manager, Counter())[email] += 1
    return DuplicateIndex(
        identity_counts=dict(identity),
        contact_counts={m: dict(c) for m, c in contacts.items()},
    )
