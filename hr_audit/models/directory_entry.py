from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "DirectoryEntry",
]


@dataclass(frozen=True)
class DirectoryEntry:
    """Manager contact details for one organizational unit."""
    unit: str
    email: str
    name: str = ""
