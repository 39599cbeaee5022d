"""Domain models for the employee record audit.

This package contains the immutable value types passed between the pipeline
stages in hr_audit.services.
"""

from .anomaly_record import AnomalyRecord
from .audit_result import AuditResult, RunResult
from .config_models import AuditConfig, EngineConfig, ReasonPhrases, RenameSentinel, SourceConfig
from .directory_entry import DirectoryEntry
from .employee_record import EmployeeRecord
from .evaluated_record import EvaluatedRecord
from .manager_batch import ManagerBatch
from .table import Table

__all__ = [
    # Configuration models
    "AuditConfig",
    "EngineConfig",
    "ReasonPhrases",
    "RenameSentinel",
    "SourceConfig",
    # Pipeline models
    "Table",
    "DirectoryEntry",
    "EmployeeRecord",
    "EvaluatedRecord",
    "ManagerBatch",
    # Results
    "AnomalyRecord",
    "AuditResult",
    "RunResult",
]
