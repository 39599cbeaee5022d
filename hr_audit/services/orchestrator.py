from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..excel.reader import SheetHeaderError, read_workbook, sheet_first_column, sheet_to_table
from ..logging.anomaly_log import AnomalyLogBuffer, AnomalyRecord
from ..models.audit_result import AuditResult, RunResult
from ..models.cells import cell_text
from ..models.config_models import AuditConfig, EngineConfig
from ..models.employee_record import EmployeeRecord
from ..models.evaluated_record import EvaluatedRecord
from ..models.table import Table
from .directory import DirectoryError, build_directory, enrich_records
from .duplicates import build_duplicate_index
from .export import write_batches
from .grouping import group_batches
from .normalizer import normalize_headers
from .population import build_approved_units, filter_population
from .progress import ProgressTracker
from .rules import evaluate_record

"""Audit orchestration.

run_audit() is the engine: it takes fully loaded tables and returns a
materialized AuditResult, or raises AuditError and returns nothing. Stage order:

1. resolve data sheet headers by content
2. build records, drop rows outside the approved units
3. attach manager contact from the directory
4. build duplicate lookup tables over the whole population
5. evaluate rules per record
6. group into per-manager batches

Steps 4 and 5 are separate passes: no record is evaluated before every record
has been counted.

process_workbook() wraps the engine with workbook reading, the anomaly log,
JSON output and run timing.
"""

logger = logging.getLogger(__name__)

LOOKUP_MISS = "LOOKUP_MISS"


class AuditError(Exception):
    """Fatal run error. Nothing is written when this is raised."""


def build_records(table: Table, headers: list[str]) -> list[EmployeeRecord]:
    return [
        EmployeeRecord.from_row(number, headers, row)
        for number, row in zip(table.row_numbers(), table.rows)
    ]


def run_audit(
    data: Table,
    approved_units: Iterable[Any],
    directory: Table,
    config: EngineConfig,
    progress: ProgressTracker | None = None,
) -> AuditResult:
    """Run the full audit over in-memory inputs.

    Args:
        data: Employee roster (header + body rows)
        approved_units: Unit identifiers of the population to audit
        directory: Manager directory table
        config: Engine configuration
        progress: Optional tracker advanced once per evaluated record

    Returns:
        AuditResult with every filtered record and the grouped batches

    Raises:
        AuditError: If the data header is missing, the unit column cannot be
            resolved, or the directory lacks its required columns
    """
    if not data.header:
        raise AuditError(f"sheet '{data.sheet_name}' has no header row")

    try:
        directory_map = build_directory(directory, config.directory_columns)
    except DirectoryError as e:
        raise AuditError(f"directory: {e}") from e
    logger.debug(f"directory entries: {len(directory_map)}")

    headers = normalize_headers(data.header, data.columns(), config.rename_sentinels)
    renamed = [(raw, new) for raw, new in zip(data.header, headers) if raw.strip() != new]
    if renamed:
        logger.debug(f"renamed columns: {renamed}")
    collisions = sorted({name for name in headers if headers.count(name) > 1})
    if collisions:
        logger.warning(
            f"several columns resolve to {collisions}, only the leftmost is kept",
            extra={"sheet": data.sheet_name},
        )
    if config.unit_field not in headers:
        raise AuditError(
            f"sheet '{data.sheet_name}' has no '{config.unit_field}' column (resolved header: {headers})"
        )

    records = build_records(data, headers)
    approved = build_approved_units(approved_units)
    population = filter_population(records, approved, config.unit_field)
    logger.info(
        f"population: {len(population)}/{len(records)} rows in {len(approved)} approved units"
    )
    if progress is not None:
        # Excluded rows count as done
        progress.advance(len(records) - len(population))

    enriched = enrich_records(population, directory_map, config.unit_field)
    lookup_misses = tuple(r.row_number for r in enriched if not r.manager_email)
    if lookup_misses:
        logger.warning(f"{len(lookup_misses)} rows have no manager in the directory")

    index = build_duplicate_index(enriched)

    evaluated: list[EvaluatedRecord] = []
    flagged = 0
    for record in enriched:
        outcome = evaluate_record(record, index, config)
        evaluated.append(outcome)
        if progress is not None:
            flagged += outcome.should_include
            progress.advance()
            progress.set_postfix(flagged=flagged)

    batches = group_batches(evaluated, config.inclusion_policy)
    for batch in batches:
        logger.debug(f"batch {batch.manager_email}: {len(batch)} records, {batch.included_count} flagged")
    return AuditResult(
        headers=headers,
        records=tuple(evaluated),
        batches=tuple(batches),
        input_rows=len(records),
        lookup_misses=lookup_misses,
    )


def _load_inputs(config: AuditConfig) -> tuple[Table, list[Any], Table]:
    src = config.source
    path = Path(src.workbook)
    if not path.exists():
        raise AuditError(f"workbook not found: {path}")

    wanted = {src.data_sheet, src.approved_units_sheet, src.directory_sheet}
    try:
        sheets = read_workbook(path, target_sheets=wanted)
    except (OSError, ValueError) as e:
        raise AuditError(f"cannot read workbook {path}: {e}") from e

    missing = sorted(wanted - set(sheets))
    if missing:
        raise AuditError(f"workbook {path.name} missing sheets: {missing}")

    try:
        data = sheet_to_table(sheets[src.data_sheet], src.data_sheet, src.header_row)
        directory = sheet_to_table(sheets[src.directory_sheet], src.directory_sheet, src.header_row)
    except SheetHeaderError as e:
        raise AuditError(str(e)) from e
    approved = sheet_first_column(sheets[src.approved_units_sheet], src.header_row)
    return data, approved, directory


def process_workbook(
    config: AuditConfig,
    output_path: Path | None = None,
    anomaly_log: AnomalyLogBuffer | None = None,
) -> RunResult:
    """Read the configured workbook, audit it and write the batches.

    Args:
        config: Loaded AuditConfig
        output_path: Overrides config.output_path when given
        anomaly_log: Buffer for tolerated anomalies (a fresh one by default)

    Returns:
        RunResult with timing and output locations

    Raises:
        AuditError: For fatal errors; no output file is written in that case
    """
    start_time = datetime.now(UTC)
    anomaly_log = anomaly_log if anomaly_log is not None else AnomalyLogBuffer()

    data, approved, directory = _load_inputs(config)
    logger.info(f"read {len(data.rows)} rows from sheet '{data.sheet_name}'")

    with ProgressTracker(len(data.rows), description="Evaluating records") as progress:
        audit = run_audit(data, approved, directory, config.engine, progress=progress)

    unit_field = config.engine.unit_field
    for evaluated in audit.records:
        record = evaluated.record
        if record.manager_email:
            continue
        message = f"no directory entry for unit '{cell_text(record.get(unit_field))}'"
        logger.debug(message, extra={"sheet": data.sheet_name, "row": record.row_number})
        anomaly_log.append(
            AnomalyRecord.create(
                sheet=data.sheet_name,
                row=record.row_number,
                anomaly_type=LOOKUP_MISS,
                message=message,
            )
        )

    target = output_path if output_path is not None else Path(config.output_path)
    try:
        written = write_batches(audit.batches, target)
    except OSError as e:
        raise AuditError(f"cannot write output {target}: {e}") from e
    logger.info(f"wrote {len(audit.batches)} batches to {written}")

    log_path: Path | None = None
    try:
        log_path = anomaly_log.flush()
    except OSError as e:
        # Output is already written; a lost anomaly log does not fail the run
        logger.warning(f"anomaly log flush failed: {e}")

    end_time = datetime.now(UTC)
    return RunResult(
        audit=audit,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        output_path=str(written),
        anomaly_log_path=str(log_path) if log_path is not None else None,
    )
