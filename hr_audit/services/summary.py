from __future__ import annotations

from hr_audit.models.audit_result import RunResult

"""SUMMARY line rendering.

Format:
SUMMARY rows={input} filtered={kept} included={flagged} batches={n}
lookup_misses={n} elapsed_sec={elapsed}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # Avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a finished run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from hr_audit.models.audit_result import AuditResult
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> audit = AuditResult(headers=[], records=(), batches=(), input_rows=3)
        >>> run = RunResult(audit=audit, start_time=t, end_time=t, elapsed_seconds=2.0)
        >>> render_summary_line(run)
        'SUMMARY rows=3 filtered=0 included=0 batches=0 lookup_misses=0 elapsed_sec=2'
    """
    audit = result.audit
    return (
        f"SUMMARY rows={audit.input_rows} "
        f"filtered={audit.filtered_rows} "
        f"included={audit.included_rows} "
        f"batches={len(audit.batches)} "
        f"lookup_misses={len(audit.lookup_misses)} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
