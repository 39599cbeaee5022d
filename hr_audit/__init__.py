"""Employee record data-quality audit.

Reads an employee roster, evaluates per-record quality rules and groups the
results into per-manager batches.
"""

__version__ = "0.3.0"
