"""Snapshot Date Resolution

Previous-day, as-of customer and directory discovery rules used by the
address change pipeline.
"""

from .snapshot_resolver import (
    DATE_FORMAT,
    parse_snapshot_date,
    format_snapshot_date,
    snapshot_path,
    previous_day,
    resolve_comparison_files,
    resolve_as_of_date,
    discover_snapshot_dates,
    require_minimum_dates,
)

__all__ = [
    'DATE_FORMAT', 'parse_snapshot_date', 'format_snapshot_date', 'snapshot_path',
    'previous_day', 'resolve_comparison_files', 'resolve_as_of_date',
    'discover_snapshot_dates', 'require_minimum_dates'
]
