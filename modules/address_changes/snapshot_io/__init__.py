"""Snapshot File Access

Parsing, loading and writing of the CSV files exchanged by the address change
pipeline.
"""

from .csv_field_parser import parse_line, quote_field, NULL_LITERAL
from .snapshot_loader import (
    SnapshotSchema, SnapshotLoader, RowContext, ADDRESS_SCHEMA, CUSTOMER_SCHEMA,
    load_address_snapshot, load_customer_snapshot
)
from .change_log_writer import (
    write_change_log, format_change_row, HEADER, OUTPUT_COLUMNS, FOOTER_PREFIX
)

__all__ = [
    'parse_line', 'quote_field', 'NULL_LITERAL',
    'SnapshotSchema', 'SnapshotLoader', 'RowContext', 'ADDRESS_SCHEMA', 'CUSTOMER_SCHEMA',
    'load_address_snapshot', 'load_customer_snapshot',
    'write_change_log', 'format_change_row', 'HEADER', 'OUTPUT_COLUMNS', 'FOOTER_PREFIX'
]
