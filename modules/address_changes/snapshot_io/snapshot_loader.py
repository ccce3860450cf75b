"""Snapshot Loader

Reads a snapshot CSV file into an in-memory table keyed by its primary key.

The loader makes a single sequential pass over the file:

1. The header line is validated against the fixed schema (column count and
   case-insensitive names, in order) before any data row is read.
2. Blank or whitespace-only lines are skipped.
3. Every other line must have exactly the schema's field count; its fields are
   converted by a row builder into ``(key, value)``.
4. A key that was already loaded stops the load.

Any failure raises immediately; a partially built table is never returned.
"""

import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar, Union

from ..exceptions import RowError, SchemaError, SnapshotIOError
from ..models import AddressRecord, AddressTable, CustomerNameIndex, ProgressCallback, emit
from .csv_field_parser import parse_line

K = TypeVar('K')
V = TypeVar('V')

DEFAULT_BUFFER_SIZE = 65536

_INTEGER_PATTERN = re.compile(r'\s*[+-]?[0-9]+\s*')


@dataclass(frozen=True)
class SnapshotSchema:
    """Fixed column layout of one snapshot file type.
    
    Attributes:
        label: Human-readable file kind used in error messages ("Address file")
        columns: Expected header names, in order
        key_column: Name of the primary key column
    """
    label: str
    columns: Tuple[str, ...]
    key_column: str
    
    @property
    def field_count(self) -> int:
        return len(self.columns)


ADDRESS_SCHEMA = SnapshotSchema(
    label="Address file",
    columns=(
        "address_id", "customer_id", "address_line1", "city",
        "state_province", "postal_code", "country", "start_date", "end_date",
    ),
    key_column="address_id",
)

CUSTOMER_SCHEMA = SnapshotSchema(
    label="Customer file",
    columns=("id", "prefix", "first_name", "last_name", "sort_name", "suffix", "birthdate"),
    key_column="id",
)


class RowContext:
    """Location of the row being converted, for error reporting."""
    
    __slots__ = ('schema', 'path', 'line_number')
    
    def __init__(self, schema: SnapshotSchema, path: str, line_number: int = 0):
        self.schema = schema
        self.path = path
        self.line_number = line_number
    
    def error(self, message: str, field: Optional[str] = None, key=None) -> RowError:
        return RowError(
            f"{self.schema.label} {self.path} line {self.line_number}: {message}",
            self.path, self.line_number, field=field, key=key
        )
    
    def required_int(self, fields: Sequence[Optional[str]], index: int) -> int:
        """Parse a required integer column."""
        raw = fields[index]
        name = self.schema.columns[index]
        if raw is None or not _INTEGER_PATTERN.fullmatch(raw):
            raise self.error(f"invalid {name} '{'NULL' if raw is None else raw}'", field=name)
        return int(raw)
    
    def required_str(self, fields: Sequence[Optional[str]], index: int) -> str:
        """Return a required string column, rejecting NULL."""
        value = fields[index]
        if value is None:
            name = self.schema.columns[index]
            raise self.error(f"{name} cannot be NULL", field=name)
        return value


RowBuilder = Callable[[List[Optional[str]], RowContext], Tuple[K, V]]


class SnapshotLoader(Generic[K, V]):
    """Generic keyed snapshot loader.
    
    Args:
        schema: Expected file layout
        row_builder: Converts parsed fields into ``(key, value)``; raises RowError
            through the supplied RowContext on invalid data
        stage: Stage name reported to the progress callback
        buffer_size: Read buffer size in bytes
    """
    
    def __init__(self, schema: SnapshotSchema, row_builder: RowBuilder,
                 stage: str, buffer_size: int = DEFAULT_BUFFER_SIZE):
        self.schema = schema
        self.row_builder = row_builder
        self.stage = stage
        self.buffer_size = buffer_size
    
    def load(self, path: Union[str, Path],
             progress: Optional[ProgressCallback] = None) -> Dict[K, V]:
        """Load ``path`` into a dictionary keyed by the schema's primary key.
        
        Raises:
            SchemaError: File is empty or the header does not match
            RowError: A data row is malformed or repeats a key
            SnapshotIOError: The file cannot be opened or read
        """
        path_str = str(path)
        start = time.perf_counter()
        table: Dict[K, V] = {}
        context = RowContext(self.schema, path_str)
        expected_count = self.schema.field_count
        build = self.row_builder
        
        try:
            # utf-8-sig drops a leading byte order mark from the header line
            with open(path_str, 'r', encoding='utf-8-sig',
                      buffering=self.buffer_size) as handle:
                header = handle.readline()
                if not header:
                    raise SchemaError(f"{self.schema.label} is empty: {path_str}", path_str)
                self._validate_header(header.rstrip('\r\n'), path_str)
                
                line_number = 1
                for line in handle:
                    line_number += 1
                    line = line.rstrip('\r\n')
                    if not line or line.isspace():
                        continue
                    
                    context.line_number = line_number
                    fields = parse_line(line)
                    if len(fields) != expected_count:
                        raise context.error(
                            f"expected {expected_count} fields, got {len(fields)}"
                        )
                    
                    key, value = build(fields, context)
                    if key in table:
                        raise context.error(
                            f"duplicate {self.schema.key_column} {key}",
                            field=self.schema.key_column, key=key
                        )
                    table[key] = value
        except UnicodeDecodeError as e:
            raise SnapshotIOError(
                f"{self.schema.label} {path_str} is not valid UTF-8: {e}", path_str
            ) from e
        except OSError as e:
            raise SnapshotIOError(
                f"Cannot read {self.schema.label.lower()} {path_str}: {e.strerror or e}", path_str
            ) from e
        
        emit(progress, self.stage, len(table), time.perf_counter() - start, path=path_str)
        return table
    
    def _validate_header(self, header_line: str, path: str) -> None:
        headers = parse_line(header_line)
        expected = self.schema.columns
        
        if len(headers) != len(expected):
            raise SchemaError(
                f"{self.schema.label} {path}: header has {len(headers)} columns, "
                f"expected {len(expected)}",
                path
            )
        
        for index, (actual, wanted) in enumerate(zip(headers, expected)):
            if actual is None or actual.lower() != wanted.lower():
                raise SchemaError(
                    f"{self.schema.label} {path}: header column {index} is "
                    f"'{actual}', expected '{wanted}'",
                    path, column=index
                )


def _build_address(fields: List[Optional[str]], ctx: RowContext) -> Tuple[int, AddressRecord]:
    address_id = ctx.required_int(fields, 0)
    record = AddressRecord(
        address_id=address_id,
        customer_id=ctx.required_int(fields, 1),
        address_line1=ctx.required_str(fields, 2),
        city=ctx.required_str(fields, 3),
        state_province=ctx.required_str(fields, 4),
        postal_code=ctx.required_str(fields, 5),
        country=ctx.required_str(fields, 6),
        start_date=ctx.required_str(fields, 7),
        end_date=fields[8],
    )
    return address_id, record


def _build_customer_name(fields: List[Optional[str]], ctx: RowContext) -> Tuple[int, str]:
    customer_id = ctx.required_int(fields, 0)
    # prefix, sort_name, suffix and birthdate are validated structurally only
    first_name = ctx.required_str(fields, 2)
    last_name = ctx.required_str(fields, 3)
    return customer_id, CustomerNameIndex.display_name(first_name, last_name)


def load_address_snapshot(path: Union[str, Path],
                          progress: Optional[ProgressCallback] = None,
                          buffer_size: int = DEFAULT_BUFFER_SIZE) -> AddressTable:
    """Load an ``addresses_YYYYMMDD.csv`` file keyed by address_id."""
    loader: SnapshotLoader[int, AddressRecord] = SnapshotLoader(
        ADDRESS_SCHEMA, _build_address, stage="load_addresses", buffer_size=buffer_size
    )
    return loader.load(path, progress)


def load_customer_snapshot(path: Union[str, Path],
                           progress: Optional[ProgressCallback] = None,
                           buffer_size: int = DEFAULT_BUFFER_SIZE) -> CustomerNameIndex:
    """Load a ``customers_YYYYMMDD.csv`` file into a CustomerNameIndex."""
    loader: SnapshotLoader[int, str] = SnapshotLoader(
        CUSTOMER_SCHEMA, _build_customer_name, stage="load_customers", buffer_size=buffer_size
    )
    return CustomerNameIndex(loader.load(path, progress), source=str(path))
