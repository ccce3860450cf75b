"""Address Change ETL Exceptions

Extends the framework exception hierarchy with the error types raised while
loading snapshots, resolving snapshot dates, enriching changes and writing the
change log. All of them are terminal for the current run.
"""

from typing import Any, Dict, Optional, Union
from pathlib import Path

from src.exceptions import ETLProcessingError, ETLValidationError


def _location(path: Union[str, Path, None], line_number: Optional[int] = None,
              **extra: Any) -> Dict[str, Any]:
    context: Dict[str, Any] = {}
    if path is not None:
        context["path"] = str(path)
    if line_number is not None:
        context["line_number"] = line_number
    for key, value in extra.items():
        if value is not None:
            context[key] = value
    return context


class SchemaError(ETLValidationError):
    """Raised when a snapshot file is empty or its header does not match the schema."""
    
    def __init__(self, message: str, path: Union[str, Path], column: Optional[int] = None):
        super().__init__(message, _location(path, column=column))
        self.path = str(path)
        self.column = column


class RowError(ETLValidationError):
    """Raised for a malformed data row.
    
    Covers wrong field count, unparseable integers, NULL in a required field
    and duplicate primary keys. ``line_number`` is 1-based and counts the
    header as line 1.
    """
    
    def __init__(self, message: str, path: Union[str, Path], line_number: int,
                 field: Optional[str] = None, key: Optional[Any] = None):
        super().__init__(message, _location(path, line_number, field=field, key=key))
        self.path = str(path)
        self.line_number = line_number
        self.field = field
        self.key = key


class ResolutionError(ETLProcessingError):
    """Raised when no usable address or customer snapshot exists for a date."""
    pass


class ReferentialError(ETLProcessingError):
    """Raised when an address references a customer_id missing from the customer snapshot."""
    
    def __init__(self, message: str, customer_id: int, address_id: int,
                 customer_source: Optional[str] = None):
        super().__init__(message, _location(customer_source, customer_id=customer_id,
                                            address_id=address_id))
        self.customer_id = customer_id
        self.address_id = address_id


class SnapshotIOError(ETLProcessingError):
    """Raised when a snapshot file cannot be opened or read."""
    
    def __init__(self, message: str, path: Union[str, Path]):
        super().__init__(message, _location(path))
        self.path = str(path)


class OutputWriteError(ETLProcessingError):
    """Raised when the change log cannot be written or moved into place."""
    
    def __init__(self, message: str, path: Union[str, Path]):
        super().__init__(message, _location(path))
        self.path = str(path)
