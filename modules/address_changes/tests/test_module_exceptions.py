"""
Unit tests for address change exception types.
"""

import pytest

from src.exceptions import ETLBaseException, ETLProcessingError, ETLValidationError
from modules.address_changes.exceptions import (
    OutputWriteError,
    ReferentialError,
    ResolutionError,
    RowError,
    SchemaError,
    SnapshotIOError,
)


class TestExceptionHierarchy:
    """Validation errors come from input files, processing errors from the run itself."""

    @pytest.mark.parametrize("exc_class,parent", [
        (SchemaError, ETLValidationError),
        (RowError, ETLValidationError),
        (ResolutionError, ETLProcessingError),
        (ReferentialError, ETLProcessingError),
        (SnapshotIOError, ETLProcessingError),
        (OutputWriteError, ETLProcessingError),
    ])
    def test_parent_class(self, exc_class, parent):
        assert issubclass(exc_class, parent)
        assert issubclass(exc_class, ETLBaseException)


class TestExceptionContext:
    """Test the context carried by each exception."""

    def test_schema_error(self):
        error = SchemaError("bad header", "in/addresses_20241002.csv", column=2)

        assert error.path == "in/addresses_20241002.csv"
        assert error.column == 2
        assert error.context == {"path": "in/addresses_20241002.csv", "column": 2}

    def test_schema_error_without_column(self):
        error = SchemaError("empty", "a.csv")

        assert error.context == {"path": "a.csv"}
        assert str(error) == "empty (Context: path=a.csv)"

    def test_row_error(self):
        error = RowError("duplicate address_id 1", "a.csv", 4, field="address_id", key=1)

        assert error.line_number == 4
        assert error.key == 1
        assert error.context == {"path": "a.csv", "line_number": 4, "field": "address_id", "key": 1}

    def test_referential_error(self):
        error = ReferentialError("orphan", customer_id=7, address_id=5,
                                 customer_source="customers_20241001.csv")

        assert error.customer_id == 7
        assert error.address_id == 5
        assert error.context == {"path": "customers_20241001.csv", "customer_id": 7, "address_id": 5}

    def test_referential_error_without_source(self):
        error = ReferentialError("orphan", customer_id=7, address_id=5)

        assert "path" not in error.context

    def test_resolution_error_plain_context(self):
        error = ResolutionError("missing", {"path": "x.csv"})

        assert str(error) == "missing (Context: path=x.csv)"

    @pytest.mark.parametrize("exc_class", [SnapshotIOError, OutputWriteError])
    def test_io_errors_carry_path(self, exc_class):
        error = exc_class("failed", "out.csv")

        assert error.path == "out.csv"
        assert error.message == "failed"
