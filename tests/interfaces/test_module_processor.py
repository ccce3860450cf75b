"""Tests for ModuleProcessor interface and related models."""

import pytest
from datetime import datetime
from pydantic import ValidationError

from src.interfaces.module_processor import (
    ModuleProcessor,
    ProcessingResult,
    ModuleStatus
)


class TestProcessingResult:
    """Test cases for ProcessingResult Pydantic model."""

    def test_successful_run_result(self):
        """Test a result carrying per-date summaries in metadata."""
        result = ProcessingResult(
            success=True,
            records_processed=3,
            metadata={
                "mode": "single_date",
                "summaries": [{"effective_date": "2024-10-02", "new_records": 3}]
            },
            execution_time=0.25
        )

        assert result.success is True
        assert result.records_processed == 3
        assert result.errors == []
        assert result.metadata["summaries"][0]["new_records"] == 3

    def test_failed_run_result(self):
        """Test a failed result with its error message."""
        result = ProcessingResult(
            success=False,
            records_processed=0,
            errors=["Previous-day address file not found: in/addresses_20241001.csv"],
            metadata={"error_type": "ResolutionError"},
            execution_time=0.01
        )

        assert result.success is False
        assert len(result.errors) == 1
        assert result.metadata["error_type"] == "ResolutionError"

    def test_processing_result_defaults(self):
        """Test ProcessingResult with default values."""
        result = ProcessingResult(success=True, records_processed=0, execution_time=0.5)

        assert result.errors == []
        assert result.metadata == {}

    @pytest.mark.parametrize("field,value", [
        ("records_processed", -5),
        ("execution_time", -1.0),
    ])
    def test_negative_values_invalid(self, field, value):
        """Test that counts and durations cannot be negative."""
        values = {"success": True, "records_processed": 10, "execution_time": 1.0}
        values[field] = value

        with pytest.raises(ValidationError) as exc_info:
            ProcessingResult(**values)

        errors = exc_info.value.errors()
        assert any("greater than or equal to 0" in str(error) for error in errors)


class TestModuleStatus:
    """Test cases for ModuleStatus Pydantic model."""

    def test_valid_module_status(self):
        """Test creating a valid ModuleStatus."""
        last_run = datetime(2024, 10, 2, 6, 30)
        status = ModuleStatus(
            module_name="address_changes",
            is_configured=True,
            last_run=last_run,
            status="ready",
            health_check=True
        )

        assert status.last_run == last_run
        assert status.status == "ready"

    def test_module_status_serialization(self):
        """Test ModuleStatus JSON serialization without a previous run."""
        status = ModuleStatus(
            module_name="address_changes",
            is_configured=False,
            status="error",
            health_check=False
        )

        data = status.model_dump(mode="json")
        assert data == {
            "module_name": "address_changes",
            "is_configured": False,
            "last_run": None,
            "status": "error",
            "health_check": False,
        }


class TestModuleProcessor:
    """Test cases for ModuleProcessor abstract base class."""

    def test_cannot_instantiate_abstract_class(self):
        """Test that ModuleProcessor cannot be instantiated directly."""
        with pytest.raises(TypeError) as exc_info:
            ModuleProcessor()

        assert "Can't instantiate abstract class" in str(exc_info.value)

    def test_abstract_methods_required(self):
        """Test that every abstract method must be implemented."""

        class IncompleteModule(ModuleProcessor):
            def __init__(self, config_loader):
                self.config_loader = config_loader

        with pytest.raises(TypeError) as exc_info:
            IncompleteModule(None)

        for method in ["validate_configuration", "process", "get_status"]:
            assert method in str(exc_info.value)

    def test_address_change_processor_implements_interface(self, tmp_path):
        """Test the address changes module against the interface contract."""
        from modules.address_changes.models import AddressChangesSettings
        from modules.address_changes.processor import AddressChangeProcessor

        settings = AddressChangesSettings(input_dir=tmp_path, output_dir=tmp_path)
        processor = AddressChangeProcessor(None, settings=settings, progress=lambda event: None)

        assert isinstance(processor, ModuleProcessor)
        assert processor.validate_configuration() is True

        # No snapshots in the directory: range mode fails but still returns a result
        result = processor.process(dry_run=True)
        assert isinstance(result, ProcessingResult)
        assert result.success is False
        assert "At least 2 addresses snapshots are required" in result.errors[0]

        status = processor.get_status()
        assert isinstance(status, ModuleStatus)
        assert status.module_name == "address_changes"
        assert status.status == "error"
