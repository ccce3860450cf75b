"""
Unit tests for address change data models.

Covers AddressRecord comparison, CustomerNameIndex, StageEvent and the
module settings model.
"""

import dataclasses
from datetime import date
from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from modules.address_changes.models import (
    AddressChangesSettings,
    AddressRecord,
    CustomerNameIndex,
    StageEvent,
    emit,
)


class TestAddressRecord:
    """Test suite for AddressRecord."""

    def test_identical_records_do_not_differ(self, make_record):
        assert make_record(1).differs_from(make_record(1)) is False

    def test_absent_end_dates_are_equal(self, make_record):
        assert make_record(1, end_date=None).differs_from(make_record(1, end_date=None)) is False

    def test_absent_and_empty_end_date_differ(self, make_record):
        assert make_record(1, end_date=None).differs_from(make_record(1, end_date="")) is True
        assert make_record(1, end_date="").differs_from(make_record(1, end_date=None)) is True

    def test_comparison_is_case_sensitive(self, make_record):
        assert make_record(1, city="Springfield").differs_from(make_record(1, city="SPRINGFIELD"))

    def test_compared_fields_cover_every_attribute(self):
        names = tuple(f.name for f in dataclasses.fields(AddressRecord))

        assert AddressRecord.COMPARED_FIELDS == names

    def test_records_are_immutable(self, make_record):
        record = make_record(1)

        with pytest.raises(dataclasses.FrozenInstanceError):
            record.city = "Elsewhere"


class TestCustomerNameIndex:
    """Test suite for CustomerNameIndex."""

    def test_display_name(self):
        assert CustomerNameIndex.display_name("Jane", "Doe") == "Jane Doe"

    def test_display_name_keeps_empty_parts(self):
        assert CustomerNameIndex.display_name("", "Doe") == " Doe"

    def test_mapping_behaviour(self, customer_index):
        assert customer_index[7] == "John Smith"
        assert 100 in customer_index
        assert 8 not in customer_index
        assert len(customer_index) == 3
        assert sorted(customer_index) == [7, 100, 200]

    def test_lookup_unknown(self, customer_index):
        assert customer_index.lookup(12345) is None

    def test_repr(self, customer_index):
        assert repr(customer_index) == "CustomerNameIndex(customers=3, source='customers_20240101.csv')"


class TestStageEvent:
    """Test suite for StageEvent and emit."""

    def test_event_is_frozen(self):
        event = StageEvent(stage="detect", record_count=1, elapsed_seconds=0.1)

        with pytest.raises(ValidationError):
            event.record_count = 2

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            StageEvent(stage="detect", record_count=-1, elapsed_seconds=0.0)

    def test_emit_without_callback(self):
        emit(None, "detect", 1, 0.1)

    def test_emit_builds_event(self):
        callback = Mock()

        emit(callback, "write", 4, 0.25, snapshot_date=date(2024, 10, 2), path="out.csv")

        event = callback.call_args[0][0]
        assert event.stage == "write"
        assert event.record_count == 4
        assert event.snapshot_date == date(2024, 10, 2)
        assert event.path == "out.csv"

    def test_emit_clamps_negative_elapsed_time(self):
        callback = Mock()

        emit(callback, "detect", 0, -0.001)

        assert callback.call_args[0][0].elapsed_seconds == 0.0


class TestAddressChangesSettings:
    """Test suite for AddressChangesSettings."""

    def test_defaults(self, tmp_path):
        settings = AddressChangesSettings(input_dir=tmp_path, output_dir=tmp_path)

        assert settings.address_prefix == "addresses"
        assert settings.customer_prefix == "customers"
        assert settings.output_prefix == "address_changes"
        assert settings.file_extension == ".csv"
        assert settings.read_buffer_size == 65536

    def test_paths_coerced(self, tmp_path):
        settings = AddressChangesSettings(input_dir=str(tmp_path), output_dir=str(tmp_path))

        assert settings.input_dir == tmp_path

    @pytest.mark.parametrize("extension", ["csv", ".", ""])
    def test_invalid_extension(self, tmp_path, extension):
        with pytest.raises(ValidationError):
            AddressChangesSettings(input_dir=tmp_path, output_dir=tmp_path, file_extension=extension)

    def test_buffer_size_minimum(self, tmp_path):
        with pytest.raises(ValidationError):
            AddressChangesSettings(input_dir=tmp_path, output_dir=tmp_path, read_buffer_size=10)

    def test_empty_prefix_rejected(self, tmp_path):
        with pytest.raises(ValidationError):
            AddressChangesSettings(input_dir=tmp_path, output_dir=tmp_path, address_prefix="")

    def test_from_config(self, tmp_path):
        loader = Mock()
        loader.load_environment_config.return_value = {
            "input_dir": str(tmp_path / "in"), "output_dir": str(tmp_path / "out")
        }
        loader.get_section.side_effect = lambda env, section: {
            "file_prefixes": {"addresses": "addr", "output": "delta"},
            "processing": {"file_extension": ".txt", "read_buffer_size": 4096},
        }[section]

        settings = AddressChangesSettings.from_config(loader, "development", output_dir=None)

        assert settings.input_dir == tmp_path / "in"
        assert settings.output_dir == tmp_path / "out"
        assert settings.address_prefix == "addr"
        assert settings.customer_prefix == "customers"
        assert settings.output_prefix == "delta"
        assert settings.file_extension == ".txt"
        assert settings.read_buffer_size == 4096

    def test_from_config_overrides(self, tmp_path):
        loader = Mock()
        loader.load_environment_config.return_value = {"input_dir": "a", "output_dir": "b"}
        loader.get_section.return_value = {}

        settings = AddressChangesSettings.from_config(loader, "development", input_dir=str(tmp_path))

        assert settings.input_dir == tmp_path
