"""Shared fixtures for address change tests."""

from pathlib import Path
from typing import Iterable

import pytest

from modules.address_changes.models import AddressChangesSettings, AddressRecord, CustomerNameIndex

ADDRESS_HEADER = ("address_id,customer_id,address_line1,city,state_province,"
                  "postal_code,country,start_date,end_date")
CUSTOMER_HEADER = "id,prefix,first_name,last_name,sort_name,suffix,birthdate"


def _address_row(address_id, customer_id, line1="1 Main St", city="Springfield",
                 state="IL", postal="62704", country="US", start="2020-01-01",
                 end="NULL") -> str:
    return f'{address_id},{customer_id},"{line1}","{city}","{state}","{postal}",{country},{start},{end}'


def _customer_row(customer_id, first, last) -> str:
    return f'{customer_id},NULL,"{first}","{last}","{last}, {first}",NULL,1980-05-17'


@pytest.fixture
def address_row():
    """Build one address CSV line; end defaults to NULL."""
    return _address_row


@pytest.fixture
def customer_row():
    """Build one customer CSV line."""
    return _customer_row


@pytest.fixture
def input_dir(tmp_path) -> Path:
    directory = tmp_path / "input"
    directory.mkdir()
    return directory


@pytest.fixture
def output_dir(tmp_path) -> Path:
    directory = tmp_path / "output"
    directory.mkdir()
    return directory


@pytest.fixture
def write_csv(input_dir):
    """Write lines (plus trailing newline) to a file in the input directory."""
    def _write(name: str, lines: Iterable[str], directory: Path = None) -> Path:
        path = (directory or input_dir) / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
def write_addresses(write_csv):
    """Write addresses_<stamp>.csv with the standard header."""
    def _write(stamp: str, rows: Iterable[str]) -> Path:
        return write_csv(f"addresses_{stamp}.csv", [ADDRESS_HEADER, *rows])
    return _write


@pytest.fixture
def write_customers(write_csv):
    """Write customers_<stamp>.csv with the standard header."""
    def _write(stamp: str, rows: Iterable[str]) -> Path:
        return write_csv(f"customers_{stamp}.csv", [CUSTOMER_HEADER, *rows])
    return _write


@pytest.fixture
def settings(input_dir, output_dir) -> AddressChangesSettings:
    return AddressChangesSettings(input_dir=input_dir, output_dir=output_dir)


@pytest.fixture
def make_record():
    """Build an AddressRecord with sensible defaults."""
    def _make(address_id: int, customer_id: int = 100, /, **overrides) -> AddressRecord:
        values = dict(
            address_id=address_id,
            customer_id=customer_id,
            address_line1="1 Main St",
            city="Springfield",
            state_province="IL",
            postal_code="62704",
            country="US",
            start_date="2020-01-01",
            end_date=None,
        )
        values.update(overrides)
        return AddressRecord(**values)
    return _make


@pytest.fixture
def customer_index() -> CustomerNameIndex:
    return CustomerNameIndex({100: "Jane Doe", 7: "John Smith", 200: "José Núñez"},
                             source="customers_20240101.csv")
