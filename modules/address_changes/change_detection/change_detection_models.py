"""
Change Detection Data Models

Defines the change classification, the output row produced for each changed
address, and the per-date summary reported by the pipeline.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, Optional

from pydantic import BaseModel, Field, model_validator

from ..models import AddressRecord


class ChangeType(str, Enum):
    """Change classification for an address_id between two snapshots.
    
    Values:
        NEW: Present in the current snapshot only
        UPDATED: Present in both, at least one attribute differs
        DELETED: Present in the previous snapshot only
    """
    NEW = "NEW"
    UPDATED = "UPDATED"
    DELETED = "DELETED"


@dataclass(frozen=True)
class AddressChange:
    """One row of the change log.
    
    Carries every AddressRecord attribute plus the change type and the
    customer display name resolved during enrichment.
    """
    change_type: ChangeType
    address_id: int
    customer_id: int
    customer_name: str
    address_line1: str
    city: str
    state_province: str
    postal_code: str
    country: str
    start_date: str
    end_date: Optional[str]
    
    @classmethod
    def from_record(cls, change_type: ChangeType, record: AddressRecord,
                    customer_name: str) -> 'AddressChange':
        return cls(
            change_type=change_type,
            address_id=record.address_id,
            customer_id=record.customer_id,
            customer_name=customer_name,
            address_line1=record.address_line1,
            city=record.city,
            state_province=record.state_province,
            postal_code=record.postal_code,
            country=record.country,
            start_date=record.start_date,
            end_date=record.end_date,
        )


class ChangeSummary(BaseModel):
    """Outcome of processing one effective date."""
    
    effective_date: date = Field(..., description="Date of the current snapshot")
    previous_date: date = Field(..., description="Date of the snapshot compared against")
    customer_snapshot_date: date = Field(..., description="Customer snapshot used for enrichment")
    previous_records: int = Field(ge=0, description="Addresses in the previous snapshot")
    current_records: int = Field(ge=0, description="Addresses in the current snapshot")
    new_records: int = Field(ge=0)
    updated_records: int = Field(ge=0)
    deleted_records: int = Field(ge=0)
    output_path: Optional[str] = Field(None, description="Change log path, None on dry runs")
    
    @property
    def total_changes(self) -> int:
        return self.new_records + self.updated_records + self.deleted_records
    
    @model_validator(mode='after')
    def validate_dates(self) -> 'ChangeSummary':
        """The compared snapshot must precede the effective date."""
        if self.previous_date >= self.effective_date:
            raise ValueError('previous_date must be earlier than effective_date')
        if self.customer_snapshot_date > self.effective_date:
            raise ValueError('customer_snapshot_date cannot be after effective_date')
        return self
    
    def get_change_summary(self) -> str:
        """Get a human-readable one-line summary."""
        return (
            f"{self.effective_date:%Y%m%d}: {self.total_changes} changes "
            f"(NEW={self.new_records}, UPDATED={self.updated_records}, "
            f"DELETED={self.deleted_records})"
        )


def count_by_type(changes: Iterable[AddressChange]) -> Dict[ChangeType, int]:
    """Count changes per ChangeType; every type is present in the result."""
    counts = {change_type: 0 for change_type in ChangeType}
    for change in changes:
        counts[change.change_type] += 1
    return counts
