"""Address Changes Data Models

This package contains the record types loaded from snapshot files, the
customer name index used for enrichment, the structured progress event
emitted by each pipeline stage, and the module settings model.
"""

from .address_record import AddressRecord, AddressTable
from .customer_name_index import CustomerNameIndex
from .stage_event import StageEvent, ProgressCallback, emit
from .settings import AddressChangesSettings

__all__ = [
    'AddressRecord', 'AddressTable', 'CustomerNameIndex',
    'StageEvent', 'ProgressCallback', 'emit', 'AddressChangesSettings'
]
