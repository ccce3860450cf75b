"""
Address Change Detector

Compares two address snapshots and classifies every address_id whose state
changed:

- in current only: NEW, built from the current record
- in both, any attribute different: UPDATED, built from the current record
- in previous only: DELETED, built from the previous record

Each change is enriched with the customer display name. A customer_id with no
entry in the customer index aborts detection: orphaned references point at
broken source data and must not produce a change log.

Cost is O(N) dictionary scans plus O(K log K) to sort the K changes.
"""

import time
from operator import attrgetter
from typing import List, Optional

from ..exceptions import ReferentialError
from ..models import AddressRecord, AddressTable, CustomerNameIndex, ProgressCallback, emit
from .change_detection_models import AddressChange, ChangeType


def detect_changes(previous: AddressTable, current: AddressTable,
                   customer_index: CustomerNameIndex,
                   progress: Optional[ProgressCallback] = None) -> List[AddressChange]:
    """Compute the change log between two address snapshots.
    
    Neither table is modified. The result is sorted by address_id ascending
    regardless of change type, so the same inputs always give the same list.
    
    Args:
        previous: Previous-day addresses keyed by address_id
        current: Current-day addresses keyed by address_id
        customer_index: Customer names for enrichment
        progress: Optional stage event callback
        
    Returns:
        Sorted list of AddressChange
        
    Raises:
        ReferentialError: A changed address references an unknown customer_id
    """
    start = time.perf_counter()
    changes: List[AddressChange] = []
    
    for address_id, record in current.items():
        before = previous.get(address_id)
        if before is None:
            changes.append(_enrich(ChangeType.NEW, record, customer_index))
        elif record.differs_from(before):
            changes.append(_enrich(ChangeType.UPDATED, record, customer_index))
    
    for address_id, record in previous.items():
        if address_id not in current:
            changes.append(_enrich(ChangeType.DELETED, record, customer_index))
    
    changes.sort(key=attrgetter('address_id'))
    
    emit(progress, "detect", len(changes), time.perf_counter() - start,
         detail=f"compared {len(previous)} previous / {len(current)} current")
    return changes


def _enrich(change_type: ChangeType, record: AddressRecord,
            customer_index: CustomerNameIndex) -> AddressChange:
    customer_name = customer_index.lookup(record.customer_id)
    if customer_name is None:
        raise ReferentialError(
            f"Orphan customer_id {record.customer_id} for address_id {record.address_id}: "
            f"no matching customer record found",
            customer_id=record.customer_id,
            address_id=record.address_id,
            customer_source=customer_index.source
        )
    return AddressChange.from_record(change_type, record, customer_name)
