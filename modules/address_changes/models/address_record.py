"""AddressRecord Data Model

One row of an ``addresses_YYYYMMDD.csv`` snapshot. Records are built once per
row by the snapshot loader and never modified afterwards.
"""

from dataclasses import dataclass
from typing import ClassVar, Dict, Optional, Tuple


@dataclass(frozen=True)
class AddressRecord:
    """Immutable address snapshot row.
    
    ``start_date`` and ``end_date`` are kept as the literal strings from the
    file; the pipeline only ever compares them for equality.
    
    Attributes:
        address_id: Primary key, unique within one snapshot
        customer_id: Foreign key into the customer snapshot
        address_line1: Street line
        city: City name
        state_province: State or province
        postal_code: Postal code (kept as text, leading zeros matter)
        country: Country code
        start_date: Address validity start
        end_date: Address validity end, None when open-ended
    """
    
    address_id: int
    customer_id: int
    address_line1: str
    city: str
    state_province: str
    postal_code: str
    country: str
    start_date: str
    end_date: Optional[str] = None
    
    COMPARED_FIELDS: ClassVar[Tuple[str, ...]] = (
        'address_id', 'customer_id', 'address_line1', 'city', 'state_province',
        'postal_code', 'country', 'start_date', 'end_date',
    )
    
    def differs_from(self, other: 'AddressRecord') -> bool:
        """Return True when any attribute differs from ``other``.
        
        Fields are compared one by one. Two absent ``end_date`` values are
        equal; an absent value and an empty string are not.
        """
        for name in self.COMPARED_FIELDS:
            mine = getattr(self, name)
            theirs = getattr(other, name)
            if mine is None or theirs is None:
                if mine is not theirs:
                    return True
            elif mine != theirs:
                return True
        return False


AddressTable = Dict[int, AddressRecord]
