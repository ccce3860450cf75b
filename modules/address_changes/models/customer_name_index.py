"""CustomerNameIndex Model

Maps customer_id to the display name used in the change log. The name is
built once when the customer snapshot is loaded so that enrichment against a
very large address table is a plain dictionary lookup.
"""

from typing import Dict, Iterator, Mapping, Optional


class CustomerNameIndex(Mapping[int, str]):
    """Read-only customer_id -> display name lookup.
    
    Args:
        names: Mapping of customer id to "first_name last_name"
        source: Path of the customer snapshot the index was built from
    """
    
    def __init__(self, names: Dict[int, str], source: Optional[str] = None):
        self._names = names
        self.source = source
    
    @staticmethod
    def display_name(first_name: str, last_name: str) -> str:
        return f"{first_name} {last_name}"
    
    def lookup(self, customer_id: int) -> Optional[str]:
        """Return the display name for ``customer_id``, or None if unknown."""
        return self._names.get(customer_id)
    
    def __getitem__(self, customer_id: int) -> str:
        return self._names[customer_id]
    
    def __iter__(self) -> Iterator[int]:
        return iter(self._names)
    
    def __len__(self) -> int:
        return len(self._names)
    
    def __repr__(self) -> str:
        return f"CustomerNameIndex(customers={len(self._names)}, source={self.source!r})"
