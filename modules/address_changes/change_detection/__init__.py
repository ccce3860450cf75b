"""Change Detection for Address Snapshots

Components:
- ChangeType: NEW / UPDATED / DELETED classification
- AddressChange: One output row of the change log
- ChangeSummary: Per-date outcome reported by the pipeline
- detect_changes: Set-difference detector with customer name enrichment

Usage:
    from modules.address_changes.change_detection import detect_changes
    
    changes = detect_changes(previous_table, current_table, customer_index)
"""

from .change_detection_models import ChangeType, AddressChange, ChangeSummary, count_by_type
from .address_change_detector import detect_changes

__all__ = ['ChangeType', 'AddressChange', 'ChangeSummary', 'count_by_type', 'detect_changes']
