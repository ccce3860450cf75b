"""Address Changes Module

This module compares consecutive daily address snapshots and produces an
auditable change log (NEW / UPDATED / DELETED) enriched with customer names
resolved from the customer snapshot in effect on the processing date.
"""
