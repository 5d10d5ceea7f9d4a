"""
In-process sort order store.
"""

from typing import Dict, Optional
from catalog_sort.storage.base import SortOrderRecord, SortOrderStore

class InMemorySortOrderStore(SortOrderStore):
    def __init__(self):
        self._records: Dict[str, SortOrderRecord] = {}

    def get(self, category_id: str) -> Optional[SortOrderRecord]:
        return self._records.get(category_id)

    def save(self, category_id: str, assignment: Dict[str, int]) -> SortOrderRecord:
        existing = self._records.get(category_id)
        if existing is None:
            record = SortOrderRecord(category_id=category_id, current=dict(assignment))
        else:
            record = existing.saved(assignment)
        self._records[category_id] = record
        return record

    def reverse(self, category_id: str) -> int:
        existing = self._records.get(category_id)
        if existing is None or existing.previous is None:
            return 0
        self._records[category_id] = existing.reversed()
        return len(existing.previous)
