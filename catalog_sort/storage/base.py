"""
Persistence interfaces for per-category sort assignments.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol
from catalog_sort.context import CatalogItem

UNSORTED_POSITION = 999999

@dataclass(frozen=True)
class SortOrderRecord:
    """Two-slot versioned record: the live assignment and the one it replaced."""

    category_id: str
    current: Dict[str, int]
    previous: Optional[Dict[str, int]] = None
    version: int = 1

    def saved(self, assignment: Dict[str, int]) -> "SortOrderRecord":
        return SortOrderRecord(
            category_id=self.category_id,
            current=dict(assignment),
            previous=self.current,
            version=self.version + 1,
        )

    def reversed(self) -> "SortOrderRecord":
        if self.previous is None:
            return self
        return SortOrderRecord(
            category_id=self.category_id,
            current=self.previous,
            previous=self.current,
            version=self.version + 1,
        )

@dataclass(frozen=True)
class SortOrderRow:
    """One line of the sort order diagnostic view."""

    position: int
    item_id: str
    title: str
    brand: str
    stored_value: Optional[int]

class SortOrderStore(Protocol):
    """Storage operations used by the category sort service."""

    def get(self, category_id: str) -> Optional[SortOrderRecord]:
        """Return the record for a category if present."""

    def save(self, category_id: str, assignment: Dict[str, int]) -> SortOrderRecord:
        """Store a new assignment, archiving the current one as previous."""

    def reverse(self, category_id: str) -> int:
        """Swap current and previous; return how many items got their previous position back."""

def view_sort_order(record: Optional[SortOrderRecord], items: List[CatalogItem]) -> List[SortOrderRow]:
    """
    Diagnostic view of a category: items ordered by their stored position,
    items without one go last.
    """
    current = record.current if record is not None else {}

    def stored(item: CatalogItem) -> int:
        return current.get(item.id, UNSORTED_POSITION)

    ordered = sorted(items, key=lambda item: (stored(item), item.id))
    return [
        SortOrderRow(
            position=index + 1,
            item_id=item.id,
            title=item.title,
            brand=item.brand,
            stored_value=current.get(item.id),
        )
        for index, item in enumerate(ordered)
    ]
