
from typing import Optional

class InvalidItemError(ValueError):
    """
    Raised when a catalog item cannot be scored (negative price or stock,
    duplicate id within one run).
    """
    def __init__(self, item_id: Optional[str], reason: str):
        self.item_id = item_id
        self.reason = reason
        super().__init__(f"Invalid item {item_id!r}: {reason}")

class AlternationCancelled(RuntimeError):
    def __init__(self, placed: int, total: int):
        self.placed = placed
        self.total = total
        super().__init__(f"Alternation cancelled after {placed} of {total} items")

class ConcurrentUpdateError(RuntimeError):
    def __init__(self, category_id: str, expected_version: Optional[int]):
        self.category_id = category_id
        self.expected_version = expected_version
        super().__init__(
            f"Sort order for category {category_id!r} changed concurrently (expected version {expected_version})"
        )
