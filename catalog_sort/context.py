
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, List, Any, Tuple

NO_BRAND = "no-brand"

# (value_score, item_id)
RankKey = Tuple[int, str]

@dataclass
class CatalogItem:
    id: str
    brand: str = NO_BRAND
    stock_by_location: Dict[str, int] = field(default_factory=dict)
    price: Optional[float] = None
    title: str = ""
    meta: Dict[str, Any] = field(default_factory=dict)

@dataclass
class ScoredItem:
    id: str
    brand: str
    rank_key: RankKey
    has_stock: bool
    title: str = ""

    @property
    def sort_key(self) -> Tuple[bool, RankKey]:
        # 在庫ありが先、その後RankKey昇順
        return (not self.has_stock, self.rank_key)

class SortStatus(str, Enum):
    APPLIED = "applied"
    NOT_APPLICABLE = "not_applicable"
    EMPTY = "empty"

@dataclass
class SortResult:
    category_id: str
    status: SortStatus
    method: str
    order: List[ScoredItem] = field(default_factory=list)

    @property
    def assignment(self) -> Dict[str, int]:
        """
        item id -> 0始まりの表示位置。APPLIED以外は空。
        """
        if self.status != SortStatus.APPLIED:
            return {}
        return {item.id: position for position, item in enumerate(self.order)}

    @property
    def brand_count(self) -> int:
        return len({item.brand for item in self.order})

@dataclass
class Context:
    category_id: str
    params: Dict[str, Any] = field(default_factory=dict)
