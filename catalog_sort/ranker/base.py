
from typing import List, Protocol
from catalog_sort.context import CatalogItem, ScoredItem

class Ranker(Protocol):
    def rank(self, items: List[CatalogItem]) -> List[ScoredItem]:
        """
        CatalogItemのリストを受け取り、(在庫なしフラグ, RankKey) 昇順に並べたScoredItemのリストを返す
        """
        ...

class ScoreTracer(Protocol):
    def __call__(
        self,
        item: CatalogItem,
        delivery_rank: int,
        price_penalty: int,
        slow_location_override: bool,
        value_score: int
    ) -> None:
        ...
