
from typing import List, Optional, Set
from catalog_sort.config import ScoringConfig
from catalog_sort.context import CatalogItem, ScoredItem
from catalog_sort.errors import InvalidItemError
from catalog_sort.ranker.base import Ranker, ScoreTracer

class StockPriceScorer(Ranker):
    """
    Scores items on fulfillment speed (best stocked location) plus a price-tier
    penalty. The rank key is (value_score, item_id), so ties are always broken
    by id and sorting is reproducible.
    """
    def __init__(self, config: Optional[ScoringConfig] = None, tracer: Optional[ScoreTracer] = None):
        self.config = config or ScoringConfig()
        self.tracer = tracer

    def score(self, item: CatalogItem) -> ScoredItem:
        self._validate(item)
        config = self.config

        stocked = [location for location, quantity in item.stock_by_location.items() if quantity > 0]
        # 未知のロケーションは在庫ありとして数えるが、ランクには寄与しない
        known_ranks = [config.delivery_rank_of(location) for location in stocked]
        known_ranks = [rank for rank in known_ranks if rank is not None]

        has_stock = bool(stocked)
        delivery_rank = min(known_ranks) if known_ranks else config.out_of_stock_rank

        # Only when the slow location is the single stocked location
        slow_override = False
        if config.single_location_penalty is not None and len(stocked) == 1:
            slow_location, penalty = config.single_location_penalty
            if stocked[0] == slow_location:
                delivery_rank = penalty
                slow_override = True

        price_penalty = self.price_penalty(item.price)
        value_score = delivery_rank + price_penalty

        if self.tracer is not None:
            self.tracer(item, delivery_rank, price_penalty, slow_override, value_score)

        return ScoredItem(
            id=item.id,
            brand=item.brand,
            rank_key=(value_score, item.id),
            has_stock=has_stock,
            title=item.title
        )

    def price_penalty(self, price: Optional[float]) -> int:
        value = 0.0 if price is None else price
        for tier in self.config.price_tiers:
            if tier.matches(value):
                return tier.penalty
        # ScoringConfig guarantees an unbounded last tier
        raise AssertionError("price tiers do not cover price %r" % value)

    def rank(self, items: List[CatalogItem]) -> List[ScoredItem]:
        seen: Set[str] = set()
        for item in items:
            if item.id in seen:
                raise InvalidItemError(item.id, "duplicate item id")
            seen.add(item.id)

        scored = [self.score(item) for item in items]
        scored.sort(key=lambda s: s.sort_key)
        return scored

    def _validate(self, item: CatalogItem):
        if item.price is not None and item.price < 0:
            raise InvalidItemError(item.id, f"negative price {item.price}")
        for location, quantity in item.stock_by_location.items():
            if quantity < 0:
                raise InvalidItemError(item.id, f"negative stock {quantity} at location {location}")
