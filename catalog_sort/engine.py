
from typing import List, Optional
from catalog_sort.config import ScoringConfig
from catalog_sort.context import CatalogItem, SortResult, SortStatus
from catalog_sort.interleaving.api import get_alternator, LOOKAHEAD, ROUND_ROBIN
from catalog_sort.interleaving.method import DEFAULT_LOOKAHEAD
from catalog_sort.ranker.base import ScoreTracer
from catalog_sort.ranker.scorer import StockPriceScorer

def sort_category(
    category_id: str,
    items: List[CatalogItem],
    scoring_config: Optional[ScoringConfig] = None,
    method: str = LOOKAHEAD,
    seed: Optional[int] = None,
    lookahead: int = DEFAULT_LOOKAHEAD,
    tracer: Optional[ScoreTracer] = None
) -> SortResult:
    """
    1カテゴリ分の表示順を計算する。

    スコアリング -> (在庫なしフラグ, RankKey) でソート -> ブランド交互配置。
    アイテムが0件なら EMPTY、ブランドが2種類未満なら NOT_APPLICABLE
    (ランク順のみ、割り当てなし) を返す。
    """
    resolved_method = ROUND_ROBIN if method == ROUND_ROBIN else LOOKAHEAD

    if not items:
        return SortResult(category_id=category_id, status=SortStatus.EMPTY, method=resolved_method)

    scorer = StockPriceScorer(config=scoring_config, tracer=tracer)
    ranked = scorer.rank(items)

    if len({item.brand for item in ranked}) < 2:
        return SortResult(
            category_id=category_id,
            status=SortStatus.NOT_APPLICABLE,
            method=resolved_method,
            order=ranked
        )

    alternator = get_alternator(resolved_method, seed=seed, lookahead=lookahead)
    order = alternator.alternate(ranked)

    return SortResult(
        category_id=category_id,
        status=SortStatus.APPLIED,
        method=resolved_method,
        order=order
    )
