
import random
from typing import Callable, List, Optional
from catalog_sort.context import ScoredItem
from catalog_sort.errors import AlternationCancelled
from catalog_sort.interleaving.bucketer import TitleBucketer

DEFAULT_LOOKAHEAD = 3

class LookaheadAlternator:
    def __init__(self, lookahead: int = DEFAULT_LOOKAHEAD, should_stop: Optional[Callable[[], bool]] = None):
        if lookahead < 1:
            raise ValueError(f"lookahead must be positive: {lookahead}")
        self.lookahead = lookahead
        self.should_stop = should_stop

    def alternate(self, items: List[ScoredItem]) -> List[ScoredItem]:
        """
        Bounded-lookahead greedy alternation:
        ランク順のリストから、直前と異なるブランドのアイテムを先頭から
        lookahead件の範囲で探して次に置く。見つからなければ先頭を置く。

        Args:
            items: ScoredItems sorted by (not has_stock, rank_key)

        Returns:
            A permutation of `items` with same-brand runs broken up where an
            alternative brand sits inside the window.
        """
        remaining = list(items)
        result: List[ScoredItem] = []
        last_brand: Optional[str] = None
        total = len(remaining)

        while remaining:
            if self.should_stop is not None and self.should_stop():
                raise AlternationCancelled(placed=len(result), total=total)

            candidate_index = 0
            if last_brand is not None:
                window = min(self.lookahead, len(remaining))
                for i in range(window):
                    if remaining[i].brand != last_brand:
                        candidate_index = i
                        break

            # splice, not swap: later items shift down by one
            picked = remaining.pop(candidate_index)
            result.append(picked)
            last_brand = picked.brand

        return result

class BrandRoundRobinAlternator:
    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)
        self.bucketer = TitleBucketer()

    def alternate(self, items: List[ScoredItem]) -> List[ScoredItem]:
        """
        Legacy round-robin alternation:
        ブランド -> タイトル先頭単語でグルーピングし、ブランド内のグループ順を
        ランダムにシャッフルした上で、ブランドを1グループずつ巡回して並べる。
        ブランドの巡回順は各ブランドの最上位アイテムのランク順。

        Output is randomized per run unless a seed is given.
        """
        buckets = self.bucketer.bucket(items)

        brand_queues = {}
        for brand, groups in buckets.items():
            group_list = list(groups.values())
            self.rng.shuffle(group_list)
            brand_queues[brand] = group_list

        # Rank brands by their best item
        brand_order = sorted(
            buckets.keys(),
            key=lambda b: min(item.sort_key for group in buckets[b].values() for item in group)
        )

        result: List[ScoredItem] = []
        still_going = True
        while still_going:
            still_going = False
            for brand in brand_order:
                queue = brand_queues[brand]
                if queue:
                    result.extend(queue.pop(0))
                    still_going = True

        return result
