
import uuid
from typing import Iterable, List
from catalog_sort.config import ConfigManager
from catalog_sort.context import Context, SortStatus
from catalog_sort.engine import sort_category
from catalog_sort.observability.logging import log_sort_result, log_category_event, log_score_decision
from catalog_sort.ranker.adapter import CatalogSourceAdapter
from catalog_sort.storage.base import SortOrderStore, SortOrderRow, view_sort_order

class CategorySortService:
    """
    カテゴリ単位の並び替え・元に戻す・一括実行をまとめるサービス。
    エンジン自体は状態を持たないため、同一カテゴリの同時実行は呼び出し側で防ぐこと。
    """
    def __init__(self, source: CatalogSourceAdapter, store: SortOrderStore, config_manager: ConfigManager, trace_scores: bool = False):
        self.source = source
        self.store = store
        self.config_manager = config_manager
        self.trace_scores = trace_scores

    def apply(self, category_id: str) -> str:
        config = self.config_manager.get_config()
        items = self.source.items(Context(category_id=category_id))

        result = sort_category(
            category_id,
            items,
            scoring_config=config.scoring,
            method=config.method,
            lookahead=config.lookahead,
            tracer=log_score_decision if self.trace_scores else None
        )
        log_sort_result(str(uuid.uuid4()), result)

        if result.status == SortStatus.EMPTY:
            return f"Category {category_id}: No products found."
        if result.status == SortStatus.NOT_APPLICABLE:
            return f"Category {category_id}: Only one brand found, skipping."

        self.store.save(category_id, result.assignment)
        return f"Updated {len(result.order)} products in category {category_id}."

    def reverse(self, category_id: str) -> str:
        swapped = self.store.reverse(category_id)
        log_category_event("category_reversed", category_id, swapped=swapped)
        return f"Reversed sorting for {swapped} products in category {category_id}."

    def view(self, category_id: str) -> List[SortOrderRow]:
        items = self.source.items(Context(category_id=category_id))
        return view_sort_order(self.store.get(category_id), items)

    def prepare_queue(self, category_ids: Iterable[str]) -> List[str]:
        excluded = self.config_manager.get_config().excluded_categories
        return [category_id for category_id in category_ids if category_id not in excluded]

    def apply_all(self, category_ids: Iterable[str]) -> List[str]:
        """
        除外リストを除いた全カテゴリを順番に処理する。
        1カテゴリの失敗はログに残して次へ進む。
        """
        messages = []
        for category_id in self.prepare_queue(category_ids):
            try:
                messages.append(self.apply(category_id))
            except Exception as e:
                log_category_event("category_sort_failed", category_id, error=str(e))
                messages.append(f"Error on category {category_id}: {e}")
        return messages
