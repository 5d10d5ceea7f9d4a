
import json
import logging
from typing import Any, Optional
from catalog_sort.context import CatalogItem, SortResult

logger = logging.getLogger("catalog_sort")
logger.setLevel(logging.INFO)
# Handler設定は実行環境に依存するため、ここでは標準出力への出力のみを想定
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter('%(message)s'))
logger.addHandler(handler)

def log_sort_result(run_id: str, result: SortResult):
    """
    カテゴリの並び替え結果を構造化ログ(JSON)として出力する。
    """

    log_data = {
        "event": "category_sorted",
        "run_id": run_id,
        "category_id": result.category_id,
        "status": result.status.value,
        "method": result.method,
        "brand_count": result.brand_count,
        "items": [
            {
                "id": item.id,
                "brand": item.brand,
                "has_stock": item.has_stock,
                "value_score": item.rank_key[0],
                "position": position
            }
            for position, item in enumerate(result.order)
        ]
    }

    logger.info(json.dumps(log_data))

def log_score_decision(
    item: CatalogItem,
    delivery_rank: int,
    price_penalty: int,
    slow_location_override: bool,
    value_score: int
):
    """
    ScoreTracer implementation. Attach it to a Scorer to get one DEBUG record
    per scored item; records are dropped unless the logger is set to DEBUG.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    log_data = {
        "event": "item_scored",
        "item_id": item.id,
        "brand": item.brand,
        "price": item.price,
        "stock_by_location": item.stock_by_location,
        "delivery_rank": delivery_rank,
        "price_penalty": price_penalty,
        "slow_location_override": slow_location_override,
        "value_score": value_score
    }

    logger.debug(json.dumps(log_data))

def log_category_event(event: str, category_id: str, message: Optional[str] = None, **fields: Any):
    log_data = {
        "event": event,
        "category_id": category_id,
        **fields
    }
    if message is not None:
        log_data["message"] = message

    if event.endswith("_failed"):
        logger.error(json.dumps(log_data))
    else:
        logger.info(json.dumps(log_data))
