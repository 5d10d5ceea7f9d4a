
from typing import List, Callable, Dict, Any
from catalog_sort.context import Context, CatalogItem, NO_BRAND

RECORD_FIELDS = ['id', 'brand', 'title', 'stock', 'price']

class CatalogSourceAdapter:
    """
    既存のカタログ取得関数(カテゴリID -> dictのリスト)をラップし、
    CatalogItemのリストに変換するアダプター
    """
    def __init__(self, fetch_func: Callable[[Dict[str, Any]], List[Dict[str, Any]]]):
        self.fetch_func = fetch_func

    def items(self, context: Context) -> List[CatalogItem]:
        ctx_dict = {
            'category_id': context.category_id,
            **context.params
        }

        raw_results = self.fetch_func(ctx_dict)

        # Raw Dict -> CatalogItem変換
        items = []
        for raw in raw_results:
            item_id = raw.get('id')
            if item_id is None:
                raise ValueError(f"catalog record without id in category {context.category_id}: {raw!r}")

            # ブランドが見つからない場合はセンチネル
            brand = raw.get('brand') or NO_BRAND
            price = raw.get('price')
            stock = raw.get('stock') or {}

            # その他のパラメーターはmetaに入れる
            meta = {k: v for k, v in raw.items() if k not in RECORD_FIELDS}

            items.append(CatalogItem(
                id=str(item_id),
                brand=str(brand),
                stock_by_location={str(loc): int(qty) for loc, qty in stock.items()},
                price=None if price in (None, '') else float(price),
                title=str(raw.get('title') or ''),
                meta=meta
            ))

        return items
