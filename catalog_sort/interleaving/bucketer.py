
from typing import Dict, List
from catalog_sort.context import ScoredItem

def first_word(title: str) -> str:
    """
    タイトルの最初の単語(小文字)。空のタイトルは "" になる。
    """
    tokens = title.split()
    return tokens[0].lower() if tokens else ""

class TitleBucketer:
    def bucket(self, items: List[ScoredItem]) -> Dict[str, Dict[str, List[ScoredItem]]]:
        """
        brand -> first word -> items のように2段階でグルーピングする。
        入力の順序(ランク順)はグループ内で保持される。
        """
        buckets: Dict[str, Dict[str, List[ScoredItem]]] = {}
        for item in items:
            groups = buckets.setdefault(item.brand, {})
            groups.setdefault(first_word(item.title), []).append(item)
        return buckets
