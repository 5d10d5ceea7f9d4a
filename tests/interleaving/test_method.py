
import pytest
from typing import List
from catalog_sort.context import ScoredItem
from catalog_sort.errors import AlternationCancelled
from catalog_sort.interleaving.method import LookaheadAlternator, BrandRoundRobinAlternator

def make_items(brands: List[str], titles: List[str] = None) -> List[ScoredItem]:
    # ランク順に並んだ入力を作る (value_score = index)
    items = []
    counts = {}
    for i, brand in enumerate(brands):
        counts[brand] = counts.get(brand, 0) + 1
        item_id = f"{brand}{counts[brand]}"
        title = titles[i] if titles else ""
        items.append(ScoredItem(id=item_id, brand=brand, rank_key=(i, item_id), has_stock=True, title=title))
    return items

def ids(items: List[ScoredItem]) -> List[str]:
    return [item.id for item in items]

def test_lookahead_window_bound():
    items = make_items(["A", "A", "A", "B", "A", "A"])

    result = LookaheadAlternator().alternate(items)

    assert result[0].id == "A1"
    assert ids(result).index("B1") <= 2
    assert ids(result) == ["A1", "B1", "A2", "A3", "A4", "A5"]

def test_lookahead_brand_beyond_window_is_not_pulled():
    items = make_items(["A", "A", "A", "A", "A", "B"])

    result = LookaheadAlternator().alternate(items)

    # Bはウィンドウ(3件)に入るまで前に出ない
    assert ids(result) == ["A1", "A2", "A3", "B1", "A4", "A5"]

def test_lookahead_alternates_two_brands():
    items = make_items(["A", "A", "B", "B", "C"])

    result = LookaheadAlternator().alternate(items)

    assert ids(result) == ["A1", "B1", "A2", "B2", "C1"]

def test_lookahead_single_brand_keeps_rank_order():
    items = make_items(["A"] * 6)

    result = LookaheadAlternator().alternate(items)

    assert ids(result) == ids(items)

def test_lookahead_single_item():
    items = make_items(["A"])
    assert ids(LookaheadAlternator().alternate(items)) == ["A1"]

def test_lookahead_empty():
    assert LookaheadAlternator().alternate([]) == []

def test_lookahead_is_permutation():
    brands = ["A", "B", "A", "A", "C", "C", "C", "B", "no-brand", "A", "no-brand", "B"]
    items = make_items(brands)

    result = LookaheadAlternator().alternate(items)

    assert len(result) == len(items)
    assert sorted(ids(result)) == sorted(ids(items))

def test_lookahead_does_not_mutate_input():
    items = make_items(["A", "A", "B"])
    before = list(items)

    LookaheadAlternator().alternate(items)

    assert items == before

def test_lookahead_custom_window():
    items = make_items(["A", "A", "A", "A", "B"])

    result = LookaheadAlternator(lookahead=4).alternate(items)

    assert ids(result) == ["A1", "B1", "A2", "A3", "A4"]

def test_lookahead_rejects_non_positive_window():
    with pytest.raises(ValueError):
        LookaheadAlternator(lookahead=0)

def test_lookahead_stop_signal():
    calls = {"n": 0}

    def should_stop():
        calls["n"] += 1
        return calls["n"] > 2

    alternator = LookaheadAlternator(should_stop=should_stop)
    with pytest.raises(AlternationCancelled) as excinfo:
        alternator.alternate(make_items(["A", "B", "A", "B"]))

    assert excinfo.value.placed == 2
    assert excinfo.value.total == 4

def test_round_robin_groups_by_brand_and_first_word():
    items = make_items(
        ["A", "A", "B", "A", "B"],
        ["Ceiling lamp", "Ceiling fan", "Desk lamp", "Floor lamp", "desk light"]
    )

    result = BrandRoundRobinAlternator(seed=1).alternate(items)
    result_ids = ids(result)

    assert sorted(result_ids) == sorted(ids(items))
    # 同じ先頭単語のグループはランク順のまま連続する
    a1 = result_ids.index("A1")
    assert result_ids[a1 + 1] == "A2"
    b1 = result_ids.index("B1")
    assert result_ids[b1 + 1] == "B2"

def test_round_robin_brand_order_by_best_item():
    items = make_items(["A", "B", "C"], ["x", "y", "z"])

    result = BrandRoundRobinAlternator(seed=3).alternate(items)

    assert ids(result) == ["A1", "B1", "C1"]

def test_round_robin_one_group_per_brand_per_round():
    items = make_items(["A", "A", "B"], ["one", "two", "three"])

    result = BrandRoundRobinAlternator(seed=0).alternate(items)

    # Bは1グループのみ。1巡目はAの1グループ→B、2巡目はAの残り
    assert result[1].id == "B1"
    assert {result[0].id, result[2].id} == {"A1", "A2"}

def test_round_robin_deterministic_with_seed():
    brands = ["A", "A", "A", "B", "B", "C", "A", "C"]
    titles = ["a b", "c d", "e f", "g h", "i j", "k l", "m n", "o p"]
    items = make_items(brands, titles)

    result1 = BrandRoundRobinAlternator(seed=42).alternate(items)
    result2 = BrandRoundRobinAlternator(seed=42).alternate(items)

    assert ids(result1) == ids(result2)
