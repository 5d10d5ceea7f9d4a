
from typing import List, Protocol, Optional
from catalog_sort.context import ScoredItem
from catalog_sort.interleaving.method import LookaheadAlternator, BrandRoundRobinAlternator, DEFAULT_LOOKAHEAD

LOOKAHEAD = "lookahead"
ROUND_ROBIN = "round_robin"

class Alternator(Protocol):
    def alternate(self, items: List[ScoredItem]) -> List[ScoredItem]:
        ...

def get_alternator(method: str, seed: Optional[int] = None, lookahead: int = DEFAULT_LOOKAHEAD) -> Alternator:
    """
    Factory function to get the appropriate Alternator instance.

    Args:
        method (str): "lookahead" or "round_robin"
        seed (Optional[int]): Random seed for the round-robin shuffle
        lookahead (int): Window size for the lookahead strategy

    Returns:
        Alternator: An instance of a class implementing alternate method.
    """
    if method == ROUND_ROBIN:
        return BrandRoundRobinAlternator(seed=seed)
    else:
        # Default or "lookahead"
        return LookaheadAlternator(lookahead=lookahead)
