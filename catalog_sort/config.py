
import json
import time
import logging
import boto3
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Tuple, FrozenSet

logger = logging.getLogger("catalog_sort")

PARAM_PREFIX = '/catalog-sort'

@dataclass(frozen=True)
class PriceTier:
    # upper_bound=None は上限なし(最終ティア)
    upper_bound: Optional[float]
    penalty: int
    inclusive: bool = False

    def matches(self, price: float) -> bool:
        if self.upper_bound is None:
            return True
        if self.inclusive:
            return price <= self.upper_bound
        return price < self.upper_bound

def default_price_tiers() -> List[PriceTier]:
    return [
        PriceTier(upper_bound=70, penalty=10),
        PriceTier(upper_bound=150, penalty=-2),
        PriceTier(upper_bound=200, penalty=0, inclusive=True),
        PriceTier(upper_bound=300, penalty=5, inclusive=True),
        PriceTier(upper_bound=None, penalty=15),
    ]

def default_location_priority() -> Dict[str, int]:
    # Lower = faster fulfillment
    return {
        '3113': 1,  # 1-2 working days
        '3114': 2,  # 3-4 working days
        '3211': 3,  # 8-10 working days
        '3115': 4,  # 14-21 working days
    }

@dataclass
class ScoringConfig:
    location_priority: Dict[str, int] = field(default_factory=default_location_priority)
    price_tiers: List[PriceTier] = field(default_factory=default_price_tiers)
    priority_location: Optional[str] = '3113'
    priority_location_rank: int = -1000
    single_location_penalty: Optional[Tuple[str, int]] = ('3115', 50)
    out_of_stock_rank: int = 999

    def __post_init__(self):
        if not self.price_tiers or self.price_tiers[-1].upper_bound is not None:
            raise ValueError("price_tiers must end with an unbounded tier")

    def delivery_rank_of(self, location: str) -> Optional[int]:
        """
        ロケーションの配送ランクを返す。未知のロケーションはNone。
        """
        if location == self.priority_location:
            return self.priority_location_rank
        return self.location_priority.get(location)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringConfig":
        kwargs: Dict[str, Any] = {}
        if 'location_priority' in data:
            kwargs['location_priority'] = {str(k): int(v) for k, v in data['location_priority'].items()}
        if 'price_tiers' in data:
            kwargs['price_tiers'] = [
                PriceTier(
                    upper_bound=None if t.get('upper_bound') is None else float(t['upper_bound']),
                    penalty=int(t['penalty']),
                    inclusive=bool(t.get('inclusive', False))
                )
                for t in data['price_tiers']
            ]
        if 'priority_location' in data:
            location = data['priority_location']
            kwargs['priority_location'] = None if location is None else str(location)
        if 'priority_location_rank' in data:
            kwargs['priority_location_rank'] = int(data['priority_location_rank'])
        if 'single_location_penalty' in data:
            penalty = data['single_location_penalty']
            kwargs['single_location_penalty'] = None if penalty is None else (str(penalty[0]), int(penalty[1]))
        if 'out_of_stock_rank' in data:
            kwargs['out_of_stock_rank'] = int(data['out_of_stock_rank'])
        return cls(**kwargs)

DEFAULT_EXCLUDED_CATEGORIES: FrozenSet[str] = frozenset({'2239', '176', '177', '175'})

@dataclass
class SortConfig:
    method: str = "lookahead"
    lookahead: int = 3
    excluded_categories: FrozenSet[str] = DEFAULT_EXCLUDED_CATEGORIES
    scoring: ScoringConfig = field(default_factory=ScoringConfig)

class ConfigManager:
    def __init__(self, ttl_seconds: float = 60.0):
        self.ttl_seconds = ttl_seconds
        self._cached_config: Optional[SortConfig] = None
        self._last_fetched_at: float = 0.0
        self._ssm_client = boto3.client('ssm')

    def get_config(self) -> SortConfig:
        current_time = time.time()

        if self._cached_config and (current_time - self._last_fetched_at < self.ttl_seconds):
            return self._cached_config

        try:
            config = self._fetch_from_ssm()
            self._cached_config = config
            self._last_fetched_at = current_time
            return config
        except Exception as e:
            logger.warning(json.dumps({"event": "config_fetch_failed", "error": str(e)}))
            return self._get_default_config()

    def _fetch_from_ssm(self) -> SortConfig:
        names = [
            f'{PARAM_PREFIX}/method',
            f'{PARAM_PREFIX}/lookahead',
            f'{PARAM_PREFIX}/excluded_categories',
            f'{PARAM_PREFIX}/scoring'
        ]

        response = self._ssm_client.get_parameters(Names=names)
        params = {p['Name']: p['Value'] for p in response.get('Parameters', [])}

        method = params.get(f'{PARAM_PREFIX}/method', 'lookahead')
        lookahead = int(params.get(f'{PARAM_PREFIX}/lookahead', '3'))
        if lookahead < 1:
            raise ValueError(f"lookahead must be positive: {lookahead}")

        # "2239,176" のようなカンマ区切り
        excluded_str = params.get(f'{PARAM_PREFIX}/excluded_categories')
        if excluded_str is None:
            excluded = DEFAULT_EXCLUDED_CATEGORIES
        else:
            excluded = frozenset(c.strip() for c in excluded_str.split(',') if c.strip())

        scoring_json = params.get(f'{PARAM_PREFIX}/scoring')
        scoring = ScoringConfig.from_dict(json.loads(scoring_json)) if scoring_json else ScoringConfig()

        return SortConfig(
            method=method,
            lookahead=lookahead,
            excluded_categories=excluded,
            scoring=scoring
        )

    def _get_default_config(self) -> SortConfig:
        return SortConfig()
