"""Pool state: reserve records and the registry that owns them."""

from simpleswap.pools.registry import PoolRegistry, canonical_key
from simpleswap.pools.types import EMPTY_POOL, PairKey, Pool

__all__ = ["PoolRegistry", "canonical_key", "PairKey", "Pool", "EMPTY_POOL"]
