"""Pool registry: canonical pair key to reserve pair.

The registry is the only owner of Pool records. Engines fetch a pool,
compute, and write the new reserve pair back in one call; they never keep
a reference between operations.
"""

from __future__ import annotations

from collections.abc import Iterator

import structlog

from simpleswap.errors import IdenticalTokens, InvalidTokenAddress
from simpleswap.models.types import is_valid_address, normalize_address
from simpleswap.pools.types import EMPTY_POOL, PairKey, Pool
from simpleswap.safe_int import UINT256_MAX

logger = structlog.get_logger()


def canonical_key(token_a: str, token_b: str) -> PairKey:
    """Order a pair of assets canonically (smaller address first).

    Args:
        token_a: First asset address (any case)
        token_b: Second asset address (any case)

    Returns:
        PairKey with the smaller normalized address as `first`

    Raises:
        IdenticalTokens: If both addresses normalize to the same asset
        InvalidTokenAddress: If either address is not 0x plus 40 hex digits
    """
    a = normalize_address(token_a)
    b = normalize_address(token_b)
    if a == b:
        raise IdenticalTokens(a)
    for token in (token_a, token_b):
        if not is_valid_address(token):
            raise InvalidTokenAddress(token)
    if a < b:
        return PairKey(a, b)
    return PairKey(b, a)


class PoolRegistry:
    """Registry of constant-product pools keyed by canonical pair.

    Absent keys read as an empty pool. Writes replace the whole immutable
    Pool record with a single dict assignment, so no reader can observe one
    reserve updated and the other stale.
    """

    def __init__(self) -> None:
        self._pools: dict[PairKey, Pool] = {}

    def get_reserves(self, key: PairKey) -> Pool:
        """Get the reserve pair for a canonical key (empty pool if absent)."""
        return self._pools.get(key, EMPTY_POOL)

    def reserves_for(self, token_a: str, token_b: str) -> tuple[int, int]:
        """Get reserves ordered to match the caller's (token_a, token_b).

        Raises:
            IdenticalTokens: If token_a and token_b are the same asset
        """
        key = canonical_key(token_a, token_b)
        pool = self.get_reserves(key)
        if normalize_address(token_a) == key.first:
            return pool.reserve_first, pool.reserve_second
        return pool.reserve_second, pool.reserve_first

    def set_reserves(self, token_a: str, token_b: str, reserve_a: int, reserve_b: int) -> None:
        """Write both reserves of a pool, given in caller order.

        Values are remapped to canonical order before the write. Writing
        (0, 0) returns the pool to its uninitialized state.

        Raises:
            IdenticalTokens: If token_a and token_b are the same asset
            ValueError: If a reserve is outside uint256, or exactly one
                reserve is zero
        """
        key = canonical_key(token_a, token_b)
        for reserve in (reserve_a, reserve_b):
            if not 0 <= reserve <= UINT256_MAX:
                raise ValueError(f"Reserve out of uint256 range: {reserve}")
        if (reserve_a == 0) != (reserve_b == 0):
            raise ValueError(f"Pool {key} would be half-funded: ({reserve_a}, {reserve_b})")

        if normalize_address(token_a) == key.first:
            pool = Pool(reserve_a, reserve_b)
        else:
            pool = Pool(reserve_b, reserve_a)

        if pool.is_empty:
            self._pools.pop(key, None)
            logger.debug("pool_drained", pool=str(key))
            return

        self._pools[key] = pool
        logger.debug(
            "reserves_updated",
            pool=str(key),
            reserve_first=pool.reserve_first,
            reserve_second=pool.reserve_second,
        )

    def pools(self) -> Iterator[tuple[PairKey, Pool]]:
        """Iterate over funded pools."""
        yield from list(self._pools.items())

    def __contains__(self, key: object) -> bool:
        return key in self._pools

    @property
    def pool_count(self) -> int:
        """Number of funded pools."""
        return len(self._pools)


__all__ = ["PoolRegistry", "canonical_key"]
