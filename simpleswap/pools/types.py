"""Pool record and canonical pair key."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class PairKey(NamedTuple):
    """Canonically ordered asset pair (first < second by address)."""

    first: str
    second: str

    def __str__(self) -> str:
        return f"{self.first[-8:]}/{self.second[-8:]}"


@dataclass(frozen=True)
class Pool:
    """Reserve pair of one pool, in canonical order.

    Immutable: a reserve update replaces the whole record, so readers see
    either the old pair or the new pair, never a mix.
    """

    reserve_first: int = 0
    reserve_second: int = 0

    @property
    def is_empty(self) -> bool:
        """True for an uninitialized (or fully drained) pool."""
        return self.reserve_first == 0 and self.reserve_second == 0


EMPTY_POOL = Pool()

__all__ = ["PairKey", "Pool", "EMPTY_POOL"]
