"""Capabilities the exchange consumes from its host.

The engines depend only on these protocols. Asset custody, share
bookkeeping, access control and the pause flag live behind them, so a
host can back them with anything that honors the contracts below;
simpleswap.ledger provides in-memory implementations.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from simpleswap.pools.types import PairKey


@runtime_checkable
class AssetTransfer(Protocol):
    """Moves assets between accounts and the exchange's custody account.

    Implementations must move exactly the requested amount or raise; no
    fee-on-transfer behavior is assumed.
    """

    def transfer_in(self, asset: str, sender: str, recipient: str, amount: int) -> None:
        """Pull `amount` of `asset` from `sender` into `recipient` (the exchange)."""
        ...

    def transfer_out(self, asset: str, recipient: str, amount: int) -> None:
        """Push `amount` of `asset` from exchange custody to `recipient`."""
        ...


@runtime_checkable
class ShareIssuance(Protocol):
    """Liquidity-share bookkeeping, 1:1 and non-rebasing, per pool."""

    @property
    def name(self) -> str: ...

    @property
    def symbol(self) -> str: ...

    def mint(self, key: PairKey, to: str, amount: int) -> None:
        """Create `amount` shares of pool `key` for `to`."""
        ...

    def burn(self, key: PairKey, holder: str, amount: int) -> None:
        """Destroy `amount` shares of pool `key` held by `holder`."""
        ...

    def total_supply(self, key: PairKey) -> int:
        """Outstanding shares of pool `key`."""
        ...

    def balance_of(self, key: PairKey, holder: str) -> int:
        """Shares of pool `key` held by `holder`."""
        ...


@runtime_checkable
class AccessControl(Protocol):
    """Designates the single controller identity."""

    def is_controller(self, identity: str) -> bool: ...


@runtime_checkable
class PauseGate(Protocol):
    """Circuit breaker blocking every mutating entry point while set."""

    def is_paused(self) -> bool: ...

    def set_paused(self, paused: bool) -> None: ...


__all__ = ["AssetTransfer", "ShareIssuance", "AccessControl", "PauseGate"]
