"""Shared state and collaborators of the exchange engines."""

from __future__ import annotations

from dataclasses import dataclass, field

from simpleswap.capabilities import AccessControl, AssetTransfer, PauseGate, ShareIssuance
from simpleswap.engine.guard import ReentrancyGuard
from simpleswap.events import Event, EventSink
from simpleswap.models.types import normalize_address
from simpleswap.pools.registry import PoolRegistry


def _discard(_event: Event) -> None:
    pass


@dataclass
class ExchangeContext:
    """Everything an engine needs for one call.

    The liquidity, swap and admin engines share one context, and with it one
    registry and one reentrancy guard.

    Attributes:
        address: The exchange's own custody account
        registry: Owner of all reserve pairs
        transfers: Asset movement capability
        shares: Liquidity-share issuance capability
        access: Controller check
        pause_gate: Circuit breaker
        emit: Event sink (defaults to discarding events)
        guard: Reentrancy guard shared by every mutating operation
    """

    address: str
    registry: PoolRegistry
    transfers: AssetTransfer
    shares: ShareIssuance
    access: AccessControl
    pause_gate: PauseGate
    emit: EventSink = _discard
    guard: ReentrancyGuard = field(default_factory=ReentrancyGuard)

    def __post_init__(self) -> None:
        self.address = normalize_address(self.address)


__all__ = ["ExchangeContext"]
