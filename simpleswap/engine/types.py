"""Result types returned by the exchange engines."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LiquidityResult:
    """Amounts actually deposited and shares minted by add_liquidity."""

    amount_a: int
    amount_b: int
    liquidity: int


@dataclass(frozen=True)
class WithdrawalResult:
    """Amounts paid out by remove_liquidity, in caller order."""

    amount_a: int
    amount_b: int


@dataclass(frozen=True)
class SwapResult:
    """Amounts of an exact-input swap."""

    amount_in: int
    amount_out: int


__all__ = ["LiquidityResult", "WithdrawalResult", "SwapResult"]
