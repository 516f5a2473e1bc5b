"""Exchange engines: liquidity, swaps and controller operations."""

from simpleswap.engine.admin import AdminEngine
from simpleswap.engine.context import ExchangeContext
from simpleswap.engine.guard import ReentrancyGuard
from simpleswap.engine.liquidity import LiquidityEngine
from simpleswap.engine.swap import SwapEngine
from simpleswap.engine.types import LiquidityResult, SwapResult, WithdrawalResult

__all__ = [
    "AdminEngine",
    "ExchangeContext",
    "LiquidityEngine",
    "ReentrancyGuard",
    "SwapEngine",
    "LiquidityResult",
    "SwapResult",
    "WithdrawalResult",
]
