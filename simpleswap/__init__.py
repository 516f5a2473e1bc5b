"""SimpleSwap: a two-asset constant-product exchange engine."""

from simpleswap.config import ExchangeConfig
from simpleswap.engine import LiquidityResult, SwapResult, WithdrawalResult
from simpleswap.exchange import InMemorySimpleSwap, SimpleSwap

__version__ = "0.1.0"

__all__ = [
    "ExchangeConfig",
    "SimpleSwap",
    "InMemorySimpleSwap",
    "LiquidityResult",
    "SwapResult",
    "WithdrawalResult",
]
