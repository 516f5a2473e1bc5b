"""Constant-product AMM math."""

from simpleswap.amm.math import (
    get_amount_out,
    initial_liquidity,
    integer_sqrt,
    liquidity_for_deposit,
    optimal_deposit,
    quote,
    withdrawal_amounts,
)

__all__ = [
    "quote",
    "get_amount_out",
    "integer_sqrt",
    "optimal_deposit",
    "liquidity_for_deposit",
    "withdrawal_amounts",
    "initial_liquidity",
]
