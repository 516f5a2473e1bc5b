"""Constant-product AMM math.

Pure functions over uint256 integers. All rounding is toward zero (floor),
which always favors the pool: a depositor never receives extra shares, a
withdrawer never receives extra assets, and a trader never receives extra
output.

Formulae:
    quote:            amount_out = amount_in * reserve_out / reserve_in
    get_amount_out:   amount_out = amount_in * reserve_out / (reserve_in + amount_in)
    first deposit:    liquidity = sqrt(amount_a * amount_b)
    later deposits:   liquidity = min(a * supply / res_a, b * supply / res_b)
    withdrawal:       amount_x = liquidity * res_x / supply
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from simpleswap.errors import (
    BelowMinimumAmount,
    InsufficientLiquidity,
    OverflowProtection,
    ZeroAmount,
)
from simpleswap.safe_int import S, Uint256Overflow


@contextmanager
def overflow_guard(operation: str) -> Iterator[None]:
    """Report uint256 overflow inside `operation` as OverflowProtection."""
    try:
        yield
    except Uint256Overflow as err:
        raise OverflowProtection(operation) from err


def quote(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """Amount of the other asset with equal value at the current reserve ratio.

    Raises:
        InsufficientLiquidity: If either reserve is zero
    """
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientLiquidity("quote against an empty reserve")

    with overflow_guard("quote"):
        return (S(amount_in) * S(reserve_out) // S(reserve_in)).value


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """Output of an exact-input swap under constant-product pricing.

    Formula: amount_out = (amount_in * reserve_out) / (reserve_in + amount_in)

    Args:
        amount_in: Input asset amount
        reserve_in: Reserve of the input asset
        reserve_out: Reserve of the output asset

    Returns:
        Output asset amount, rounded down

    Raises:
        ZeroAmount: If amount_in is zero
        InsufficientLiquidity: If either reserve is zero
        OverflowProtection: If reserve_in + amount_in wraps past 2^256-1,
            or the numerator does not fit in uint256
    """
    if amount_in == 0:
        raise ZeroAmount("amount_in")
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientLiquidity("swap against an empty reserve")

    with overflow_guard("get_amount_out"):
        s_in = S(amount_in)
        s_reserve_in = S(reserve_in)
        # Wrap detection compares the modular sum against reserve_in
        denominator = s_reserve_in.wrapping_add(s_in)
        if denominator < s_reserve_in:
            raise OverflowProtection("get_amount_out")
        numerator = s_in * S(reserve_out)

    return (numerator // denominator).value


def integer_sqrt(y: int) -> int:
    """Floor square root by Babylonian iteration.

    Examples:
        integer_sqrt(16) == 4
        integer_sqrt(15) == 3
        integer_sqrt(1) == 1
    """
    if y < 2:
        return y
    if y < 4:
        return 1

    z = y
    x = (y >> 1) + 1
    while x < z:
        z = x
        x = (y // x + x) >> 1
    return z


def optimal_deposit(
    amount_a_desired: int,
    amount_b_desired: int,
    amount_a_min: int,
    amount_b_min: int,
    reserve_a: int,
    reserve_b: int,
) -> tuple[int, int]:
    """Largest deposit within the desired amounts that preserves the reserve ratio.

    One side is always deposited in full; the other is quoted from it, so the
    saturated side carries no rounding.

    Returns:
        Tuple of (amount_a, amount_b) to deposit

    Raises:
        BelowMinimumAmount: If the quoted side falls below its minimum
        InsufficientLiquidity: If either reserve is zero
    """
    amount_b_optimal = quote(amount_a_desired, reserve_a, reserve_b)
    if amount_b_optimal <= amount_b_desired:
        if amount_b_optimal < amount_b_min:
            raise BelowMinimumAmount("amount_b", amount_b_min, amount_b_optimal)
        return amount_a_desired, amount_b_optimal

    amount_a_optimal = quote(amount_b_desired, reserve_b, reserve_a)
    if amount_a_optimal < amount_a_min:
        raise BelowMinimumAmount("amount_a", amount_a_min, amount_a_optimal)
    return amount_a_optimal, amount_b_desired


def liquidity_for_deposit(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
) -> int:
    """Shares minted for a deposit into a funded pool.

    Takes the smaller of the two per-side estimates, each floored on its own.

    Raises:
        InsufficientLiquidity: If the deposit rounds to zero shares
    """
    with overflow_guard("liquidity_for_deposit"):
        supply = S(total_supply)
        from_a = S(amount_a) * supply // S(reserve_a)
        from_b = S(amount_b) * supply // S(reserve_b)

    liquidity = from_a.min(from_b).value
    if liquidity == 0:
        raise InsufficientLiquidity("deposit too small to mint shares")
    return liquidity


def withdrawal_amounts(
    liquidity: int,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
) -> tuple[int, int]:
    """Pro-rata reserves owed for burning `liquidity` shares.

    Raises:
        InsufficientLiquidity: If no shares are outstanding
    """
    if total_supply == 0:
        raise InsufficientLiquidity("no shares outstanding")

    with overflow_guard("withdrawal_amounts"):
        s_liquidity = S(liquidity)
        supply = S(total_supply)
        amount_a = s_liquidity * S(reserve_a) // supply
        amount_b = s_liquidity * S(reserve_b) // supply

    return amount_a.value, amount_b.value


def initial_liquidity(amount_a: int, amount_b: int) -> int:
    """Shares minted for the deposit that seeds an empty pool."""
    with overflow_guard("initial_liquidity"):
        product = S(amount_a) * S(amount_b)
    return integer_sqrt(product.value)


__all__ = [
    "quote",
    "get_amount_out",
    "integer_sqrt",
    "optimal_deposit",
    "liquidity_for_deposit",
    "withdrawal_amounts",
    "initial_liquidity",
    "overflow_guard",
]
