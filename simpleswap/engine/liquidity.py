"""Liquidity engine: deposits that mint shares, withdrawals that burn them.

The first deposit into an empty pool sets its price and mints
sqrt(amount_a * amount_b) shares. Later deposits are trimmed to the current
reserve ratio and mint shares pro rata. Withdrawals pay out the pro-rata
share of both reserves, rounded down.
"""

from __future__ import annotations

import structlog

from simpleswap.amm import math as amm_math
from simpleswap.engine.checks import (
    mutating_operation,
    require_deadline,
    require_pair,
    require_positive,
    require_recipient,
)
from simpleswap.engine.context import ExchangeContext
from simpleswap.engine.journal import EffectJournal
from simpleswap.engine.types import LiquidityResult, WithdrawalResult
from simpleswap.errors import BelowMinimumAmount, InsufficientLiquidity
from simpleswap.events import LiquidityAdded, LiquidityRemoved
from simpleswap.models.types import normalize_address
from simpleswap.safe_int import S

logger = structlog.get_logger()


class LiquidityEngine:
    """Adds and removes liquidity on behalf of callers.

    Holds no pool state of its own: every call reads reserves from the
    context's registry and writes the new pair back before returning.
    """

    def __init__(self, ctx: ExchangeContext) -> None:
        self.ctx = ctx

    def add_liquidity(
        self,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        caller: str,
        now: int,
    ) -> LiquidityResult:
        """Deposit a pair of assets and mint liquidity shares to `to`.

        Args:
            token_a: First asset of the pair (caller order)
            token_b: Second asset of the pair
            amount_a_desired: Most of token_a the caller will deposit
            amount_b_desired: Most of token_b the caller will deposit
            amount_a_min: Least of token_a the caller accepts depositing
            amount_b_min: Least of token_b the caller accepts depositing
            to: Recipient of the minted shares
            deadline: Latest acceptable `now`
            caller: Account the assets are pulled from
            now: Current time, compared against deadline

        Returns:
            LiquidityResult with the deposited amounts and minted shares

        Raises:
            IdenticalTokens, InvalidTokenAddress, InvalidRecipient,
            SelfTransfer, DeadlinePassed, ZeroAmount: Invalid parameters
            BelowMinimumAmount: Ratio-adjusted deposit below a minimum
            InsufficientLiquidity: Deposit too small to mint a share
            OverflowProtection: Amounts beyond uint256 arithmetic
        """
        ctx = self.ctx
        with mutating_operation(ctx, "add_liquidity"):
            key = require_pair(token_a, token_b)
            to = require_recipient(ctx, to)
            require_deadline(deadline, now)
            require_positive("amount_a_desired", amount_a_desired)
            require_positive("amount_b_desired", amount_b_desired)

            reserve_a, reserve_b = ctx.registry.reserves_for(token_a, token_b)

            if reserve_a == 0 and reserve_b == 0:
                amount_a, amount_b = amount_a_desired, amount_b_desired
                liquidity = amm_math.initial_liquidity(amount_a, amount_b)
            else:
                amount_a, amount_b = amm_math.optimal_deposit(
                    amount_a_desired,
                    amount_b_desired,
                    amount_a_min,
                    amount_b_min,
                    reserve_a,
                    reserve_b,
                )
                liquidity = amm_math.liquidity_for_deposit(
                    amount_a,
                    amount_b,
                    reserve_a,
                    reserve_b,
                    ctx.shares.total_supply(key),
                )

            # The saturated side (and a seeding deposit) is bounded too
            if amount_a < amount_a_min:
                raise BelowMinimumAmount("amount_a", amount_a_min, amount_a)
            if amount_b < amount_b_min:
                raise BelowMinimumAmount("amount_b", amount_b_min, amount_b)

            # Computed up front so nothing can fail after the effects begin
            with amm_math.overflow_guard("add_liquidity"):
                new_reserve_a = (S(reserve_a) + amount_a).value
                new_reserve_b = (S(reserve_b) + amount_b).value

            provider = normalize_address(caller)
            with EffectJournal(ctx) as journal:
                journal.pull(token_a, caller, amount_a)
                journal.pull(token_b, caller, amount_b)
                journal.mint(key, to, liquidity)
                journal.set_reserves(token_a, token_b, new_reserve_a, new_reserve_b)
                ctx.emit(
                    LiquidityAdded(
                        provider=provider,
                        token_a=normalize_address(token_a),
                        token_b=normalize_address(token_b),
                        amount_a=amount_a,
                        amount_b=amount_b,
                        liquidity=liquidity,
                    )
                )
                journal.commit()

            logger.info(
                "liquidity_added",
                pool=str(key),
                provider=provider[-8:],
                amount_a=amount_a,
                amount_b=amount_b,
                liquidity=liquidity,
            )
            return LiquidityResult(amount_a=amount_a, amount_b=amount_b, liquidity=liquidity)

    def remove_liquidity(
        self,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        caller: str,
        now: int,
    ) -> WithdrawalResult:
        """Burn the caller's shares and pay out the pro-rata reserves to `to`.

        Raises:
            IdenticalTokens, InvalidTokenAddress, InvalidRecipient,
            SelfTransfer, DeadlinePassed, ZeroAmount: Invalid parameters
            InsufficientLiquidity: More shares than are outstanding
            BelowMinimumAmount: Payout below a minimum
            InsufficientBalance: Caller holds fewer shares than `liquidity`
        """
        ctx = self.ctx
        with mutating_operation(ctx, "remove_liquidity"):
            key = require_pair(token_a, token_b)
            to = require_recipient(ctx, to)
            require_positive("liquidity", liquidity)
            require_deadline(deadline, now)

            reserve_a, reserve_b = ctx.registry.reserves_for(token_a, token_b)
            total_supply = ctx.shares.total_supply(key)
            if liquidity > total_supply:
                raise InsufficientLiquidity(
                    f"{liquidity} shares requested, {total_supply} outstanding"
                )

            amount_a, amount_b = amm_math.withdrawal_amounts(
                liquidity, reserve_a, reserve_b, total_supply
            )
            if amount_a < amount_a_min:
                raise BelowMinimumAmount("amount_a", amount_a_min, amount_a)
            if amount_b < amount_b_min:
                raise BelowMinimumAmount("amount_b", amount_b_min, amount_b)

            new_reserve_a = (S(reserve_a) - amount_a).value
            new_reserve_b = (S(reserve_b) - amount_b).value

            provider = normalize_address(caller)
            with EffectJournal(ctx) as journal:
                journal.burn(key, caller, liquidity)
                journal.push(token_a, to, amount_a)
                journal.push(token_b, to, amount_b)
                journal.set_reserves(token_a, token_b, new_reserve_a, new_reserve_b)
                ctx.emit(
                    LiquidityRemoved(
                        provider=provider,
                        token_a=normalize_address(token_a),
                        token_b=normalize_address(token_b),
                        amount_a=amount_a,
                        amount_b=amount_b,
                        liquidity=liquidity,
                    )
                )
                journal.commit()

            logger.info(
                "liquidity_removed",
                pool=str(key),
                provider=provider[-8:],
                amount_a=amount_a,
                amount_b=amount_b,
                liquidity=liquidity,
            )
            return WithdrawalResult(amount_a=amount_a, amount_b=amount_b)


__all__ = ["LiquidityEngine"]
