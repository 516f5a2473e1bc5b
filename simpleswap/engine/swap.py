"""Swap engine: exact-input swaps plus price and reserve queries.

Swaps price off the pool's own reserves with no fee:
    amount_out = amount_in * reserve_out / (reserve_in + amount_in)
which keeps reserve_in * reserve_out from decreasing.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from simpleswap.amm import math as amm_math
from simpleswap.constants import PRICE_SCALE
from simpleswap.engine.checks import (
    mutating_operation,
    require_deadline,
    require_pair,
    require_positive,
    require_recipient,
)
from simpleswap.engine.context import ExchangeContext
from simpleswap.engine.journal import EffectJournal
from simpleswap.engine.types import SwapResult
from simpleswap.errors import BelowMinimumAmount, InsufficientLiquidity, InvalidPath
from simpleswap.events import Swap
from simpleswap.models.types import normalize_address
from simpleswap.safe_int import S

logger = structlog.get_logger()


class SwapEngine:
    """Executes swaps and answers read-only pricing queries.

    Queries take no guard: they read one immutable reserve record from the
    registry and never see a half-applied update.
    """

    def __init__(self, ctx: ExchangeContext, price_scale: int = PRICE_SCALE) -> None:
        self.ctx = ctx
        self.price_scale = price_scale

    def swap_exact_tokens_for_tokens(
        self,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
        *,
        caller: str,
        now: int,
    ) -> SwapResult:
        """Swap exactly `amount_in` of path[0] for as much path[1] as the pool gives.

        Args:
            amount_in: Exact input amount pulled from the caller
            amount_out_min: Least output the caller accepts
            path: [token_in, token_out]
            to: Recipient of the output
            deadline: Latest acceptable `now`
            caller: Account the input is pulled from
            now: Current time, compared against deadline

        Returns:
            SwapResult with the input and output amounts

        Raises:
            InvalidPath: Path does not hold exactly two tokens
            IdenticalTokens, InvalidTokenAddress, InvalidRecipient,
            SelfTransfer, ZeroAmount, DeadlinePassed: Invalid parameters
            InsufficientLiquidity: Pool has no reserves
            BelowMinimumAmount: Output below amount_out_min
            OverflowProtection: reserve_in + amount_in beyond uint256
        """
        ctx = self.ctx
        with mutating_operation(ctx, "swap"):
            if len(path) != 2:
                raise InvalidPath(len(path))
            token_in, token_out = path
            key = require_pair(token_in, token_out)
            to = require_recipient(ctx, to)
            require_positive("amount_in", amount_in)
            require_deadline(deadline, now)

            reserve_in, reserve_out = ctx.registry.reserves_for(token_in, token_out)
            amount_out = amm_math.get_amount_out(amount_in, reserve_in, reserve_out)
            if amount_out < amount_out_min:
                raise BelowMinimumAmount("amount_out", amount_out_min, amount_out)

            # get_amount_out already rejected a wrapping reserve_in + amount_in
            new_reserve_in = (S(reserve_in) + amount_in).value
            new_reserve_out = (S(reserve_out) - amount_out).value

            sender = normalize_address(caller)
            with EffectJournal(ctx) as journal:
                journal.pull(token_in, caller, amount_in)
                journal.push(token_out, to, amount_out)
                journal.set_reserves(token_in, token_out, new_reserve_in, new_reserve_out)
                ctx.emit(
                    Swap(
                        sender=sender,
                        token_in=normalize_address(token_in),
                        token_out=normalize_address(token_out),
                        amount_in=amount_in,
                        amount_out=amount_out,
                    )
                )
                journal.commit()

            logger.info(
                "swap_executed",
                pool=str(key),
                sender=sender[-8:],
                token_in=normalize_address(token_in)[-8:],
                amount_in=amount_in,
                amount_out=amount_out,
            )
            return SwapResult(amount_in=amount_in, amount_out=amount_out)

    def get_price(self, token_a: str, token_b: str) -> int:
        """Price of one token_a in token_b, as a fixed-point integer.

        Returns:
            reserve_b * price_scale // reserve_a

        Raises:
            IdenticalTokens: If token_a and token_b are the same asset
            InsufficientLiquidity: If the pool is empty
        """
        reserve_a, reserve_b = self.ctx.registry.reserves_for(token_a, token_b)
        if reserve_a == 0 or reserve_b == 0:
            raise InsufficientLiquidity("no price for an empty pool")
        with amm_math.overflow_guard("get_price"):
            return (S(reserve_b) * self.price_scale // S(reserve_a)).value

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Pure output quote; see simpleswap.amm.math.get_amount_out."""
        return amm_math.get_amount_out(amount_in, reserve_in, reserve_out)

    def get_reserves(self, token_a: str, token_b: str) -> tuple[int, int]:
        """Reserves of the pair in caller order (zeros for an unknown pool).

        Raises:
            IdenticalTokens: If token_a and token_b are the same asset
        """
        return self.ctx.registry.reserves_for(token_a, token_b)


__all__ = ["SwapEngine"]
