"""SimpleSwap: the public surface of the exchange.

Composes the liquidity, swap and admin engines over one shared context and
supplies `now` from an injected clock, so every operation here reads like
the host-facing API:

    exchange = SimpleSwap.in_memory(ExchangeConfig(controller=OWNER))
    exchange.ledger.credit(TOKEN_A, ALICE, 10**21)
    exchange.ledger.credit(TOKEN_B, ALICE, 10**21)
    exchange.add_liquidity(
        TOKEN_A, TOKEN_B, 10**18, 2 * 10**18, 0, 0, ALICE, deadline, caller=ALICE
    )
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence

import structlog

from simpleswap.capabilities import AccessControl, AssetTransfer, PauseGate, ShareIssuance
from simpleswap.config import DEFAULT_EXCHANGE_CONFIG, ExchangeConfig
from simpleswap.engine import (
    AdminEngine,
    ExchangeContext,
    LiquidityEngine,
    LiquidityResult,
    SwapEngine,
    SwapResult,
    WithdrawalResult,
)
from simpleswap.events import EventLog, EventSink
from simpleswap.ledger import Controller, ShareRegistry, TokenLedger
from simpleswap.pools.registry import PoolRegistry, canonical_key

logger = structlog.get_logger()

Clock = Callable[[], int]


def system_clock() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())


class SimpleSwap:
    """Two-asset constant-product exchange.

    Args:
        ctx: Shared engine context (registry, capabilities, guard, event sink)
        clock: Source of `now` for deadline checks
        price_scale: Fixed-point scale of get_price
    """

    def __init__(
        self,
        ctx: ExchangeContext,
        clock: Clock = system_clock,
        price_scale: int = DEFAULT_EXCHANGE_CONFIG.price_scale,
    ) -> None:
        self.ctx = ctx
        self.clock = clock
        self.liquidity = LiquidityEngine(ctx)
        self.swaps = SwapEngine(ctx, price_scale=price_scale)
        self.admin = AdminEngine(ctx)

    @classmethod
    def build(
        cls,
        config: ExchangeConfig,
        *,
        transfers: AssetTransfer,
        shares: ShareIssuance,
        access: AccessControl,
        pause_gate: PauseGate,
        emit: EventSink | None = None,
        clock: Clock = system_clock,
    ) -> SimpleSwap:
        """Create an exchange over host-provided capabilities."""
        ctx = ExchangeContext(
            address=config.exchange_address,
            registry=PoolRegistry(),
            transfers=transfers,
            shares=shares,
            access=access,
            pause_gate=pause_gate,
        )
        if emit is not None:
            ctx.emit = emit
        return cls(ctx, clock=clock, price_scale=config.price_scale)

    @classmethod
    def in_memory(
        cls,
        config: ExchangeConfig = DEFAULT_EXCHANGE_CONFIG,
        clock: Clock = system_clock,
    ) -> InMemorySimpleSwap:
        """Create an exchange backed entirely by the in-memory ledgers."""
        ledger = TokenLedger(custody=config.exchange_address)
        shares = ShareRegistry(name=config.share_name, symbol=config.share_symbol)
        controller = Controller(config.controller)
        events = EventLog()
        ctx = ExchangeContext(
            address=config.exchange_address,
            registry=PoolRegistry(),
            transfers=ledger,
            shares=shares,
            access=controller,
            pause_gate=controller,
            emit=events,
        )
        logger.debug(
            "exchange_created",
            exchange=config.exchange_address[-8:],
            controller=config.controller[-8:],
        )
        return InMemorySimpleSwap(
            ctx,
            ledger=ledger,
            share_registry=shares,
            events=events,
            clock=clock,
            price_scale=config.price_scale,
        )

    # --- Liquidity ---

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
    ) -> LiquidityResult:
        return self.liquidity.add_liquidity(
            token_a,
            token_b,
            amount_a_desired,
            amount_b_desired,
            amount_a_min,
            amount_b_min,
            to,
            deadline,
            caller=caller,
            now=self.clock(),
        )

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
    ) -> WithdrawalResult:
        return self.liquidity.remove_liquidity(
            token_a,
            token_b,
            liquidity,
            amount_a_min,
            amount_b_min,
            to,
            deadline,
            caller=caller,
            now=self.clock(),
        )

    # --- Swaps and queries ---

    def swap_exact_tokens_for_tokens(
        self,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
        *,
        caller: str,
    ) -> SwapResult:
        return self.swaps.swap_exact_tokens_for_tokens(
            amount_in, amount_out_min, path, to, deadline, caller=caller, now=self.clock()
        )

    def get_price(self, token_a: str, token_b: str) -> int:
        return self.swaps.get_price(token_a, token_b)

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        return self.swaps.get_amount_out(amount_in, reserve_in, reserve_out)

    def get_reserves(self, token_a: str, token_b: str) -> tuple[int, int]:
        return self.swaps.get_reserves(token_a, token_b)

    # --- Controller ---

    def pause(self, *, caller: str) -> None:
        self.admin.pause(caller=caller)

    def unpause(self, *, caller: str) -> None:
        self.admin.unpause(caller=caller)

    def emergency_withdraw(self, token: str, to: str, amount: int, *, caller: str) -> None:
        self.admin.emergency_withdraw(token, to, amount, caller=caller)

    @property
    def paused(self) -> bool:
        return self.ctx.pause_gate.is_paused()

    # --- Liquidity shares ---

    @property
    def name(self) -> str:
        return self.ctx.shares.name

    @property
    def symbol(self) -> str:
        return self.ctx.shares.symbol

    def total_supply(self, token_a: str, token_b: str) -> int:
        """Outstanding shares of the token_a/token_b pool."""
        return self.ctx.shares.total_supply(canonical_key(token_a, token_b))

    def balance_of(self, token_a: str, token_b: str, holder: str) -> int:
        """Shares of the token_a/token_b pool held by `holder`."""
        return self.ctx.shares.balance_of(canonical_key(token_a, token_b), holder)


class InMemorySimpleSwap(SimpleSwap):
    """SimpleSwap with direct handles on its in-memory capabilities."""

    def __init__(
        self,
        ctx: ExchangeContext,
        *,
        ledger: TokenLedger,
        share_registry: ShareRegistry,
        events: EventLog,
        clock: Clock = system_clock,
        price_scale: int = DEFAULT_EXCHANGE_CONFIG.price_scale,
    ) -> None:
        super().__init__(ctx, clock=clock, price_scale=price_scale)
        self.ledger = ledger
        self.share_registry = share_registry
        self.events = events


__all__ = ["SimpleSwap", "InMemorySimpleSwap", "system_clock"]
