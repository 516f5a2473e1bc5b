"""Rollback journal for the effects of one operation.

Each effect performed through the journal registers its inverse. If the
operation fails before commit(), the inverses run newest first and the
original error propagates, leaving balances, share supply, reserves and
the pause flag exactly as they were before the call. Events are emitted
inside the journal, so a failing event sink undoes the operation too.

Usage:
    with EffectJournal(ctx) as journal:
        journal.pull(token_a, caller, amount_a)
        journal.mint(key, to, liquidity)
        journal.set_reserves(token_a, token_b, new_reserve_a, new_reserve_b)
        ctx.emit(event)
        journal.commit()
"""

from __future__ import annotations

from contextlib import ExitStack
from types import TracebackType

import structlog

from simpleswap.engine.context import ExchangeContext
from simpleswap.pools.registry import canonical_key
from simpleswap.pools.types import PairKey

logger = structlog.get_logger()


class EffectJournal:
    """Performs transfers, share changes and state writes, remembering how to undo them."""

    def __init__(self, ctx: ExchangeContext) -> None:
        self._ctx = ctx
        self._undo = ExitStack()
        self._effects = 0

    def __enter__(self) -> EffectJournal:
        self._undo.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc is not None and self._effects:
            logger.info("operation_rolled_back", effects=self._effects, error=type(exc).__name__)
        return self._undo.__exit__(exc_type, exc, tb)

    def pull(self, asset: str, sender: str, amount: int) -> None:
        """Move `amount` of `asset` from `sender` into exchange custody."""
        if amount == 0:
            return
        transfers = self._ctx.transfers
        transfers.transfer_in(asset, sender, self._ctx.address, amount)
        self._record(transfers.transfer_out, asset, sender, amount)

    def push(self, asset: str, recipient: str, amount: int) -> None:
        """Move `amount` of `asset` from exchange custody to `recipient`."""
        if amount == 0:
            return
        transfers = self._ctx.transfers
        transfers.transfer_out(asset, recipient, amount)
        self._record(transfers.transfer_in, asset, recipient, self._ctx.address, amount)

    def mint(self, key: PairKey, to: str, amount: int) -> None:
        shares = self._ctx.shares
        shares.mint(key, to, amount)
        self._record(shares.burn, key, to, amount)

    def burn(self, key: PairKey, holder: str, amount: int) -> None:
        shares = self._ctx.shares
        shares.burn(key, holder, amount)
        self._record(shares.mint, key, holder, amount)

    def set_reserves(self, token_a: str, token_b: str, reserve_a: int, reserve_b: int) -> None:
        """Write a pool's reserves (caller order), restoring the old pair on rollback."""
        registry = self._ctx.registry
        key = canonical_key(token_a, token_b)
        previous = registry.get_reserves(key)
        registry.set_reserves(token_a, token_b, reserve_a, reserve_b)
        self._record(
            registry.set_reserves,
            key.first,
            key.second,
            previous.reserve_first,
            previous.reserve_second,
        )

    def set_paused(self, paused: bool) -> None:
        gate = self._ctx.pause_gate
        was_paused = gate.is_paused()
        gate.set_paused(paused)
        self._record(gate.set_paused, was_paused)

    def commit(self) -> None:
        """Keep every effect; nothing is undone after this."""
        self._undo.pop_all()
        self._effects = 0

    def _record(self, inverse, *args) -> None:  # type: ignore[no-untyped-def]
        self._undo.callback(inverse, *args)
        self._effects += 1


__all__ = ["EffectJournal"]
