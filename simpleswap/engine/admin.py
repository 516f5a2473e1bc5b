"""Controller operations: pause, unpause, emergency withdrawal."""

from __future__ import annotations

import structlog

from simpleswap.engine.checks import (
    mutating_operation,
    require_positive,
    require_token,
)
from simpleswap.engine.context import ExchangeContext
from simpleswap.engine.journal import EffectJournal
from simpleswap.errors import (
    EnforcedPause,
    ExpectedPause,
    InvalidRecipient,
    Unauthorized,
)
from simpleswap.events import EmergencyWithdraw, Paused, Unpaused
from simpleswap.models.types import is_valid_address, is_zero_address, normalize_address

logger = structlog.get_logger()


class AdminEngine:
    """Circuit breaker and recovery operations, restricted to the controller."""

    def __init__(self, ctx: ExchangeContext) -> None:
        self.ctx = ctx

    def _require_controller(self, caller: str) -> str:
        if not self.ctx.access.is_controller(caller):
            raise Unauthorized(caller)
        return normalize_address(caller)

    def pause(self, *, caller: str) -> None:
        """Block every mutating entry point.

        Raises:
            Unauthorized: Caller is not the controller
            EnforcedPause: Already paused
        """
        ctx = self.ctx
        with mutating_operation(ctx, "pause", when_paused=True):
            controller = self._require_controller(caller)
            if ctx.pause_gate.is_paused():
                raise EnforcedPause()
            with EffectJournal(ctx) as journal:
                journal.set_paused(True)
                ctx.emit(Paused(controller=controller))
                journal.commit()
            logger.warning("exchange_paused", controller=controller[-8:])

    def unpause(self, *, caller: str) -> None:
        """Lift the pause.

        Raises:
            Unauthorized: Caller is not the controller
            ExpectedPause: Not paused
        """
        ctx = self.ctx
        with mutating_operation(ctx, "unpause", when_paused=True):
            controller = self._require_controller(caller)
            if not ctx.pause_gate.is_paused():
                raise ExpectedPause()
            with EffectJournal(ctx) as journal:
                journal.set_paused(False)
                ctx.emit(Unpaused(controller=controller))
                journal.commit()
            logger.info("exchange_unpaused", controller=controller[-8:])

    def emergency_withdraw(self, token: str, to: str, amount: int, *, caller: str) -> None:
        """Move assets out of exchange custody while paused.

        Pool reserves are left as recorded; the controller is expected to
        reconcile before unpausing.

        Raises:
            Unauthorized: Caller is not the controller
            ExpectedPause: Exchange is not paused
            InvalidTokenAddress, InvalidRecipient, ZeroAmount: Invalid parameters
        """
        ctx = self.ctx
        with mutating_operation(ctx, "emergency_withdraw", when_paused=True):
            controller = self._require_controller(caller)
            if not ctx.pause_gate.is_paused():
                raise ExpectedPause()
            token = require_token(token)
            if not is_valid_address(to) or is_zero_address(to):
                raise InvalidRecipient(to)
            to = normalize_address(to)
            require_positive("amount", amount)

            with EffectJournal(ctx) as journal:
                journal.push(token, to, amount)
                ctx.emit(
                    EmergencyWithdraw(controller=controller, token=token, to=to, amount=amount)
                )
                journal.commit()

            logger.warning(
                "emergency_withdraw",
                controller=controller[-8:],
                token=token[-8:],
                to=to[-8:],
                amount=amount,
            )


__all__ = ["AdminEngine"]
