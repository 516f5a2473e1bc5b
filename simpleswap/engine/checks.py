"""Parameter checks and the operation wrapper shared by all engines.

Every mutating entry point runs inside `mutating_operation`, which holds the
reentrancy guard, enforces the pause gate, and logs rejections.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from simpleswap.engine.context import ExchangeContext
from simpleswap.errors import (
    DeadlinePassed,
    EnforcedPause,
    InvalidRecipient,
    InvalidTokenAddress,
    SelfTransfer,
    SimpleSwapError,
    ZeroAmount,
)
from simpleswap.models.types import is_valid_address, is_zero_address, normalize_address
from simpleswap.pools.registry import canonical_key
from simpleswap.pools.types import PairKey

logger = structlog.get_logger()


@contextmanager
def mutating_operation(
    ctx: ExchangeContext,
    operation: str,
    *,
    when_paused: bool = False,
) -> Iterator[None]:
    """Run a state-changing operation under the guard.

    Args:
        ctx: Exchange context
        operation: Operation name, for the guard and for logs
        when_paused: Require the exchange to be paused instead of unpaused.
            The caller checks this itself (ExpectedPause) so only the
            EnforcedPause side is handled here.

    Raises:
        ReentrantCall: If another mutating operation is in progress
        EnforcedPause: If the exchange is paused and when_paused is False
    """
    try:
        with ctx.guard.hold(operation):
            if not when_paused and ctx.pause_gate.is_paused():
                raise EnforcedPause()
            yield
    except SimpleSwapError as err:
        fields = {**err.details(), "operation": operation, "error": type(err).__name__}
        logger.warning("operation_rejected", **fields)
        raise


def require_pair(token_a: str, token_b: str) -> PairKey:
    """Validate a token pair and return its canonical key.

    Identical tokens are reported before anything else about the pair.

    Raises:
        IdenticalTokens: If both tokens are the same asset
        InvalidTokenAddress: If either token is malformed or the zero address
    """
    key = canonical_key(token_a, token_b)
    require_token(token_a)
    require_token(token_b)
    return key


def require_token(token: str) -> str:
    """Raises InvalidTokenAddress for malformed addresses and the zero address."""
    if not is_valid_address(token) or is_zero_address(token):
        raise InvalidTokenAddress(token)
    return normalize_address(token)


def require_recipient(ctx: ExchangeContext, recipient: str) -> str:
    """Validate a recipient account.

    Raises:
        InvalidRecipient: If recipient is malformed or the zero address
        SelfTransfer: If recipient is the exchange itself
    """
    if not is_valid_address(recipient) or is_zero_address(recipient):
        raise InvalidRecipient(recipient)
    recipient = normalize_address(recipient)
    if recipient == ctx.address:
        raise SelfTransfer(recipient)
    return recipient


def require_deadline(deadline: int, now: int) -> None:
    """Raises DeadlinePassed once `now` is past `deadline`."""
    if deadline < now:
        raise DeadlinePassed(deadline, now)


def require_positive(field: str, amount: int) -> None:
    """Raises ZeroAmount unless `amount` is strictly positive."""
    if amount <= 0:
        raise ZeroAmount(field)


__all__ = [
    "mutating_operation",
    "require_pair",
    "require_token",
    "require_recipient",
    "require_deadline",
    "require_positive",
]
