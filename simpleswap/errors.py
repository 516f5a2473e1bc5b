"""SimpleSwap error classes.

Every failure of an exchange operation is one of these. Errors carry the
offending field and, where applicable, both the threshold and the actual
value, exposed as attributes and through details().
"""

from __future__ import annotations

from typing import Any


class SimpleSwapError(Exception):
    """Base error for exchange operations."""

    def __init__(self, message: str | None = None, **fields: Any) -> None:
        self.fields = fields
        for name, value in fields.items():
            setattr(self, name, value)
        super().__init__(message or self._default_message())

    def _default_message(self) -> str:
        if not self.fields:
            return type(self).__name__
        rendered = ", ".join(f"{k}={v}" for k, v in self.fields.items())
        return f"{type(self).__name__}({rendered})"

    def details(self) -> dict[str, Any]:
        """Structured payload of the error, for logs and API responses."""
        return dict(self.fields)


# =============================================================================
# Input validation
# =============================================================================


class InputValidationError(SimpleSwapError):
    """Malformed call parameters."""

    pass


class InvalidTokenAddress(InputValidationError):
    """Token identifier is the zero address."""

    def __init__(self, token: str) -> None:
        super().__init__(token=token)


class InvalidRecipient(InputValidationError):
    """Recipient is the zero address."""

    def __init__(self, recipient: str) -> None:
        super().__init__(recipient=recipient)


class IdenticalTokens(InputValidationError):
    """Both sides of a pair are the same asset."""

    def __init__(self, token: str) -> None:
        super().__init__(token=token)


class ZeroAmount(InputValidationError):
    """A required-positive amount is zero."""

    def __init__(self, field: str) -> None:
        super().__init__(field=field)


class InvalidPath(InputValidationError):
    """Swap path does not hold exactly two assets."""

    def __init__(self, length: int) -> None:
        super().__init__(length=length)


class SelfTransfer(InputValidationError):
    """Recipient is the exchange's own custody account."""

    def __init__(self, recipient: str) -> None:
        super().__init__(recipient=recipient)


# =============================================================================
# Economic guards
# =============================================================================


class EconomicGuardError(SimpleSwapError):
    """Operation is well-formed but economically unacceptable."""

    pass


class BelowMinimumAmount(EconomicGuardError):
    """Computed amount is below the caller's slippage bound."""

    def __init__(self, field: str, minimum: int, actual: int) -> None:
        super().__init__(field=field, minimum=minimum, actual=actual)


class InsufficientLiquidity(EconomicGuardError):
    """Pool reserves or share supply cannot support the operation."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message)


class OverflowProtection(EconomicGuardError):
    """An intermediate value does not fit in uint256."""

    def __init__(self, operation: str) -> None:
        super().__init__(operation=operation)


# =============================================================================
# Temporal
# =============================================================================


class TemporalError(SimpleSwapError):
    """Operation submitted outside its validity window."""

    pass


class DeadlinePassed(TemporalError):
    """Current time is past the caller's deadline."""

    def __init__(self, deadline: int, now: int) -> None:
        super().__init__(deadline=deadline, now=now)


# =============================================================================
# Access guards
# =============================================================================


class AccessGuardError(SimpleSwapError):
    """Caller or exchange state does not permit the operation."""

    pass


class Unauthorized(AccessGuardError):
    """Caller is not the controller."""

    def __init__(self, caller: str) -> None:
        super().__init__(caller=caller)


class EnforcedPause(AccessGuardError):
    """Exchange is paused."""

    def __init__(self) -> None:
        super().__init__()


class ExpectedPause(AccessGuardError):
    """Exchange is not paused."""

    def __init__(self) -> None:
        super().__init__()


class ReentrantCall(AccessGuardError):
    """A mutating operation is already in progress."""

    def __init__(self, operation: str) -> None:
        super().__init__(operation=operation)


# =============================================================================
# Capabilities
# =============================================================================


class CapabilityError(SimpleSwapError):
    """An injected capability refused the request."""

    pass


class InsufficientBalance(CapabilityError):
    """Account does not hold enough of an asset."""

    def __init__(self, asset: str, account: str, required: int, available: int) -> None:
        super().__init__(asset=asset, account=account, required=required, available=available)


__all__ = [
    "SimpleSwapError",
    "InputValidationError",
    "InvalidTokenAddress",
    "InvalidRecipient",
    "IdenticalTokens",
    "ZeroAmount",
    "InvalidPath",
    "SelfTransfer",
    "EconomicGuardError",
    "BelowMinimumAmount",
    "InsufficientLiquidity",
    "OverflowProtection",
    "TemporalError",
    "DeadlinePassed",
    "AccessGuardError",
    "Unauthorized",
    "EnforcedPause",
    "ExpectedPause",
    "ReentrantCall",
    "CapabilityError",
    "InsufficientBalance",
]
