"""Pydantic models and shared types for the exchange API."""

from simpleswap.models.requests import (
    AddLiquidityRequest,
    EmergencyWithdrawRequest,
    FundRequest,
    PauseRequest,
    RemoveLiquidityRequest,
    SwapRequest,
)
from simpleswap.models.responses import (
    AmountOutResponse,
    ErrorResponse,
    LiquidityResponse,
    PriceResponse,
    ReservesResponse,
    SwapResponse,
    WithdrawalResponse,
)
from simpleswap.models.types import Address, Uint256

__all__ = [
    # Types
    "Address",
    "Uint256",
    # Requests
    "AddLiquidityRequest",
    "RemoveLiquidityRequest",
    "SwapRequest",
    "PauseRequest",
    "EmergencyWithdrawRequest",
    "FundRequest",
    # Responses
    "LiquidityResponse",
    "WithdrawalResponse",
    "SwapResponse",
    "PriceResponse",
    "ReservesResponse",
    "AmountOutResponse",
    "ErrorResponse",
]
