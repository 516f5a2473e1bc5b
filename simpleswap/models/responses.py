"""Pydantic models for exchange API responses."""

from typing import Any

from pydantic import BaseModel, Field

from simpleswap.models.types import Uint256


class LiquidityResponse(BaseModel):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")
    liquidity: Uint256

    model_config = {"populate_by_name": True}


class WithdrawalResponse(BaseModel):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class PriceResponse(BaseModel):
    """Price of one token_a in token_b, scaled by `scale`."""

    price: Uint256
    scale: Uint256

    model_config = {"populate_by_name": True}


class ReservesResponse(BaseModel):
    """Reserves in the order of the request path."""

    reserve_a: Uint256 = Field(alias="reserveA")
    reserve_b: Uint256 = Field(alias="reserveB")

    model_config = {"populate_by_name": True}


class AmountOutResponse(BaseModel):
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    """Body of every rejected exchange operation."""

    error: str = Field(description="Error class name, e.g. BelowMinimumAmount.")
    detail: dict[str, Any] = Field(default_factory=dict)
