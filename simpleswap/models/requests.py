"""Pydantic models for exchange API requests.

Amounts are uint256 decimal strings and accounts are 0x-prefixed addresses,
with camelCase aliases on the wire.
"""

from pydantic import BaseModel, Field

from simpleswap.models.types import Address, Uint256


class CallerRequest(BaseModel):
    """Base for requests made on behalf of an account."""

    caller: Address = Field(description="Account the operation acts for.")

    model_config = {"populate_by_name": True}


class AddLiquidityRequest(CallerRequest):
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    amount_a_desired: Uint256 = Field(alias="amountADesired")
    amount_b_desired: Uint256 = Field(alias="amountBDesired")
    amount_a_min: Uint256 = Field(default="0", alias="amountAMin")
    amount_b_min: Uint256 = Field(default="0", alias="amountBMin")
    to: Address
    deadline: int = Field(ge=0, description="Unix time after which the request is rejected.")


class RemoveLiquidityRequest(CallerRequest):
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    liquidity: Uint256
    amount_a_min: Uint256 = Field(default="0", alias="amountAMin")
    amount_b_min: Uint256 = Field(default="0", alias="amountBMin")
    to: Address
    deadline: int = Field(ge=0)


class SwapRequest(CallerRequest):
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out_min: Uint256 = Field(default="0", alias="amountOutMin")
    # Length is checked by the engine so a bad path reports InvalidPath
    path: list[Address]
    to: Address
    deadline: int = Field(ge=0)


class PauseRequest(CallerRequest):
    pass


class EmergencyWithdrawRequest(CallerRequest):
    token: Address
    to: Address
    amount: Uint256


class FundRequest(CallerRequest):
    """Controller credit of an account on the in-memory ledger."""

    token: Address
    account: Address
    amount: Uint256
