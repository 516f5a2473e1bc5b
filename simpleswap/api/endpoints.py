"""API endpoints for the SimpleSwap exchange."""

from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path, Query

from simpleswap.config import ExchangeConfig
from simpleswap.errors import Unauthorized
from simpleswap.exchange import InMemorySimpleSwap, SimpleSwap
from simpleswap.models import (
    AddLiquidityRequest,
    AmountOutResponse,
    EmergencyWithdrawRequest,
    FundRequest,
    LiquidityResponse,
    PauseRequest,
    PriceResponse,
    RemoveLiquidityRequest,
    ReservesResponse,
    SwapRequest,
    SwapResponse,
    WithdrawalResponse,
)
from simpleswap.models.types import ADDRESS_PATTERN

logger = structlog.get_logger()

router = APIRouter()


@lru_cache(maxsize=1)
def get_default_exchange() -> InMemorySimpleSwap:
    """Process-wide in-memory exchange, configured from the environment."""
    return SimpleSwap.in_memory(ExchangeConfig.from_env())


def get_exchange() -> SimpleSwap:
    """Dependency provider for the exchange instance.

    Override this in tests to inject a prepared exchange:
        app.dependency_overrides[get_exchange] = lambda: exchange
    """
    return get_default_exchange()


# =============================================================================
# Queries
# =============================================================================


@router.get("/pools/{token_a}/{token_b}/reserves")
def reserves(
    token_a: str = Path(pattern=ADDRESS_PATTERN),
    token_b: str = Path(pattern=ADDRESS_PATTERN),
    exchange: SimpleSwap = Depends(get_exchange),
) -> ReservesResponse:
    """Reserves of a pool, in the order of the path."""
    reserve_a, reserve_b = exchange.get_reserves(token_a, token_b)
    return ReservesResponse(reserve_a=reserve_a, reserve_b=reserve_b)


@router.get("/pools/{token_a}/{token_b}/price")
def price(
    token_a: str = Path(pattern=ADDRESS_PATTERN),
    token_b: str = Path(pattern=ADDRESS_PATTERN),
    exchange: SimpleSwap = Depends(get_exchange),
) -> PriceResponse:
    """Price of one token_a in token_b, fixed-point."""
    return PriceResponse(
        price=exchange.get_price(token_a, token_b),
        scale=exchange.swaps.price_scale,
    )


@router.get("/amount-out")
def amount_out(
    amount_in: int = Query(alias="amountIn", ge=0),
    reserve_in: int = Query(alias="reserveIn", ge=0),
    reserve_out: int = Query(alias="reserveOut", ge=0),
    exchange: SimpleSwap = Depends(get_exchange),
) -> AmountOutResponse:
    """Pure swap quote against arbitrary reserves."""
    out = exchange.get_amount_out(amount_in, reserve_in, reserve_out)
    return AmountOutResponse(amount_out=out)


# =============================================================================
# Liquidity and swaps
# =============================================================================


@router.post("/liquidity/add")
def add_liquidity(
    request: AddLiquidityRequest,
    exchange: SimpleSwap = Depends(get_exchange),
) -> LiquidityResponse:
    result = exchange.add_liquidity(
        request.token_a,
        request.token_b,
        int(request.amount_a_desired),
        int(request.amount_b_desired),
        int(request.amount_a_min),
        int(request.amount_b_min),
        request.to,
        request.deadline,
        caller=request.caller,
    )
    return LiquidityResponse(
        amount_a=result.amount_a,
        amount_b=result.amount_b,
        liquidity=result.liquidity,
    )


@router.post("/liquidity/remove")
def remove_liquidity(
    request: RemoveLiquidityRequest,
    exchange: SimpleSwap = Depends(get_exchange),
) -> WithdrawalResponse:
    result = exchange.remove_liquidity(
        request.token_a,
        request.token_b,
        int(request.liquidity),
        int(request.amount_a_min),
        int(request.amount_b_min),
        request.to,
        request.deadline,
        caller=request.caller,
    )
    return WithdrawalResponse(amount_a=result.amount_a, amount_b=result.amount_b)


@router.post("/swap")
def swap(
    request: SwapRequest,
    exchange: SimpleSwap = Depends(get_exchange),
) -> SwapResponse:
    result = exchange.swap_exact_tokens_for_tokens(
        int(request.amount_in),
        int(request.amount_out_min),
        request.path,
        request.to,
        request.deadline,
        caller=request.caller,
    )
    return SwapResponse(amount_in=result.amount_in, amount_out=result.amount_out)


# =============================================================================
# Controller
# =============================================================================


@router.post("/admin/pause")
def pause(request: PauseRequest, exchange: SimpleSwap = Depends(get_exchange)) -> dict[str, bool]:
    exchange.pause(caller=request.caller)
    return {"paused": exchange.paused}


@router.post("/admin/unpause")
def unpause(request: PauseRequest, exchange: SimpleSwap = Depends(get_exchange)) -> dict[str, bool]:
    exchange.unpause(caller=request.caller)
    return {"paused": exchange.paused}


@router.post("/admin/emergency-withdraw")
def emergency_withdraw(
    request: EmergencyWithdrawRequest,
    exchange: SimpleSwap = Depends(get_exchange),
) -> dict[str, str]:
    exchange.emergency_withdraw(
        request.token, request.to, int(request.amount), caller=request.caller
    )
    return {"status": "ok"}


@router.post("/admin/fund")
def fund(request: FundRequest, exchange: SimpleSwap = Depends(get_exchange)) -> dict[str, str]:
    """Credit an account on the in-memory ledger (controller only)."""
    if not isinstance(exchange, InMemorySimpleSwap):
        raise HTTPException(status_code=404, detail="Exchange has no in-memory ledger")
    if not exchange.ctx.access.is_controller(request.caller):
        raise Unauthorized(request.caller)

    # Shares the guard with swaps so a credit never interleaves with a transfer
    with exchange.ctx.guard.hold("fund"):
        exchange.ledger.credit(request.token, request.account, int(request.amount))
    logger.info(
        "account_funded",
        token=request.token[-8:],
        account=request.account[-8:],
        amount=int(request.amount),
    )
    return {"balance": str(exchange.ledger.balance_of(request.token, request.account))}
