"""FastAPI application for the SimpleSwap exchange.

Every SimpleSwapError is returned as {"error": <class name>, "detail": {...}}
with a status code chosen by error category.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from simpleswap import __version__
from simpleswap.api.endpoints import router
from simpleswap.errors import (
    AccessGuardError,
    SimpleSwapError,
    Unauthorized,
)
from simpleswap.logging_config import configure_logging
from simpleswap.models import ErrorResponse

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("SIMPLESWAP_HOST", "0.0.0.0")
PORT = int(os.environ.get("SIMPLESWAP_PORT", "8000"))
DEBUG = os.environ.get("SIMPLESWAP_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("SIMPLESWAP_LOG_LEVEL", "INFO")

logger = structlog.get_logger()

app = FastAPI(
    title="SimpleSwap",
    description="Two-asset constant-product exchange",
    version=__version__,
)


def status_for(err: SimpleSwapError) -> int:
    """HTTP status for an exchange error.

    403 for a non-controller caller, 409 for pause and reentrancy state,
    400 for everything the caller can fix by changing the request.
    """
    if isinstance(err, Unauthorized):
        return 403
    if isinstance(err, AccessGuardError):
        return 409
    return 400


@app.exception_handler(SimpleSwapError)
async def simpleswap_error_handler(request: Request, err: SimpleSwapError) -> JSONResponse:
    body = ErrorResponse(
        error=type(err).__name__,
        detail={k: str(v) if isinstance(v, int) else v for k, v in err.details().items()},
    )
    return JSONResponse(status_code=status_for(err), content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the exchange API server.

    Configuration via environment variables:
    - SIMPLESWAP_HOST: Host to bind to (default: 0.0.0.0)
    - SIMPLESWAP_PORT: Port to bind to (default: 8000)
    - SIMPLESWAP_DEBUG: Enable debug/reload mode (default: false)
    - SIMPLESWAP_LOG_LEVEL: Minimum log level (default: INFO)
    - SIMPLESWAP_EXCHANGE_ADDRESS, SIMPLESWAP_CONTROLLER: see ExchangeConfig
    """
    configure_logging(LOG_LEVEL)
    logger.info("starting_server", host=HOST, port=PORT, debug=DEBUG)
    uvicorn.run(
        "simpleswap.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
