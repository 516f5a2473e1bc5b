"""Exchange-wide constants.

Centralizes well-known identities and fixed-point parameters.
"""

from simpleswap.safe_int import UINT256_MAX

# The zero address: never a valid token, recipient or controller
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Fixed-point scale for get_price (18 fractional digits)
PRICE_SCALE = 10**18

# Liquidity share metadata
SHARE_NAME = "SimpleSwap LP"
SHARE_SYMBOL = "SS-LP"

# Default custody account of the exchange when none is configured
DEFAULT_EXCHANGE_ADDRESS = "0x5151515151515151515151515151515151515151"

__all__ = [
    "UINT256_MAX",
    "ZERO_ADDRESS",
    "PRICE_SCALE",
    "SHARE_NAME",
    "SHARE_SYMBOL",
    "DEFAULT_EXCHANGE_ADDRESS",
]
