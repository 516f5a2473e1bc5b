"""Exchange configuration."""

import os
from dataclasses import dataclass

from simpleswap.constants import (
    DEFAULT_EXCHANGE_ADDRESS,
    PRICE_SCALE,
    SHARE_NAME,
    SHARE_SYMBOL,
    ZERO_ADDRESS,
)
from simpleswap.models.types import is_valid_address, normalize_address


def _validate_address(name: str, address: str) -> str:
    """Validate and normalize a configured address.

    Raises:
        ValueError: If the address is malformed
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return normalize_address(address)


@dataclass(frozen=True)
class ExchangeConfig:
    """Centralized configuration of one exchange instance.

    Attributes:
        exchange_address: Custody account holding pooled assets
        controller: Identity allowed to pause, unpause and emergency-withdraw
        share_name: Liquidity share name
        share_symbol: Liquidity share symbol
        price_scale: Fixed-point scale of get_price (1e18)
    """

    exchange_address: str = DEFAULT_EXCHANGE_ADDRESS
    controller: str = ZERO_ADDRESS
    share_name: str = SHARE_NAME
    share_symbol: str = SHARE_SYMBOL
    price_scale: int = PRICE_SCALE

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "exchange_address", _validate_address("exchange", self.exchange_address)
        )
        object.__setattr__(self, "controller", _validate_address("controller", self.controller))
        if self.price_scale <= 0:
            raise ValueError(f"price_scale must be positive: {self.price_scale}")

    @classmethod
    def from_env(cls) -> "ExchangeConfig":
        """Build a config from SIMPLESWAP_* environment variables.

        - SIMPLESWAP_EXCHANGE_ADDRESS: custody account (default: built-in)
        - SIMPLESWAP_CONTROLLER: controller identity (default: zero address,
          which disables controller operations)
        """
        return cls(
            exchange_address=os.environ.get(
                "SIMPLESWAP_EXCHANGE_ADDRESS", DEFAULT_EXCHANGE_ADDRESS
            ),
            controller=os.environ.get("SIMPLESWAP_CONTROLLER", ZERO_ADDRESS),
        )


# Default configuration instance
DEFAULT_EXCHANGE_CONFIG = ExchangeConfig()
