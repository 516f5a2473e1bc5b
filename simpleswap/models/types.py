"""Shared type definitions for exchange models.

Asset and account identifiers are 0x-prefixed 20-byte hex addresses.
Amounts crossing the API boundary are uint256 decimal strings.
"""

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from simpleswap.safe_int import UINT256_MAX


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint256 as decimal string

    Raises:
        ValueError: If value is not a valid non-negative integer within uint256 range
    """
    # bool would otherwise pass the int check below
    if isinstance(value, bool):
        raise ValueError("Uint256 must be string or int, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    return str(int_value)


# Ethereum-style address (40 hex chars after 0x prefix)
ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
Address = Annotated[str, Field(pattern=ADDRESS_PATTERN)]

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]


def normalize_address(address: str) -> str:
    """Normalize an address to lowercase with a 0x prefix.

    Only well-formed addresses (see is_valid_address) share a length, and
    only then does string order match the order of the numbers they encode.
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid 0x-prefixed 20-byte hex address."""
    if not isinstance(address, str):
        return False
    return re.fullmatch(ADDRESS_PATTERN, address) is not None


def is_zero_address(address: str) -> bool:
    """True for empty strings and any hex spelling of zero ("0x0", "0x000...0")."""
    if not address:
        return True
    try:
        return int(address, 16) == 0
    except ValueError:
        return False
