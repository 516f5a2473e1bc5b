"""Test helpers module for shared test utilities.

- constants: Addresses, amounts and times
- factories: Exchange and pool factory functions
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    CAROL,
    DEADLINE,
    E18,
    EXCHANGE,
    NOW,
    OWNER,
    STARTING_BALANCE,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    ZERO,
)
from tests.helpers.factories import FakeClock, make_exchange, seed_pool

__all__ = [
    # Constants
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "OWNER",
    "ALICE",
    "BOB",
    "CAROL",
    "EXCHANGE",
    "ZERO",
    "E18",
    "STARTING_BALANCE",
    "NOW",
    "DEADLINE",
    # Factories
    "FakeClock",
    "make_exchange",
    "seed_pool",
]
