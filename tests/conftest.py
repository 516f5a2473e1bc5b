"""Pytest configuration and fixtures."""

import pytest

from simpleswap import InMemorySimpleSwap
from tests.helpers import E18, FakeClock, make_exchange, seed_pool


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at NOW; tests move it by assigning clock.now."""
    return FakeClock()


@pytest.fixture
def exchange(clock: FakeClock) -> InMemorySimpleSwap:
    """Exchange with ALICE and BOB funded and no pools."""
    return make_exchange(clock)


@pytest.fixture
def seeded(exchange: InMemorySimpleSwap) -> InMemorySimpleSwap:
    """Exchange with a TOKEN_A/TOKEN_B pool at 100:200, all shares held by ALICE."""
    seed_pool(exchange, 100 * E18, 200 * E18)
    return exchange
