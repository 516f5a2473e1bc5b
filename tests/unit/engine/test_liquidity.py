"""Tests for adding and removing liquidity."""

import math

import pytest

from simpleswap import InMemorySimpleSwap
from simpleswap.errors import (
    BelowMinimumAmount,
    DeadlinePassed,
    IdenticalTokens,
    InsufficientBalance,
    InsufficientLiquidity,
    InvalidRecipient,
    InvalidTokenAddress,
    SelfTransfer,
    ZeroAmount,
)
from simpleswap.events import LiquidityAdded, LiquidityRemoved
from tests.helpers import (
    ALICE,
    BOB,
    DEADLINE,
    E18,
    EXCHANGE,
    NOW,
    STARTING_BALANCE,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    ZERO,
    FakeClock,
    seed_pool,
)

SEED_SHARES = math.isqrt(100 * E18 * 200 * E18)


def add(exchange, a, b, a_min=0, b_min=0, to=ALICE, deadline=DEADLINE, caller=ALICE, pair=None):
    token_a, token_b = pair or (TOKEN_A, TOKEN_B)
    return exchange.add_liquidity(
        token_a, token_b, a, b, a_min, b_min, to, deadline, caller=caller
    )


def remove(exchange, liquidity, a_min=0, b_min=0, to=ALICE, deadline=DEADLINE, caller=ALICE):
    return exchange.remove_liquidity(
        TOKEN_A, TOKEN_B, liquidity, a_min, b_min, to, deadline, caller=caller
    )


class TestAddLiquidityNewPool:
    """Tests for the deposit that seeds a pool."""

    def test_first_deposit_mints_sqrt(self, exchange: InMemorySimpleSwap):
        """1e18/1e18 into an empty pool mints exactly 1e18 shares."""
        result = add(exchange, E18, E18)

        assert (result.amount_a, result.amount_b, result.liquidity) == (E18, E18, E18)
        assert exchange.get_reserves(TOKEN_A, TOKEN_B) == (E18, E18)
        assert exchange.balance_of(TOKEN_A, TOKEN_B, ALICE) == E18
        assert exchange.total_supply(TOKEN_A, TOKEN_B) == E18

    def test_first_deposit_takes_desired_amounts(self, exchange: InMemorySimpleSwap):
        """The seeding deposit sets the price; nothing is trimmed."""
        result = add(exchange, 100 * E18, 200 * E18)

        assert (result.amount_a, result.amount_b) == (100 * E18, 200 * E18)
        assert result.liquidity == SEED_SHARES
        assert exchange.get_price(TOKEN_A, TOKEN_B) == 2 * E18

    def test_assets_move_into_custody(self, exchange: InMemorySimpleSwap):
        add(exchange, 100 * E18, 200 * E18)

        assert exchange.ledger.balance_of(TOKEN_A, ALICE) == STARTING_BALANCE - 100 * E18
        assert exchange.ledger.balance_of(TOKEN_B, ALICE) == STARTING_BALANCE - 200 * E18
        assert exchange.ledger.balance_of(TOKEN_A, EXCHANGE) == 100 * E18
        assert exchange.ledger.balance_of(TOKEN_B, EXCHANGE) == 200 * E18

    def test_reversed_pair_order(self, exchange: InMemorySimpleSwap):
        """Deposits given as (B, A) land in the same pool, remapped."""
        add(exchange, 200 * E18, 100 * E18, pair=(TOKEN_B, TOKEN_A))

        assert exchange.get_reserves(TOKEN_A, TOKEN_B) == (100 * E18, 200 * E18)
        assert exchange.get_reserves(TOKEN_B, TOKEN_A) == (200 * E18, 100 * E18)

    def test_shares_go_to_recipient(self, exchange: InMemorySimpleSwap):
        """Shares are minted to `to`; assets come from the caller."""
        add(exchange, E18, E18, to=BOB)

        assert exchange.balance_of(TOKEN_A, TOKEN_B, BOB) == E18
        assert exchange.balance_of(TOKEN_A, TOKEN_B, ALICE) == 0
        assert exchange.ledger.balance_of(TOKEN_A, BOB) == STARTING_BALANCE

    def test_seeding_deposit_respects_minimums(self, exchange: InMemorySimpleSwap):
        """Desired amounts below the caller's own minimums are rejected."""
        with pytest.raises(BelowMinimumAmount) as exc_info:
            add(exchange, 100 * E18, 200 * E18, a_min=101 * E18)
        assert exc_info.value.field == "amount_a"
        assert exchange.get_reserves(TOKEN_A, TOKEN_B) == (0, 0)

    def test_emits_event(self, exchange: InMemorySimpleSwap):
        add(exchange, E18, 2 * E18)

        assert exchange.events.of_type(LiquidityAdded) == [
            LiquidityAdded(
                provider=ALICE,
                token_a=TOKEN_A,
                token_b=TOKEN_B,
                amount_a=E18,
                amount_b=2 * E18,
                liquidity=math.isqrt(2 * E18 * E18),
            )
        ]

    def test_pools_are_separate(self, exchange: InMemorySimpleSwap):
        """Each pair has its own reserves and share supply."""
        add(exchange, E18, E18)
        add(exchange, 4 * E18, E18, pair=(TOKEN_A, TOKEN_C))

        assert exchange.get_reserves(TOKEN_A, TOKEN_B) == (E18, E18)
        assert exchange.get_reserves(TOKEN_A, TOKEN_C) == (4 * E18, E18)
        assert exchange.total_supply(TOKEN_A, TOKEN_C) == 2 * E18
        assert exchange.get_reserves(TOKEN_B, TOKEN_C) == (0, 0)


class TestAddLiquidityExistingPool:
    """Tests for deposits into a funded pool (seeded at 100:200)."""

    def test_proportional_deposit(self, seeded: InMemorySimpleSwap):
        """A deposit at the pool ratio mints shares pro rata."""
        result = add(seeded, 10 * E18, 20 * E18, caller=BOB, to=BOB)

        assert (result.amount_a, result.amount_b) == (10 * E18, 20 * E18)
        assert result.liquidity == SEED_SHARES // 10
        assert seeded.get_reserves(TOKEN_A, TOKEN_B) == (110 * E18, 220 * E18)
        assert seeded.total_supply(TOKEN_A, TOKEN_B) == SEED_SHARES + SEED_SHARES // 10

    def test_excess_b_is_trimmed(self, seeded: InMemorySimpleSwap):
        """B above the ratio is left with the caller."""
        result = add(seeded, 10 * E18, 50 * E18, caller=BOB, to=BOB)

        assert (result.amount_a, result.amount_b) == (10 * E18, 20 * E18)
        assert seeded.ledger.balance_of(TOKEN_B, BOB) == STARTING_BALANCE - 20 * E18

    def test_excess_a_is_trimmed(self, seeded: InMemorySimpleSwap):
        """When B is the scarce side, A is quoted from it."""
        result = add(seeded, 100 * E18, 150 * E18, caller=BOB, to=BOB)

        assert (result.amount_a, result.amount_b) == (75 * E18, 150 * E18)
        assert result.liquidity == SEED_SHARES * 75 // 100

    def test_quoted_side_below_minimum(self, seeded: InMemorySimpleSwap):
        """Slippage bound on the quoted side."""
        with pytest.raises(BelowMinimumAmount) as exc_info:
            add(seeded, 10 * E18, 50 * E18, b_min=21 * E18, caller=BOB)

        err = exc_info.value
        assert (err.field, err.minimum, err.actual) == ("amount_b", 21 * E18, 20 * E18)
        assert seeded.get_reserves(TOKEN_A, TOKEN_B) == (100 * E18, 200 * E18)

    def test_saturated_side_below_minimum(self, seeded: InMemorySimpleSwap):
        """A minimum above the desired amount can never be met."""
        with pytest.raises(BelowMinimumAmount) as exc_info:
            add(seeded, 100 * E18, 200 * E18, a_min=101 * E18, caller=BOB)
        assert exc_info.value.field == "amount_a"

    def test_dust_deposit_rejected(self, exchange: InMemorySimpleSwap):
        """A deposit worth less than one share mints nothing and fails."""
        add(exchange, 10**6, 1)
        with pytest.raises(InsufficientLiquidity):
            add(exchange, 1, 1, caller=BOB)
        assert exchange.get_reserves(TOKEN_A, TOKEN_B) == (10**6, 1)

    def test_unbalanced_rounding_favors_pool(self, exchange: InMemorySimpleSwap):
        """Shares are the smaller of the two floored estimates."""
        add(exchange, 1000, 3001)
        result = add(exchange, 10, 31, caller=BOB, to=BOB)

        supply = math.isqrt(1000 * 3001)
        assert (result.amount_a, result.amount_b) == (10, 30)
        assert result.liquidity == min(10 * supply // 1000, 30 * supply // 3001)


class TestAddLiquidityValidation:
    """Tests for parameter checks on add_liquidity."""

    def test_identical_tokens_win(self, exchange: InMemorySimpleSwap):
        """IdenticalTokens is reported even when every other parameter is bad."""
        with pytest.raises(IdenticalTokens):
            exchange.add_liquidity(TOKEN_A, TOKEN_A, 0, 0, 0, 0, ZERO, 0, caller=ALICE)
        with pytest.raises(IdenticalTokens):
            exchange.add_liquidity(ZERO, ZERO, 0, 0, 0, 0, ZERO, 0, caller=ALICE)

    @pytest.mark.parametrize("pair", [(ZERO, TOKEN_B), (TOKEN_A, ZERO)])
    def test_zero_token(self, exchange: InMemorySimpleSwap, pair):
        with pytest.raises(InvalidTokenAddress):
            add(exchange, E18, E18, pair=pair)

    @pytest.mark.parametrize("token", ["0x0", "0x1", TOKEN_A[2:], "0x" + "0" * 41 + "1"])
    def test_malformed_token(self, exchange: InMemorySimpleSwap, token):
        """Short, unprefixed and over-long spellings are refused."""
        with pytest.raises(InvalidTokenAddress):
            add(exchange, E18, E18, pair=(token, TOKEN_B))
        assert exchange.ctx.registry.pool_count == 0

    def test_short_and_padded_spellings_of_one_asset(self, exchange: InMemorySimpleSwap):
        """0x1 is not accepted as a second name for 0x00...01."""
        with pytest.raises(InvalidTokenAddress):
            add(exchange, E18, E18, pair=("0x1", "0x" + "0" * 39 + "1"))
        assert exchange.ctx.registry.pool_count == 0

    def test_zero_recipient(self, exchange: InMemorySimpleSwap):
        with pytest.raises(InvalidRecipient):
            add(exchange, E18, E18, to=ZERO)

    @pytest.mark.parametrize("to", ["0x0", ALICE[-6:], ALICE[2:]])
    def test_malformed_recipient(self, exchange: InMemorySimpleSwap, to):
        with pytest.raises(InvalidRecipient):
            add(exchange, E18, E18, to=to)

    def test_exchange_as_recipient(self, exchange: InMemorySimpleSwap):
        """Shares cannot be minted to the exchange itself."""
        with pytest.raises(SelfTransfer):
            add(exchange, E18, E18, to=EXCHANGE)

    def test_deadline_passed(self, exchange: InMemorySimpleSwap):
        with pytest.raises(DeadlinePassed) as exc_info:
            add(exchange, E18, E18, deadline=NOW - 1)
        assert (exc_info.value.deadline, exc_info.value.now) == (NOW - 1, NOW)

    def test_deadline_equal_to_now_accepted(self, exchange: InMemorySimpleSwap):
        add(exchange, E18, E18, deadline=NOW)
        assert exchange.get_reserves(TOKEN_A, TOKEN_B) == (E18, E18)

    def test_deadline_follows_clock(self, exchange: InMemorySimpleSwap, clock: FakeClock):
        clock.now = DEADLINE + 1
        with pytest.raises(DeadlinePassed):
            add(exchange, E18, E18)

    @pytest.mark.parametrize(
        "a,b,field", [(0, E18, "amount_a_desired"), (E18, 0, "amount_b_desired")]
    )
    def test_zero_amounts(self, exchange: InMemorySimpleSwap, a, b, field):
        with pytest.raises(ZeroAmount) as exc_info:
            add(exchange, a, b)
        assert exc_info.value.field == field

    def test_caller_without_funds(self, exchange: InMemorySimpleSwap):
        """The caller's balance is checked by the asset capability."""
        with pytest.raises(InsufficientBalance):
            add(exchange, STARTING_BALANCE + 1, E18)
        assert exchange.get_reserves(TOKEN_A, TOKEN_B) == (0, 0)
        assert exchange.ledger.balance_of(TOKEN_A, ALICE) == STARTING_BALANCE


class TestRemoveLiquidity:
    """Tests for withdrawals from a pool seeded at 100:200 by ALICE."""

    def test_remove_half(self, seeded: InMemorySimpleSwap):
        """Burning half the supply pays out half the reserves."""
        half = SEED_SHARES // 2
        result = remove(seeded, half)

        assert result.amount_a == half * 100 * E18 // SEED_SHARES
        assert result.amount_b == half * 200 * E18 // SEED_SHARES
        assert seeded.get_reserves(TOKEN_A, TOKEN_B) == (
            100 * E18 - result.amount_a,
            200 * E18 - result.amount_b,
        )
        assert seeded.balance_of(TOKEN_A, TOKEN_B, ALICE) == SEED_SHARES - half
        assert seeded.total_supply(TOKEN_A, TOKEN_B) == SEED_SHARES - half

    def test_remove_all_drains_pool(self, seeded: InMemorySimpleSwap):
        """Burning every share returns the full reserves and empties the pool."""
        result = remove(seeded, SEED_SHARES)

        assert (result.amount_a, result.amount_b) == (100 * E18, 200 * E18)
        assert seeded.get_reserves(TOKEN_A, TOKEN_B) == (0, 0)
        assert seeded.total_supply(TOKEN_A, TOKEN_B) == 0
        assert seeded.ledger.balance_of(TOKEN_A, ALICE) == STARTING_BALANCE
        assert seeded.ledger.balance_of(TOKEN_B, ALICE) == STARTING_BALANCE

    def test_drained_pool_can_be_reseeded(self, seeded: InMemorySimpleSwap):
        """A drained pool takes a new price from its next deposit."""
        remove(seeded, SEED_SHARES)
        result = add(seeded, E18, 9 * E18, caller=BOB, to=BOB)

        assert result.liquidity == 3 * E18
        assert seeded.get_price(TOKEN_A, TOKEN_B) == 9 * E18

    def test_payout_to_recipient(self, seeded: InMemorySimpleSwap):
        """Shares burn from the caller; assets go to `to`."""
        result = remove(seeded, SEED_SHARES // 4, to=BOB)

        assert seeded.ledger.balance_of(TOKEN_A, BOB) == STARTING_BALANCE + result.amount_a
        assert seeded.ledger.balance_of(TOKEN_B, BOB) == STARTING_BALANCE + result.amount_b

    def test_minimums(self, seeded: InMemorySimpleSwap):
        """Payout one unit short of a minimum is rejected."""
        half = SEED_SHARES // 2
        expected_a = half * 100 * E18 // SEED_SHARES
        expected_b = half * 200 * E18 // SEED_SHARES

        with pytest.raises(BelowMinimumAmount) as exc_info:
            remove(seeded, half, a_min=expected_a + 1)
        assert exc_info.value.field == "amount_a"

        with pytest.raises(BelowMinimumAmount) as exc_info:
            remove(seeded, half, b_min=expected_b + 1)
        assert exc_info.value.field == "amount_b"

        result = remove(seeded, half, a_min=expected_a, b_min=expected_b)
        assert (result.amount_a, result.amount_b) == (expected_a, expected_b)

    def test_more_than_supply(self, seeded: InMemorySimpleSwap):
        with pytest.raises(InsufficientLiquidity):
            remove(seeded, SEED_SHARES + 1)

    def test_unknown_pool(self, exchange: InMemorySimpleSwap):
        """Withdrawing from a pool with no shares fails."""
        with pytest.raises(InsufficientLiquidity):
            remove(exchange, 1)

    def test_more_than_held(self, seeded: InMemorySimpleSwap):
        """BOB holds no shares; the burn is refused and nothing moves."""
        with pytest.raises(InsufficientBalance):
            remove(seeded, E18, caller=BOB, to=BOB)

        assert seeded.get_reserves(TOKEN_A, TOKEN_B) == (100 * E18, 200 * E18)
        assert seeded.ledger.balance_of(TOKEN_A, BOB) == STARTING_BALANCE
        assert seeded.total_supply(TOKEN_A, TOKEN_B) == SEED_SHARES

    def test_zero_liquidity(self, seeded: InMemorySimpleSwap):
        with pytest.raises(ZeroAmount) as exc_info:
            remove(seeded, 0)
        assert exc_info.value.field == "liquidity"

    def test_validation(self, seeded: InMemorySimpleSwap):
        with pytest.raises(InvalidRecipient):
            remove(seeded, E18, to=ZERO)
        with pytest.raises(SelfTransfer):
            remove(seeded, E18, to=EXCHANGE)
        with pytest.raises(DeadlinePassed):
            remove(seeded, E18, deadline=NOW - 1)
        with pytest.raises(IdenticalTokens):
            seeded.remove_liquidity(TOKEN_A, TOKEN_A, E18, 0, 0, ALICE, DEADLINE, caller=ALICE)

    def test_emits_event(self, seeded: InMemorySimpleSwap):
        result = remove(seeded, SEED_SHARES)

        assert seeded.events.of_type(LiquidityRemoved) == [
            LiquidityRemoved(
                provider=ALICE,
                token_a=TOKEN_A,
                token_b=TOKEN_B,
                amount_a=result.amount_a,
                amount_b=result.amount_b,
                liquidity=SEED_SHARES,
            )
        ]

    def test_second_provider_gets_no_more_than_deposited(self, seeded: InMemorySimpleSwap):
        """Deposit followed by full withdrawal never returns more than went in."""
        deposit = seed_pool(seeded, 7 * E18 + 3, 14 * E18 + 11, provider=BOB)
        result = seeded.remove_liquidity(
            TOKEN_A, TOKEN_B, deposit.liquidity, 0, 0, BOB, DEADLINE, caller=BOB
        )

        assert result.amount_a <= deposit.amount_a
        assert result.amount_b <= deposit.amount_b
