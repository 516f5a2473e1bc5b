"""Tests for SafeInt checked uint256 arithmetic."""

import pytest

from simpleswap.safe_int import (
    UINT256_MAX,
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Uint256Overflow,
    Underflow,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        """SafeInt can be constructed from int."""
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(42)).value == 42

    def test_bounds_are_inclusive(self):
        """Zero and 2^256-1 are both valid."""
        assert SafeInt(0).value == 0
        assert SafeInt(UINT256_MAX).value == UINT256_MAX

    def test_negative_rejected(self):
        """Negative values are not uint256."""
        with pytest.raises(Uint256Overflow):
            SafeInt(-1)

    def test_above_max_rejected(self):
        """Values above 2^256-1 are not uint256."""
        with pytest.raises(Uint256Overflow):
            SafeInt(UINT256_MAX + 1)

    def test_invalid_types_rejected(self):
        """Strings, floats and bools are rejected."""
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias(self):
        """S aliases SafeInt."""
        assert S is SafeInt


class TestSafeIntArithmetic:
    """Tests for checked arithmetic."""

    def test_add(self):
        """Addition works with SafeInt and int operands on either side."""
        assert (S(10) + S(5)).value == 15
        assert (S(10) + 5).value == 15
        assert (5 + S(10)).value == 15

    def test_add_overflow(self):
        """Addition past 2^256-1 raises."""
        with pytest.raises(Uint256Overflow):
            S(UINT256_MAX) + 1

    def test_sub_underflow(self):
        """Subtraction below zero raises Underflow."""
        assert (S(10) - 3).value == 7
        with pytest.raises(Underflow):
            S(3) - 10

    def test_mul_overflow(self):
        """Multiplication past 2^256-1 raises."""
        assert (S(2**128) * S(2**127)).value == 2**255
        with pytest.raises(Uint256Overflow):
            S(2**128) * S(2**128)

    def test_floordiv(self):
        """Division rounds down and rejects zero divisors."""
        assert (S(10) // 3).value == 3
        with pytest.raises(DivisionByZero):
            S(10) // 0

    def test_errors_share_base(self):
        """Every SafeInt error is a SafeIntError and an ArithmeticError."""
        for err in (DivisionByZero, Underflow, Uint256Overflow):
            assert issubclass(err, SafeIntError)
            assert issubclass(err, ArithmeticError)


class TestSafeIntNamedOperations:
    """Tests for wrapping_add and min."""

    def test_wrapping_add_no_wrap(self):
        """Sums within range are unchanged."""
        assert S(UINT256_MAX - 10).wrapping_add(10).value == UINT256_MAX

    def test_wrapping_add_wraps(self):
        """Sums past the range wrap modulo 2^256 and end up below both operands."""
        wrapped = S(UINT256_MAX).wrapping_add(1)
        assert wrapped.value == 0
        assert S(2**255).wrapping_add(2**255 + 5).value == 5

    def test_min(self):
        """min() returns the smaller value."""
        assert S(3).min(7).value == 3
        assert S(7).min(S(3)).value == 3

    def test_comparisons_and_hash(self):
        """SafeInt compares against ints and SafeInts."""
        assert S(5) == 5
        assert S(5) == S(5)
        assert S(5) != 6
        assert S(4) < 5 <= S(5)
        assert S(6) > S(5)
        assert hash(S(5)) == hash(5)
