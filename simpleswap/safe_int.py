"""Fixed-width integer wrapper for reserve and share arithmetic.

This module provides SafeInt, a lightweight uint256 wrapper that makes
arithmetic operations checked by default:
- Division by zero raises DivisionByZero
- Subtraction underflow raises Underflow
- Addition or multiplication beyond 2^256-1 raises Uint256Overflow

The one deliberate exception is wrapping_add(), which reproduces modular
uint256 addition so callers can detect a wrap by comparing the sum against
one of its operands.

Usage pattern:
    from simpleswap.safe_int import S

    def quote(amount_in: int, reserve_in: int, reserve_out: int) -> int:
        # Wrap at entry
        sa, sr_in, sr_out = S(amount_in), S(reserve_in), S(reserve_out)

        # Natural arithmetic - automatically checked
        result = (sa * sr_out) // sr_in  # Raises if sr_in == 0

        # Unwrap at exit
        return result.value
"""

from __future__ import annotations

UINT256_MAX = 2**256 - 1
UINT256_MODULUS = 2**256


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division or modulo by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce negative result."""

    pass


class Uint256Overflow(SafeIntError):
    """Value does not fit in uint256."""

    pass


class SafeInt:
    """Checked uint256 integer.

    Values are validated on construction: negative values and values above
    2^256-1 raise Uint256Overflow, so every SafeInt in existence is a valid
    uint256.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Args:
            value: Integer value to wrap, or SafeInt to copy

        Raises:
            TypeError: If value is not an int or SafeInt
            Uint256Overflow: If value is outside [0, 2^256-1]
        """
        if isinstance(value, SafeInt):
            self._value = value._value
            return
        # bool is an int subclass but never a token amount
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        if value < 0:
            raise Uint256Overflow(f"Negative value cannot be uint256: {value}")
        if value > UINT256_MAX:
            raise Uint256Overflow(f"Value exceeds uint256 max: {value}")
        self._value = value

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        """Add two values.

        Raises:
            Uint256Overflow: If the sum exceeds 2^256-1
        """
        other_val = _extract_value(other)
        result = self._value + other_val
        if result > UINT256_MAX:
            raise Uint256Overflow(f"Overflow: {self._value} + {other_val}")
        return SafeInt(result)

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other).__add__(self)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        """Multiply two values.

        Raises:
            Uint256Overflow: If the product exceeds 2^256-1
        """
        other_val = _extract_value(other)
        result = self._value * other_val
        if result > UINT256_MAX:
            raise Uint256Overflow(f"Overflow: {self._value} * {other_val}")
        return SafeInt(result)

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other).__mul__(self)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division, rounding toward zero.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    # --- Named operations ---

    def wrapping_add(self, other: SafeInt | int) -> SafeInt:
        """Add modulo 2^256, the way unchecked uint256 addition behaves.

        Never raises. A wrapped result is smaller than either operand.
        """
        other_val = _extract_value(other)
        return SafeInt((self._value + other_val) % UINT256_MODULUS)

    def min(self, other: SafeInt | int) -> SafeInt:
        """Return minimum of self and other."""
        return SafeInt(min(self._value, _extract_value(other)))


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
