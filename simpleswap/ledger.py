"""In-memory capability implementations.

TokenLedger holds per-asset balances for every account, including the
exchange's custody account. ShareRegistry tracks liquidity shares per pool.
Controller holds the controller identity and the pause flag.

These back the HTTP service and the test suite.
"""

from __future__ import annotations

from collections import defaultdict

import structlog

from simpleswap.constants import SHARE_NAME, SHARE_SYMBOL
from simpleswap.errors import InsufficientBalance
from simpleswap.models.types import is_zero_address, normalize_address
from simpleswap.pools.types import PairKey

logger = structlog.get_logger()


class TokenLedger:
    """Balances of every asset for every account.

    Args:
        custody: Account that transfer_out() debits (the exchange)
    """

    def __init__(self, custody: str) -> None:
        self.custody = normalize_address(custody)
        self._balances: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))

    def balance_of(self, asset: str, account: str) -> int:
        return self._balances[normalize_address(asset)][normalize_address(account)]

    def credit(self, asset: str, account: str, amount: int) -> None:
        """Create `amount` of `asset` in `account` (funding, tests)."""
        if amount < 0:
            raise ValueError(f"Cannot credit a negative amount: {amount}")
        self._balances[normalize_address(asset)][normalize_address(account)] += amount
        logger.debug("ledger_credit", asset=asset[-8:], account=account[-8:], amount=amount)

    def _move(self, asset: str, sender: str, recipient: str, amount: int) -> None:
        asset = normalize_address(asset)
        sender = normalize_address(sender)
        recipient = normalize_address(recipient)
        balances = self._balances[asset]
        available = balances[sender]
        if available < amount:
            raise InsufficientBalance(asset, sender, amount, available)
        balances[sender] = available - amount
        balances[recipient] += amount

    def transfer_in(self, asset: str, sender: str, recipient: str, amount: int) -> None:
        self._move(asset, sender, recipient, amount)

    def transfer_out(self, asset: str, recipient: str, amount: int) -> None:
        self._move(asset, self.custody, recipient, amount)


class ShareRegistry:
    """Liquidity-share balances and supply, per pool."""

    def __init__(self, name: str = SHARE_NAME, symbol: str = SHARE_SYMBOL) -> None:
        self._name = name
        self._symbol = symbol
        self._balances: dict[PairKey, dict[str, int]] = defaultdict(lambda: defaultdict(int))
        self._supply: dict[PairKey, int] = defaultdict(int)

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> str:
        return self._symbol

    def mint(self, key: PairKey, to: str, amount: int) -> None:
        self._balances[key][normalize_address(to)] += amount
        self._supply[key] += amount

    def burn(self, key: PairKey, holder: str, amount: int) -> None:
        holder = normalize_address(holder)
        available = self._balances[key][holder]
        if available < amount:
            raise InsufficientBalance(self._symbol, holder, amount, available)
        self._balances[key][holder] = available - amount
        self._supply[key] -= amount

    def total_supply(self, key: PairKey) -> int:
        return self._supply[key]

    def balance_of(self, key: PairKey, holder: str) -> int:
        return self._balances[key][normalize_address(holder)]


class Controller:
    """Single controller identity plus the pause flag."""

    def __init__(self, controller: str, paused: bool = False) -> None:
        self.controller = normalize_address(controller)
        self._paused = paused

    def is_controller(self, identity: str) -> bool:
        # A zero controller means nobody holds the role
        if is_zero_address(identity):
            return False
        return normalize_address(identity) == self.controller

    def is_paused(self) -> bool:
        return self._paused

    def set_paused(self, paused: bool) -> None:
        self._paused = paused


__all__ = ["TokenLedger", "ShareRegistry", "Controller"]
