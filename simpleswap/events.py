"""Signals emitted for external observers.

Events are emitted once per successful operation, after the reserve write.
A failed operation emits nothing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Any

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class LiquidityAdded:
    provider: str
    token_a: str
    token_b: str
    amount_a: int
    amount_b: int
    liquidity: int


@dataclass(frozen=True)
class LiquidityRemoved:
    provider: str
    token_a: str
    token_b: str
    amount_a: int
    amount_b: int
    liquidity: int


@dataclass(frozen=True)
class Swap:
    sender: str
    token_in: str
    token_out: str
    amount_in: int
    amount_out: int


@dataclass(frozen=True)
class EmergencyWithdraw:
    controller: str
    token: str
    to: str
    amount: int


@dataclass(frozen=True)
class Paused:
    controller: str


@dataclass(frozen=True)
class Unpaused:
    controller: str


Event = LiquidityAdded | LiquidityRemoved | Swap | EmergencyWithdraw | Paused | Unpaused

# Anything that accepts an event
EventSink = Callable[[Event], None]


class EventLog:
    """Event sink that records events in order and fans them out to subscribers."""

    def __init__(self) -> None:
        self.events: list[Event] = []
        self._subscribers: list[EventSink] = []

    def subscribe(self, sink: EventSink) -> None:
        self._subscribers.append(sink)

    def __call__(self, event: Event) -> None:
        """Deliver to every subscriber, then record.

        A subscriber that raises aborts delivery and the event is not
        recorded; the emitting operation rolls back.
        """
        for sink in self._subscribers:
            sink(event)
        self.events.append(event)
        logger.debug("event_emitted", kind=type(event).__name__, **asdict(event))

    def of_type(self, event_type: type) -> list[Any]:
        """Recorded events of one type, oldest first."""
        return [e for e in self.events if isinstance(e, event_type)]


__all__ = [
    "LiquidityAdded",
    "LiquidityRemoved",
    "Swap",
    "EmergencyWithdraw",
    "Paused",
    "Unpaused",
    "Event",
    "EventSink",
    "EventLog",
]
