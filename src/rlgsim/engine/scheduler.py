from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..actors.characters import Character
from ..core.errors import InvalidActorError
from ..core.heap import MinHeap

logger = logging.getLogger(__name__)

TURN_UNITS = 1000


def next_turn_time(now: int, speed: int) -> int:
    """Time of an actor's next turn; faster actors come back sooner."""
    if speed <= 0:
        raise InvalidActorError(f"speed must be positive, got {speed}")
    return now + TURN_UNITS // speed


@dataclass
class Event:
    """A pending turn. Holds the actor by reference; the roster owns it."""

    time: int
    actor: Character


class EventScheduler:
    """Discrete-event queue of actor turns ordered by time.

    Events with equal times come out in an unspecified order.

    Usage:
        sched = EventScheduler()
        sched.push(0, pc)
        ev = sched.pop()
        sched.push(next_turn_time(ev.time, ev.actor.speed), ev.actor)
    """

    def __init__(self) -> None:
        self._heap: MinHeap[Event] = MinHeap(key=lambda ev: ev.time)

    def push(self, time: int, actor: Character) -> Event:
        if actor.speed <= 0:
            raise InvalidActorError(f"Refusing to schedule {actor!r} with speed {actor.speed}")
        event = Event(time, actor)
        self._heap.push(event)
        return event

    def pop(self) -> Event:
        """Remove and return the earliest event. Raises IndexError when empty."""
        return self._heap.pop()

    def peek(self) -> Optional[Event]:
        return None if self._heap.is_empty() else self._heap.peek()

    def is_empty(self) -> bool:
        return self._heap.is_empty()

    def clear(self) -> None:
        self._heap.clear()

    def __len__(self) -> int:
        return len(self._heap)


__all__ = ["Event", "EventScheduler", "TURN_UNITS", "next_turn_time"]
