from __future__ import annotations

import enum
from collections import deque
from typing import Deque, List, NamedTuple, Tuple

from snakegame.config import ORIGIN
from snakegame.events import Event, SegmentAdded, SegmentsCleared


class GridPosition(NamedTuple):
    x: int
    y: int


def add_pos(a: GridPosition, b: Tuple[int, int]) -> GridPosition:
    return GridPosition(a[0] + b[0], a[1] + b[1])


def opposite(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


class Direction(enum.Enum):
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @classmethod
    def parse(cls, name: str) -> "Direction":
        return cls[name.upper()]


class Snake:
    """Body cells (head first), heading, owed growth and speed multiplier.

    ``move`` never checks bounds; the board wraps or kills the new head
    afterwards.
    """

    def __init__(self, origin: Tuple[int, int] = ORIGIN) -> None:
        self.origin = GridPosition(*origin)
        self.body: Deque[GridPosition] = deque()
        self.direction = Direction.UP
        self.pending_growth = 0
        self.speed = 1.0
        self._restore()

    def _restore(self) -> None:
        self.body.clear()
        self.body.append(self.origin)
        self.direction = Direction.UP
        self.pending_growth = 0
        self.speed = 1.0

    @property
    def head(self) -> GridPosition:
        return self.body[0]

    @head.setter
    def head(self, pos: Tuple[int, int]) -> None:
        self.body[0] = GridPosition(*pos)

    @property
    def tail(self) -> GridPosition:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def move(self) -> None:
        self.body.appendleft(add_pos(self.head, self.direction.value))
        if self.pending_growth > 0:
            self.pending_growth -= 1
        else:
            self.body.pop()

    def set_direction(self, direction: Direction) -> None:
        # Reversing onto the neck is ignored.
        if not opposite(direction.value, self.direction.value):
            self.direction = direction

    def grow(self, n: int = 1) -> List[Event]:
        if n < 0:
            raise ValueError("growth must be non-negative")
        self.pending_growth += n
        return [SegmentAdded(self.tail) for _ in range(n)]

    def reset(self) -> List[Event]:
        cleared = len(self.body)
        self._restore()
        return [SegmentsCleared(cleared)]
