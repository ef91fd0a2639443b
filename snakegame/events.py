"""Notifications handed from the engine to whoever draws the game."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Union

if TYPE_CHECKING:
    from snakegame.board import CollisionResult, GameMode
    from snakegame.engine import LifecycleState
    from snakegame.snake import GridPosition


@dataclass(frozen=True)
class SegmentAdded:
    position: GridPosition


@dataclass(frozen=True)
class SegmentsCleared:
    count: int


@dataclass(frozen=True)
class WallRemoved:
    pass


@dataclass(frozen=True)
class ScoreChanged:
    score: int


@dataclass(frozen=True)
class BestScoreChanged:
    best_score: int


@dataclass(frozen=True)
class GameEnded:
    score: int
    best_score: int


@dataclass(frozen=True)
class LifecycleChanged:
    previous: LifecycleState
    current: LifecycleState


@dataclass(frozen=True)
class ModeChanged:
    previous: GameMode
    current: GameMode


Event = Union[
    SegmentAdded,
    SegmentsCleared,
    WallRemoved,
    ScoreChanged,
    BestScoreChanged,
    GameEnded,
    LifecycleChanged,
    ModeChanged,
]


@dataclass
class Snapshot:
    snake: List[GridPosition]
    food: Optional[GridPosition]
    second_food: Optional[GridPosition]
    wall: Optional[GridPosition]
    score: int
    best_score: int
    state: LifecycleState
    mode: GameMode
    speed: float


@dataclass
class StepResult:
    collision: CollisionResult
    snapshot: Snapshot
    events: List[Event] = field(default_factory=list)
