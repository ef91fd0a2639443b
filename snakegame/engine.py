"""Tick-driven game engine tying the snake, the board and the lifecycle together."""

from __future__ import annotations

import enum
import logging
import random
import time
from typing import Callable, List, Optional, Union

from snakegame.board import Board, CollisionResult, GameMode
from snakegame.config import GameConfig
from snakegame.events import (
    BestScoreChanged,
    Event,
    GameEnded,
    LifecycleChanged,
    ModeChanged,
    ScoreChanged,
    Snapshot,
    StepResult,
    WallRemoved,
)
from snakegame.loop import TickScheduler
from snakegame.snake import Direction, Snake

logger = logging.getLogger(__name__)


class LifecycleState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    ENDED = "ended"


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class GameEngine:
    """Owns one snake and one board and advances them one tick at a time.

    The host drives the engine by calling :meth:`pump` once per frame; a tick
    runs when the scheduler's deadline has passed. Every state-changing call
    returns the list of events the UI should apply to its own scene.

    The best score lives on the instance only. Pass a previous best in through
    ``best_score`` and read it back from the property of the same name.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        mode: Union[GameMode, str] = GameMode.CLASSIC,
        best_score: int = 0,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        if best_score < 0:
            raise ValueError("best_score must be non-negative")
        self.config = config or GameConfig()
        self.random = random.Random(self.config.seed)
        self.clock = clock or monotonic_ms
        self.scheduler = TickScheduler()

        self.snake = Snake(self.config.origin)
        self.board = Board(
            self.config.width,
            self.config.height,
            rng=self.random,
            max_spawn_attempts=self.config.max_spawn_attempts,
            speed_factor=self.config.speed_factor,
        )
        self.mode = GameMode.parse(mode)
        self.score = 0
        self._best_score = best_score
        self.state = LifecycleState.IDLE

        self.board.reset(self.snake)

    @property
    def best_score(self) -> int:
        return self._best_score

    @property
    def tick_delay_ms(self) -> int:
        if self.config.scale_tick_by_speed:
            return max(1, round(self.config.tick_ms / self.snake.speed))
        return self.config.tick_ms

    def _now(self, now_ms: Optional[int]) -> int:
        return self.clock() if now_ms is None else now_ms

    def _transition(self, new_state: LifecycleState) -> LifecycleChanged:
        previous, self.state = self.state, new_state
        logger.info("Game %s -> %s", previous.value, new_state.value)
        return LifecycleChanged(previous, new_state)

    # ---------- Lifecycle ----------
    def start(self, now_ms: Optional[int] = None) -> List[Event]:
        if self.state not in (LifecycleState.IDLE, LifecycleState.ENDED):
            logger.debug("start() ignored while %s", self.state.value)
            return []
        event = self._transition(LifecycleState.RUNNING)
        self.scheduler.arm(self._now(now_ms), 0)
        return [event]

    def toggle_pause(self, now_ms: Optional[int] = None) -> List[Event]:
        if self.state is LifecycleState.RUNNING:
            self.scheduler.cancel()
            return [self._transition(LifecycleState.PAUSED)]
        if self.state is LifecycleState.PAUSED:
            event = self._transition(LifecycleState.RUNNING)
            self.scheduler.arm(self._now(now_ms), 0)
            return [event]
        logger.debug("toggle_pause() ignored while %s", self.state.value)
        return []

    def end(self) -> List[Event]:
        if self.state not in (LifecycleState.RUNNING, LifecycleState.PAUSED):
            logger.debug("end() ignored while %s", self.state.value)
            return []
        self.scheduler.cancel()
        events: List[Event] = [self._transition(LifecycleState.ENDED)]
        final_score = self.score
        if final_score > self._best_score:
            self._best_score = final_score
            events.append(BestScoreChanged(self._best_score))
        events.append(GameEnded(final_score, self._best_score))
        logger.info("Game over: score %d, best %d", final_score, self._best_score)
        events.extend(self.reset())
        return events

    def reset(self) -> List[Event]:
        """Put a fresh snake on a freshly stocked board; the mode is kept."""
        self.score = 0
        events = self.snake.reset()
        self.board.reset(self.snake)
        events.append(ScoreChanged(self.score))
        return events

    # ---------- Input ----------
    def set_direction(self, direction: Union[Direction, str]) -> None:
        if isinstance(direction, str):
            try:
                direction = Direction.parse(direction)
            except KeyError:
                logger.debug("set_direction() ignored unknown direction %r", direction)
                return
        self.snake.set_direction(direction)

    def set_mode(self, mode: Union[GameMode, str]) -> List[Event]:
        new_mode = GameMode.parse(mode)
        previous, self.mode = self.mode, new_mode
        events: List[Event] = []
        if new_mode is not previous:
            logger.info("Mode %s -> %s", previous.value, new_mode.value)
            events.append(ModeChanged(previous, new_mode))
        if new_mode is not GameMode.WALLS and self.board.wall is not None:
            self.board.wall = None
            events.append(WallRemoved())
        return events

    # ---------- Ticking ----------
    def update(self) -> StepResult:
        if self.state is not LifecycleState.RUNNING:
            logger.debug("update() ignored while %s", self.state.value)
            return StepResult(collision=CollisionResult.NONE, snapshot=self.snapshot())

        self.snake.move()
        collision = self.board.check_collision(self.snake, self.mode)
        logger.debug("Tick: head %s -> %s", self.snake.head, collision.value)

        events: List[Event] = []
        if collision is CollisionResult.FOOD:
            self.score += 1
            events.extend(self.snake.grow(1))
        if collision in (CollisionResult.WALL, CollisionResult.SELF):
            events.extend(self.end())
        else:
            events.append(ScoreChanged(self.score))
        return StepResult(collision=collision, snapshot=self.snapshot(), events=events)

    def pump(self, now_ms: Optional[int] = None) -> Optional[StepResult]:
        """Run one tick if one is due; call once per rendered frame."""
        now = self._now(now_ms)
        if self.state is not LifecycleState.RUNNING or not self.scheduler.poll(now):
            return None
        result = self.update()
        if self.state is LifecycleState.RUNNING:
            self.scheduler.arm(now, self.tick_delay_ms)
        return result

    def snapshot(self) -> Snapshot:
        return Snapshot(
            snake=list(self.snake.body),
            food=self.board.food,
            second_food=self.board.second_food,
            wall=self.board.wall,
            score=self.score,
            best_score=self._best_score,
            state=self.state,
            mode=self.mode,
            speed=self.snake.speed,
        )
