from __future__ import annotations

import enum
import logging
import random
from itertools import islice
from typing import Iterable, Optional, Union

import numpy as np

from snakegame.config import GRID_HEIGHT, GRID_WIDTH, MAX_SPAWN_ATTEMPTS, SPEED_FACTOR
from snakegame.errors import BoardFullError, InvalidModeError
from snakegame.snake import GridPosition, Snake

logger = logging.getLogger(__name__)


class GameMode(enum.Enum):
    CLASSIC = "classic"
    WALLS = "walls"
    NO_DEATH = "no-death"
    SPEED = "speed"
    PORTAL = "portal"

    @classmethod
    def parse(cls, value: Union["GameMode", str]) -> "GameMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidModeError(f"unknown game mode: {value!r}") from None


class CollisionResult(enum.Enum):
    NONE = "none"
    FOOD = "food"
    WALL = "wall"
    SELF = "self"


class Board:
    """Grid bounds, food cells and the walls-mode obstacle.

    ``check_collision`` evaluates the snake's (already moved) head in a fixed
    order: bounds, self, food, portal, wall. Some branches mutate the head in
    place (wrapping in no-death mode, teleporting in portal mode).

    Cells covered by the snake are marked in ``occupancy`` before every spawn,
    so food never appears under the body. The wall is not avoided.
    """

    def __init__(
        self,
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
        rng: Optional[random.Random] = None,
        max_spawn_attempts: int = MAX_SPAWN_ATTEMPTS,
        speed_factor: float = SPEED_FACTOR,
    ) -> None:
        self.width = width
        self.height = height
        self.random = rng or random.Random()
        self.max_spawn_attempts = max_spawn_attempts
        self.speed_factor = speed_factor

        self.occupancy = np.zeros((height, width), dtype=bool)
        self.food: Optional[GridPosition] = None
        self.second_food: Optional[GridPosition] = None
        self.wall: Optional[GridPosition] = None

    def in_bounds(self, pos: GridPosition) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def wrap(self, pos: GridPosition) -> GridPosition:
        x, y = pos
        if x < 0:
            x = self.width - 1
        elif x >= self.width:
            x = 0
        if y < 0:
            y = self.height - 1
        elif y >= self.height:
            y = 0
        return GridPosition(x, y)

    def mark_occupied(self, cells: Iterable[GridPosition]) -> None:
        self.occupancy[:] = False
        for cell in cells:
            if self.in_bounds(cell):
                self.occupancy[cell.y, cell.x] = True

    def _random_cell(self) -> GridPosition:
        return GridPosition(self.random.randrange(self.width), self.random.randrange(self.height))

    def _random_free_cell(self) -> GridPosition:
        if self.occupancy.all():
            raise BoardFullError("no free cell left on the board")
        for _ in range(self.max_spawn_attempts):
            cell = self._random_cell()
            if not self.occupancy[cell.y, cell.x]:
                return cell
        raise BoardFullError(f"no free cell found after {self.max_spawn_attempts} attempts")

    def spawn_food(self, snake: Optional[Snake] = None) -> None:
        if snake is not None:
            self.mark_occupied(snake.body)
        self.food = self._random_free_cell()
        self.second_food = self._random_free_cell()
        logger.debug("Food at %s, second food at %s", self.food, self.second_food)

    def check_collision(self, snake: Snake, mode: Union[GameMode, str]) -> CollisionResult:
        mode = GameMode.parse(mode)
        head = snake.head

        if not self.in_bounds(head):
            if mode is not GameMode.NO_DEATH:
                return CollisionResult.WALL
            head = self.wrap(head)
            snake.head = head

        if mode is not GameMode.NO_DEATH and head in islice(snake.body, 1, None):
            return CollisionResult.SELF

        if self.food is not None and head == self.food:
            if mode is GameMode.WALLS:
                self.wall = self._random_cell()
            if mode is GameMode.SPEED:
                snake.speed *= self.speed_factor
            if mode is GameMode.PORTAL and self.second_food is not None:
                snake.head = self.second_food
            self.spawn_food(snake)
            return CollisionResult.FOOD

        if mode is GameMode.PORTAL and self.second_food is not None and head == self.second_food:
            snake.head = self.food
            self.spawn_food(snake)
            return CollisionResult.FOOD

        if mode is GameMode.WALLS and self.wall is not None and head == self.wall:
            return CollisionResult.WALL

        return CollisionResult.NONE

    def reset(self, snake: Optional[Snake] = None) -> None:
        """Clear occupancy and respawn both food cells. The wall is kept."""
        self.occupancy[:] = False
        self.spawn_food(snake)
