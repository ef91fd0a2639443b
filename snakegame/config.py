from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

# ----- Grid -----
GRID_WIDTH, GRID_HEIGHT = 20, 20
CELL_SIZE = 32  # board is 640x640 px

# ----- Pacing -----
TICK_MS = 50
FPS = 60

# ----- Rules -----
ORIGIN = (10, 10)
SPEED_FACTOR = 1.1
MAX_SPAWN_ATTEMPTS = 10_000


@dataclass(frozen=True)
class GameConfig:
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    cell_size: int = CELL_SIZE
    tick_ms: int = TICK_MS
    origin: Tuple[int, int] = ORIGIN
    speed_factor: float = SPEED_FACTOR
    max_spawn_attempts: int = MAX_SPAWN_ATTEMPTS
    scale_tick_by_speed: bool = False
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("grid dimensions must be positive")
        if self.cell_size <= 0:
            raise ValueError("cell_size must be positive")
        if self.tick_ms <= 0:
            raise ValueError("tick_ms must be positive")
        if self.speed_factor <= 0:
            raise ValueError("speed_factor must be positive")
        if self.max_spawn_attempts <= 0:
            raise ValueError("max_spawn_attempts must be positive")
        ox, oy = self.origin
        if not (0 <= ox < self.width and 0 <= oy < self.height):
            raise ValueError(f"origin {self.origin} is outside the grid")

    @property
    def pixel_size(self) -> Tuple[int, int]:
        return self.width * self.cell_size, self.height * self.cell_size
