from __future__ import annotations

from typing import List, Optional

try:
    import pygame  # type: ignore
except ImportError:  # pragma: no cover - pygame not installed in some envs
    pygame = None

from snakegame.board import GameMode
from snakegame.config import GameConfig
from snakegame.engine import LifecycleState
from snakegame.events import (
    BestScoreChanged,
    Event,
    GameEnded,
    ScoreChanged,
    SegmentAdded,
    SegmentsCleared,
    Snapshot,
    WallRemoved,
)
from snakegame.snake import GridPosition

BG = (16, 153, 187)
SNAKE_COLOR = (0, 255, 0)
FOOD_COLOR = (255, 0, 0)
PORTAL_COLOR = (255, 160, 0)
WALL_COLOR = (0, 0, 0)
TEXT = (240, 240, 250)

STATE_LABELS = {
    LifecycleState.IDLE: "Enter: play",
    LifecycleState.RUNNING: "P: menu",
    LifecycleState.PAUSED: "P: resume",
    LifecycleState.ENDED: "Enter: play again",
}


class Scene:
    """Sprite bookkeeping on the UI side, fed only by engine events and snapshots.

    One sprite per body cell, plus one extra per segment still owed to the
    tail; the extra sprites sit where the tail was when the food was eaten.
    """

    def __init__(self, snapshot: Snapshot) -> None:
        self.sprites: List[GridPosition] = list(snapshot.snake)
        self.wall: Optional[GridPosition] = snapshot.wall
        self.score = snapshot.score
        self.best_score = snapshot.best_score
        self.last_score: Optional[int] = None
        self.snapshot = snapshot

    def apply(self, events: List[Event]) -> None:
        for event in events:
            if isinstance(event, SegmentAdded):
                self.sprites.append(event.position)
            elif isinstance(event, SegmentsCleared):
                self.sprites.clear()
            elif isinstance(event, WallRemoved):
                self.wall = None
            elif isinstance(event, ScoreChanged):
                self.score = event.score
            elif isinstance(event, BestScoreChanged):
                self.best_score = event.best_score
            elif isinstance(event, GameEnded):
                self.last_score = event.score

    def sync(self, snapshot: Snapshot) -> None:
        self.snapshot = snapshot
        if not self.sprites:
            self.sprites = list(snapshot.snake)
        for i, cell in enumerate(snapshot.snake):
            if i < len(self.sprites):
                self.sprites[i] = cell
            else:
                self.sprites.append(cell)
        self.wall = snapshot.wall
        self.score = snapshot.score
        self.best_score = snapshot.best_score


class PygameRenderer:
    def __init__(self, config: GameConfig, caption: str = "Snake") -> None:
        if pygame is None:
            raise ImportError("pygame is required for rendering")
        pygame.init()
        self.cell_size = config.cell_size
        self._window = pygame.display.set_mode(config.pixel_size)
        pygame.display.set_caption(caption)
        self._font = pygame.font.SysFont(None, 24)

    def _draw_cell(self, cell: Optional[GridPosition], color) -> None:
        if cell is None:
            return
        rect = pygame.Rect(
            cell.x * self.cell_size,
            cell.y * self.cell_size,
            self.cell_size,
            self.cell_size,
        )
        pygame.draw.rect(self._window, color, rect)

    def draw(self, scene: Scene) -> None:
        snapshot = scene.snapshot
        self._window.fill(BG)

        self._draw_cell(snapshot.food, FOOD_COLOR)
        if snapshot.mode is GameMode.PORTAL:
            self._draw_cell(snapshot.second_food, PORTAL_COLOR)
        self._draw_cell(scene.wall, WALL_COLOR)
        for cell in scene.sprites:
            self._draw_cell(cell, SNAKE_COLOR)

        lines = [
            f"Score: {scene.score}   Best: {scene.best_score}",
            f"Mode: {snapshot.mode.value}   {STATE_LABELS[snapshot.state]}",
        ]
        if snapshot.state is LifecycleState.ENDED and scene.last_score is not None:
            lines.append(f"Game over! Final score: {scene.last_score}")
        for i, line in enumerate(lines):
            self._window.blit(self._font.render(line, True, TEXT), (8, 6 + i * 22))

        pygame.display.flip()

    def close(self) -> None:
        if pygame:
            pygame.quit()
