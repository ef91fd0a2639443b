from __future__ import annotations

import argparse
import logging
import sys

import pygame

from snakegame.board import GameMode
from snakegame.config import FPS, TICK_MS, GameConfig
from snakegame.engine import GameEngine
from snakegame.render import PygameRenderer, Scene
from snakegame.snake import Direction

logger = logging.getLogger("play")

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}

KEY_MODES = {
    pygame.K_1: GameMode.CLASSIC,
    pygame.K_2: GameMode.WALLS,
    pygame.K_3: GameMode.NO_DEATH,
    pygame.K_4: GameMode.SPEED,
    pygame.K_5: GameMode.PORTAL,
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Snake")
    parser.add_argument(
        "--mode",
        type=str,
        default=GameMode.CLASSIC.value,
        choices=[mode.value for mode in GameMode],
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--fps", type=int, default=FPS)
    parser.add_argument("--tick-ms", type=int, default=TICK_MS)
    parser.add_argument(
        "--scale-tick-by-speed",
        action="store_true",
        help="Shorten the tick delay as speed mode multiplies the snake's speed",
    )
    parser.add_argument("--log-level", type=str, default="INFO")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = GameConfig(
        tick_ms=args.tick_ms,
        scale_tick_by_speed=args.scale_tick_by_speed,
        seed=args.seed,
    )
    engine = GameEngine(config, mode=args.mode, clock=pygame.time.get_ticks)
    renderer = PygameRenderer(config)
    scene = Scene(engine.snapshot())
    clock = pygame.time.Clock()

    scene.apply(engine.start())
    running = True
    while running:
        events = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key in KEY_DIRECTIONS:
                    engine.set_direction(KEY_DIRECTIONS[event.key])
                elif event.key in KEY_MODES:
                    events.extend(engine.set_mode(KEY_MODES[event.key]))
                elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                    events.extend(engine.start())
                elif event.key in (pygame.K_p, pygame.K_ESCAPE):
                    events.extend(engine.toggle_pause())
                elif event.key == pygame.K_x:
                    events.extend(engine.end())
                elif event.key == pygame.K_q:
                    running = False

        result = engine.pump()
        if result is not None:
            events.extend(result.events)
        scene.apply(events)
        scene.sync(engine.snapshot())
        renderer.draw(scene)
        clock.tick(args.fps)

    logger.info("Best score this session: %d", engine.best_score)
    renderer.close()
    sys.exit(0)


if __name__ == "__main__":
    main()
