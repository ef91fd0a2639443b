import random
from collections import deque

import pytest

from snakegame.board import Board, CollisionResult, GameMode
from snakegame.errors import BoardFullError, InvalidModeError
from snakegame.snake import Direction, GridPosition, Snake


def make_board(**kwargs) -> Board:
    board = Board(rng=random.Random(7), **kwargs)
    board.food = GridPosition(0, 19)
    board.second_food = GridPosition(19, 19)
    return board


def snake_at(*cells, direction=Direction.UP) -> Snake:
    snake = Snake()
    snake.body = deque(GridPosition(*c) for c in cells)
    snake.direction = direction
    return snake


def test_out_of_bounds_is_wall_in_classic():
    board = make_board()
    snake = snake_at((0, 5), direction=Direction.LEFT)
    snake.move()
    assert board.check_collision(snake, GameMode.CLASSIC) is CollisionResult.WALL


def test_no_death_wraps_to_opposite_edge():
    board = make_board()
    snake = snake_at((0, 5), direction=Direction.LEFT)
    snake.move()
    assert board.check_collision(snake, GameMode.NO_DEATH) is CollisionResult.NONE
    assert snake.head == GridPosition(19, 5)

    snake = snake_at((5, 19), direction=Direction.DOWN)
    snake.move()
    assert board.check_collision(snake, "no-death") is CollisionResult.NONE
    assert snake.head == GridPosition(5, 0)


def test_self_collision_depends_on_mode():
    board = make_board()
    cells = [(5, 5), (5, 6), (6, 6), (6, 5), (5, 5)]
    assert board.check_collision(snake_at(*cells), GameMode.CLASSIC) is CollisionResult.SELF
    assert board.check_collision(snake_at(*cells), GameMode.NO_DEATH) is CollisionResult.NONE


def test_wrapped_head_can_eat_food():
    board = make_board()
    board.food = GridPosition(19, 5)
    snake = snake_at((0, 5), direction=Direction.LEFT)
    snake.move()
    assert board.check_collision(snake, GameMode.NO_DEATH) is CollisionResult.FOOD
    assert snake.head == GridPosition(19, 5)


def test_eating_food_respawns_both_cells():
    board = make_board()
    board.food = GridPosition(10, 9)
    snake = snake_at((10, 10))
    snake.move()
    assert board.check_collision(snake, GameMode.CLASSIC) is CollisionResult.FOOD
    assert board.food is not None and board.food != snake.head
    assert board.second_food is not None
    assert board.wall is None


def test_walls_mode_places_wall_on_food_and_wall_kills():
    board = make_board()
    board.food = GridPosition(10, 9)
    snake = snake_at((10, 10))
    snake.move()
    assert board.check_collision(snake, GameMode.WALLS) is CollisionResult.FOOD
    assert board.wall is not None

    wall = board.wall
    board.food = GridPosition(0, 19) if wall != GridPosition(0, 19) else GridPosition(1, 19)
    board.second_food = board.food
    snake = snake_at(tuple(wall))
    assert board.check_collision(snake, GameMode.WALLS) is CollisionResult.WALL
    assert board.check_collision(snake_at(tuple(wall)), GameMode.CLASSIC) is CollisionResult.NONE


def test_speed_mode_compounds_multiplier():
    board = make_board()
    snake = snake_at((10, 10))
    for _ in range(2):
        board.food = GridPosition(snake.head.x, snake.head.y - 1)
        snake.move()
        assert board.check_collision(snake, GameMode.SPEED) is CollisionResult.FOOD
    assert snake.speed == pytest.approx(1.21)


def test_speed_unchanged_outside_speed_mode():
    board = make_board()
    board.food = GridPosition(10, 9)
    snake = snake_at((10, 10))
    snake.move()
    board.check_collision(snake, GameMode.CLASSIC)
    assert snake.speed == 1.0


def test_portal_teleports_both_ways():
    board = make_board()
    board.food = GridPosition(10, 9)
    board.second_food = GridPosition(3, 3)
    snake = snake_at((10, 10))
    snake.move()
    assert board.check_collision(snake, GameMode.PORTAL) is CollisionResult.FOOD
    assert snake.head == GridPosition(3, 3)

    # follow the freshly spawned portal back to the new food
    food, portal = board.food, board.second_food
    snake.body = deque([GridPosition(portal.x, portal.y + 1)])
    snake.direction = Direction.UP
    snake.move()
    assert board.check_collision(snake, GameMode.PORTAL) is CollisionResult.FOOD
    assert snake.head == food


def test_second_food_is_inert_outside_portal_mode():
    board = make_board()
    board.second_food = GridPosition(10, 9)
    snake = snake_at((10, 10))
    snake.move()
    assert board.check_collision(snake, GameMode.CLASSIC) is CollisionResult.NONE
    assert snake.head == GridPosition(10, 9)


def test_food_never_spawns_under_snake():
    board = Board(width=3, height=1, rng=random.Random(1))
    snake = snake_at((0, 0), (1, 0))
    for _ in range(20):
        board.spawn_food(snake)
        assert board.food == GridPosition(2, 0)
        assert board.second_food == GridPosition(2, 0)


def test_full_board_raises():
    board = Board(width=1, height=1, rng=random.Random(1))
    with pytest.raises(BoardFullError):
        board.spawn_food(Snake(origin=(0, 0)))


def test_spawn_gives_up_after_attempt_cap():
    board = Board(width=50, height=50, rng=random.Random(3), max_spawn_attempts=1)
    board.occupancy[:] = True
    board.occupancy[0, 0] = False
    with pytest.raises(BoardFullError):
        for _ in range(100):
            board.food = board._random_free_cell()


def test_reset_keeps_wall():
    board = make_board()
    board.wall = GridPosition(4, 4)
    board.reset(Snake())
    assert board.wall == GridPosition(4, 4)
    assert board.food is not None and board.food != GridPosition(10, 10)


def test_unknown_mode_is_rejected():
    with pytest.raises(InvalidModeError):
        GameMode.parse("teleport")
    with pytest.raises(ValueError):
        make_board().check_collision(Snake(), "arcade")


def test_mode_names_are_normalised():
    assert GameMode.parse("Classic ") is GameMode.CLASSIC
    assert GameMode.parse(GameMode.PORTAL) is GameMode.PORTAL
