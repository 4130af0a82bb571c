import pytest

from anchor_maze.config import BASE_POINTS, CELL_SIZE, GRID_SIZE, MAX_LEVELS
from anchor_maze.generator import Maze
from anchor_maze.session import Direction, GameSession

from conftest import direction_between, shortest_path


def fields(session):
    return (session.level, session.score, session.points_left, session.player_cell, session.maze, session.is_over)


def test_initial_state():
    session = GameSession(seed=0)
    assert session.level == 1
    assert session.points_left == BASE_POINTS
    assert session.score == 0
    assert session.player_cell == 0
    assert session.is_over is False
    assert session.final_score is None
    assert len(session.maze.walls) == 200
    assert session.maze.is_valid()


def test_seeded_sessions_share_first_maze():
    assert GameSession(seed=7).maze == GameSession(seed=7).maze


def test_accepted_move_costs_one_point(open_maze):
    session = GameSession(maze=open_maze)
    assert session.attempt_move(Direction.RIGHT) is True
    assert session.level == 1
    assert session.points_left == 99
    assert session.score == 0
    assert session.player_cell == 1
    assert session.moves == 1


def test_wall_collision_is_inert(open_maze):
    session = GameSession(maze=open_maze)
    before = fields(session)
    # Cell 25 is a wall
    assert session.attempt_move("down") is False
    assert fields(session) == before


@pytest.mark.parametrize("direction", ["up", "left"])
def test_boundary_is_inert(open_maze, direction):
    session = GameSession(maze=open_maze)
    before = fields(session)
    assert session.attempt_move(direction) is False
    assert fields(session) == before


def test_boundary_on_far_edge():
    maze = Maze(walls=frozenset(), anchor=GRID_SIZE * GRID_SIZE - 1)
    session = GameSession(maze=maze)
    for _ in range(GRID_SIZE - 1):
        assert session.attempt_move("right")
    assert session.player_cell == GRID_SIZE - 1
    points = session.points_left
    # No wrap onto the next row
    assert session.attempt_move("right") is False
    assert session.player_cell == GRID_SIZE - 1
    assert session.points_left == points


@pytest.mark.parametrize("value", ["jump", "", None, 3, "upward"])
def test_unrecognized_direction_is_ignored(open_maze, value):
    session = GameSession(maze=open_maze)
    before = fields(session)
    assert session.attempt_move(value) is False
    assert fields(session) == before


@pytest.mark.parametrize("value", [Direction.RIGHT, "right", "RIGHT", "d", "ArrowRight"])
def test_direction_aliases(open_maze, value):
    session = GameSession(maze=open_maze)
    assert session.attempt_move(value)
    assert session.player_cell == 1


def test_points_never_negative(open_maze):
    session = GameSession(maze=open_maze)
    session.points_left = 1
    session.attempt_move("right")
    assert session.points_left == 0
    session.attempt_move("left")
    assert session.points_left == 0
    assert session.player_cell == 0


def test_back_and_forth_costs_each_step(open_maze):
    session = GameSession(maze=open_maze)
    for _ in range(5):
        session.attempt_move("right")
        session.attempt_move("left")
    assert session.points_left == BASE_POINTS - 10
    assert session.player_cell == 0


def test_final_level_anchor_ends_game(adjacent_maze):
    notified = []
    session = GameSession(on_game_over=notified.append, level=MAX_LEVELS, maze=adjacent_maze)

    assert session.attempt_move("right")

    assert session.is_over is True
    assert notified == [99]
    assert session.final_score == 99
    assert session.score == 99


def test_moves_after_game_over_are_inert(adjacent_maze):
    notified = []
    session = GameSession(on_game_over=notified.append, level=MAX_LEVELS, maze=adjacent_maze)
    session.attempt_move("right")
    before = fields(session)

    for direction in ("left", "right", "up", "down", "right"):
        assert session.attempt_move(direction) is False

    assert fields(session) == before
    assert notified == [99]


def test_anchor_advances_level(adjacent_maze):
    session = GameSession(seed=3, maze=adjacent_maze)

    session.attempt_move("right")

    assert session.level == 2
    assert session.points_left == BASE_POINTS
    assert session.score == 99
    assert session.player_cell == 0
    assert session.is_over is False
    assert session.maze is not adjacent_maze
    assert session.maze.level == 2
    assert len(session.maze.walls) == 220
    assert session.maze.is_valid()


def test_anchor_with_no_points_left(adjacent_maze):
    notified = []
    session = GameSession(on_game_over=notified.append, level=MAX_LEVELS, maze=adjacent_maze)
    session.points_left = 0
    session.attempt_move("right")
    assert notified == [0]


def test_score_accumulates_path_cost():
    maze = Maze(walls=frozenset({GRID_SIZE, GRID_SIZE + 1}), anchor=3)
    notified = []
    session = GameSession(on_game_over=notified.append, level=MAX_LEVELS, maze=maze)
    for _ in range(3):
        session.attempt_move("right")
    # 3 moves: 100 - 3
    assert notified == [97]


def test_full_game_scores_every_level():
    notified = []
    session = GameSession(on_game_over=notified.append, seed=11)
    expected = 0

    for level in range(1, MAX_LEVELS + 1):
        assert session.level == level
        path = shortest_path(session.maze)
        assert path is not None
        expected += max(BASE_POINTS - len(path), 0)
        cell = 0
        for target in path:
            assert session.attempt_move(direction_between(cell, target))
            cell = target

    assert session.is_over
    assert notified == [expected]
    assert session.score == expected


def test_score_never_decreases():
    session = GameSession(seed=5)
    last = session.score
    for _ in range(MAX_LEVELS):
        for target in shortest_path(session.maze)[:-1]:
            session.attempt_move(direction_between(session.player_cell, target))
            assert session.score >= last
        session.attempt_move(direction_between(session.player_cell, session.maze.anchor))
        assert session.score >= last
        last = session.score


def test_reset_starts_new_game(adjacent_maze):
    notified = []
    session = GameSession(on_game_over=notified.append, level=MAX_LEVELS, maze=adjacent_maze)
    session.attempt_move("right")

    session.reset(level=MAX_LEVELS, maze=adjacent_maze)
    assert session.is_over is False
    assert session.score == 0
    assert session.points_left == BASE_POINTS
    assert session.player_cell == 0
    assert session.final_score is None

    session.attempt_move("right")
    assert notified == [99, 99]


@pytest.mark.parametrize("level", [0, MAX_LEVELS + 1])
def test_level_outside_range_raises(level):
    with pytest.raises(ValueError):
        GameSession(level=level)


def test_invalid_maze_raises():
    blocked = Maze(walls=frozenset({1, GRID_SIZE}), anchor=300)
    with pytest.raises(ValueError):
        GameSession(maze=blocked)


def test_player_pixel_position(open_maze):
    session = GameSession(maze=open_maze)
    session.attempt_move("right")
    session.attempt_move("right")
    assert session.player_row_col == (0, 2)
    x, y = session.player_pixel
    assert x == pytest.approx(2 * CELL_SIZE)
    assert y == 0


def test_snapshot(open_maze):
    session = GameSession(maze=open_maze)
    session.attempt_move("right")
    assert session.snapshot() == {
        "level": 1,
        "score": 0,
        "points_left": 99,
        "player_cell": 1,
        "anchor": open_maze.anchor,
        "moves": 1,
        "is_over": False,
        "final_score": None,
    }


@pytest.mark.parametrize("wall", [-1, 700])
def test_maze_with_wall_outside_grid_raises(wall):
    with pytest.raises(ValueError):
        GameSession(maze=Maze(walls=frozenset({wall}), anchor=1))


def test_changing_source_walls_after_start_has_no_effect():
    source = {5}
    session = GameSession(maze=Maze(walls=source, anchor=2))
    source.add(1)
    assert session.attempt_move("right") is True
    assert session.player_cell == 1


@pytest.mark.parametrize("value", ["D", "ARROWRIGHT", "arrowright", "Right"])
def test_direction_names_ignore_case(open_maze, value):
    session = GameSession(maze=open_maze)
    assert session.attempt_move(value)
    assert session.player_cell == 1


def test_seed_and_np_random_together_raise(rng):
    with pytest.raises(ValueError):
        GameSession(np_random=rng, seed=1)
