from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

import numpy as np
from gymnasium.utils import seeding

from .config import BASE_POINTS, MAX_LEVELS, START_CELL
from .generator import Maze, generate_maze
from .grid import in_bounds, to_row_col, to_index, cell_to_pixel

logger = logging.getLogger(__name__)


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def offset(self) -> tuple[int, int]:
        return _OFFSETS[self]

    @classmethod
    def parse(cls, value) -> Optional["Direction"]:
        """Maps a Direction, its value, or a keyboard key name (any case) to a Direction. Unknown input gives None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        value = value.lower()
        key = _KEY_ALIASES.get(value)
        if key is not None:
            return key
        try:
            return cls(value)
        except ValueError:
            return None


_OFFSETS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_KEY_ALIASES = {
    "w": Direction.UP,
    "arrowup": Direction.UP,
    "s": Direction.DOWN,
    "arrowdown": Direction.DOWN,
    "a": Direction.LEFT,
    "arrowleft": Direction.LEFT,
    "d": Direction.RIGHT,
    "arrowright": Direction.RIGHT,
}


class GameSession:
    """
    State of one game: the current maze, the player's cell, the level and
    the score.

    ``attempt_move`` is the only transition. Invalid input (a move off the
    grid, into a wall, after the game is over, or an unknown direction) is
    ignored and leaves every field untouched; the caller tells accepted from
    rejected moves by the return value or by watching the state.

    Each accepted move costs one point from ``points_left``. Reaching the
    anchor credits the remaining points (after that move's cost) to
    ``score`` and either starts the next level or, on the last level, ends
    the game and calls ``on_game_over(final_score)`` once.
    """

    def __init__(
        self,
        on_game_over: Optional[Callable[[int], None]] = None,
        np_random: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        level: int = 1,
        maze: Optional[Maze] = None,
    ):
        if np_random is not None and seed is not None:
            raise ValueError("Pass either np_random or seed, not both.")
        if np_random is None:
            np_random, _ = seeding.np_random(seed)
        self.np_random = np_random
        self.on_game_over = on_game_over

        self.level = 1
        self.score = 0
        self.points_left = BASE_POINTS
        self.player_cell = START_CELL
        self.maze = None
        self.is_over = False
        self.final_score = None
        self.moves = 0

        self.reset(level=level, maze=maze)

    def reset(self, level: int = 1, maze: Optional[Maze] = None):
        """Starts a new game on this session, optionally from ``level`` and with a prepared ``maze``."""
        if not 1 <= level <= MAX_LEVELS:
            raise ValueError(f"Level must be between 1 and {MAX_LEVELS}, got {level}.")
        if maze is not None and not maze.is_valid():
            raise ValueError("Maze walls must lie on the grid, keep the start cell open and leave the anchor reachable.")

        self.level = level
        self.score = 0
        self.is_over = False
        self.final_score = None
        self._start_level(maze if maze is not None else generate_maze(level, self.np_random))

    def _start_level(self, maze: Maze):
        self.maze = maze
        self.player_cell = START_CELL
        self.points_left = BASE_POINTS
        self.moves = 0

    def attempt_move(self, direction) -> bool:
        if self.is_over:
            return False
        direction = Direction.parse(direction)
        if direction is None:
            return False

        row, col = to_row_col(self.player_cell)
        dr, dc = direction.offset
        new_row, new_col = row + dr, col + dc
        if not in_bounds(new_row, new_col):
            return False

        target_cell = to_index(new_row, new_col)
        if self.maze.is_wall(target_cell):
            return False

        new_points_left = max(self.points_left - 1, 0)

        if target_cell == self.maze.anchor:
            level_score = self.score + new_points_left
            if self.level >= MAX_LEVELS:
                self._finish(level_score, new_points_left)
            else:
                self._advance(level_score)
        else:
            self.player_cell = target_cell
            self.points_left = new_points_left
            self.moves += 1
            logger.debug("Moved %s to cell %s, %s points left", direction.value, target_cell, new_points_left)
        return True

    def _advance(self, level_score: int):
        logger.info("Level %s cleared with %s points, score %s -> %s", self.level, level_score - self.score, self.score, level_score)
        self.level += 1
        self.score = level_score
        self._start_level(generate_maze(self.level, self.np_random))

    def _finish(self, final_score: int, points_left: int):
        # player_cell stays on the cell next to the anchor
        self.points_left = points_left
        self.score = final_score
        self.final_score = final_score
        self.is_over = True
        logger.info("Game over on level %s, final score %s", self.level, final_score)
        if self.on_game_over is not None:
            self.on_game_over(final_score)

    @property
    def player_row_col(self) -> tuple[int, int]:
        return to_row_col(self.player_cell)

    @property
    def player_pixel(self) -> tuple[float, float]:
        return cell_to_pixel(self.player_cell)

    def snapshot(self) -> dict:
        return {
            "level": self.level,
            "score": self.score,
            "points_left": self.points_left,
            "player_cell": self.player_cell,
            "anchor": self.maze.anchor,
            "moves": self.moves,
            "is_over": self.is_over,
            "final_score": self.final_score,
        }
