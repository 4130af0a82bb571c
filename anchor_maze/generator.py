import logging
from collections import deque
from dataclasses import dataclass

import numpy as np

from .config import (
    BASE_WALL_COUNT,
    WALL_INCREMENT,
    GRID_SIZE,
    NUM_CELLS,
    START_CELL,
    CELL_PATH,
    CELL_WALL,
    CELL_ANCHOR,
)
from .grid import neighbors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Maze:
    """Wall layout and anchor cell for one level."""

    walls: frozenset
    anchor: int
    level: int = 1

    def __post_init__(self):
        object.__setattr__(self, "walls", frozenset(self.walls))

    def is_wall(self, index: int) -> bool:
        return index in self.walls

    def is_valid(self) -> bool:
        """True when every wall is on the grid, the start is open, the anchor is open and not the start, and a path joins them."""
        if not all(0 <= wall < NUM_CELLS for wall in self.walls):
            return False
        if START_CELL in self.walls:
            return False
        if self.anchor == START_CELL or self.anchor in self.walls:
            return False
        if not 0 <= self.anchor < NUM_CELLS:
            return False
        return is_path_available(self.walls, self.anchor)

    def to_grid(self):
        # 0 = path, 1 = wall, 2 = anchor
        grid = np.full((GRID_SIZE, GRID_SIZE), CELL_PATH, dtype=np.uint8)
        for index in self.walls:
            grid[divmod(index, GRID_SIZE)] = CELL_WALL
        grid[divmod(self.anchor, GRID_SIZE)] = CELL_ANCHOR
        return grid


def wall_count_for_level(level: int) -> int:
    if level < 1:
        raise ValueError(f"Level must be >= 1, got {level}.")
    return BASE_WALL_COUNT + (level - 1) * WALL_INCREMENT


def generate_walls_for_level(level, np_random):
    """Places walls uniformly at random until the level's wall count is reached. The start cell is never a wall."""
    wall_count = wall_count_for_level(level)
    walls = set()
    while len(walls) < wall_count:
        wall_pos = int(np_random.integers(0, NUM_CELLS))
        if wall_pos == START_CELL:
            continue
        walls.add(wall_pos)
    return walls


def generate_anchor(walls, np_random):
    """Picks an open cell other than the start."""
    while True:
        anchor = int(np_random.integers(0, NUM_CELLS))
        if anchor not in walls and anchor != START_CELL:
            return anchor


def is_path_available(walls, anchor, start=START_CELL):
    """BFS over the open 4-connected cells from ``start``."""
    if start in walls:
        return False
    queue = deque([start])
    visited = {start}

    while queue:
        cell = queue.popleft()
        if cell == anchor:
            return True
        for neighbor in neighbors(cell):
            if neighbor not in walls and neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
    return False


def generate_maze(level, np_random=None):
    """
    Generates walls and an anchor for ``level``, retrying from scratch until the
    anchor is reachable from the start cell.

    Walls are placed independently at random, so a layout can cut the anchor
    off; the reachability check decides whether the attempt is kept. There is
    no retry cap: with 200-280 walls on 625 cells a failed attempt is rare.

    Args:
        level (int): Level number, 1-based.
        np_random (np.random.Generator): Random source. A fresh unseeded
            generator is used when omitted.

    Returns:
        Maze: A maze whose anchor is reachable from cell 0.
    """
    if np_random is None:
        np_random = np.random.default_rng()

    attempts = 0
    while True:
        attempts += 1
        walls = generate_walls_for_level(level, np_random)
        anchor = generate_anchor(walls, np_random)
        if is_path_available(walls, anchor):
            break
        logger.debug("Level %s layout %s has no path to anchor %s, regenerating", level, attempts, anchor)

    logger.debug("Generated level %s maze: %s walls, anchor %s, %s attempt(s)", level, len(walls), anchor, attempts)
    return Maze(walls=frozenset(walls), anchor=anchor, level=level)
