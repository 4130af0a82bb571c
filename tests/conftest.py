import os
from collections import deque

import numpy as np
import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from anchor_maze.config import GRID_SIZE
from anchor_maze.generator import Maze
from anchor_maze.grid import neighbors


class ScriptedRandom:
    """Stands in for np.random.Generator, returning scripted values from integers()."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def integers(self, low, high=None):
        value = self.values[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def adjacent_maze():
    """Anchor one step right of the start, a few walls elsewhere."""
    return Maze(walls=frozenset({5, 30, 31, 100}), anchor=1, level=1)


@pytest.fixture
def open_maze():
    """Anchor in the far corner, a single wall below the start."""
    return Maze(walls=frozenset({GRID_SIZE}), anchor=GRID_SIZE * GRID_SIZE - 1, level=1)


def shortest_path(maze, start=0):
    """Cells from start (exclusive) to the anchor (inclusive), or None."""
    prev = {start: None}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        if cell == maze.anchor:
            break
        for neighbor in neighbors(cell):
            if neighbor not in maze.walls and neighbor not in prev:
                prev[neighbor] = cell
                queue.append(neighbor)
    if maze.anchor not in prev:
        return None
    path = []
    cell = maze.anchor
    while cell != start:
        path.append(cell)
        cell = prev[cell]
    path.reverse()
    return path


def direction_between(a, b):
    diff = b - a
    if diff == -GRID_SIZE:
        return "up"
    if diff == GRID_SIZE:
        return "down"
    if diff == -1:
        return "left"
    if diff == 1:
        return "right"
    raise AssertionError(f"Cells {a} and {b} are not adjacent")
