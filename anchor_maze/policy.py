from .config import GRID_SIZE
from .grid import in_bounds


def policy(env):
    # Strategy: Use the player and anchor cells to compute the row/col distance.
    # Take the first open move that shrinks it, vertical before horizontal; if every
    # such move is blocked, take any open move so the agent doesn't stand still on a wall.
    session = env.session
    if session.is_over:
        return [0, 0, 0]

    row, col = divmod(session.player_cell, GRID_SIZE)
    anchor_row, anchor_col = divmod(session.maze.anchor, GRID_SIZE)
    dy = anchor_row - row
    dx = anchor_col - col

    def is_open(movement):
        dr, dc = _OFFSETS[movement]
        nr, nc = row + dr, col + dc
        return in_bounds(nr, nc) and not session.maze.is_wall(nr * GRID_SIZE + nc)

    preferred = []
    if dy > 0:
        preferred.append(2)  # Move down
    elif dy < 0:
        preferred.append(1)  # Move up
    if dx > 0:
        preferred.append(4)  # Move right
    elif dx < 0:
        preferred.append(3)  # Move left

    for movement in preferred:
        if is_open(movement):
            return [movement, 0, 0]
    for movement in (1, 2, 3, 4):
        if is_open(movement):
            return [movement, 0, 0]
    return [0, 0, 0]  # No movement (boxed in)


_OFFSETS = {
    1: (-1, 0),
    2: (1, 0),
    3: (0, -1),
    4: (0, 1),
}
