"""Grid geometry shared by the generator, the session and the renderer.

Cells are indexed row-major: ``index = row * GRID_SIZE + col``. Pixel
coordinates exist only at the rendering boundary and are derived from the
index, never stored alongside it.
"""

from .config import GRID_SIZE, NUM_CELLS, CELL_SIZE

# (d_row, d_col) for up, down, left, right
NEIGHBOR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE


def to_row_col(index: int) -> tuple[int, int]:
    if not 0 <= index < NUM_CELLS:
        raise ValueError(f"Cell index {index} is outside the {GRID_SIZE}x{GRID_SIZE} grid.")
    return divmod(index, GRID_SIZE)


def to_index(row: int, col: int) -> int:
    if not in_bounds(row, col):
        raise ValueError(f"Cell ({row}, {col}) is outside the {GRID_SIZE}x{GRID_SIZE} grid.")
    return row * GRID_SIZE + col


def neighbors(index: int):
    """Yields the in-bounds 4-connected neighbours of a cell."""
    row, col = to_row_col(index)
    for dr, dc in NEIGHBOR_OFFSETS:
        nr, nc = row + dr, col + dc
        if in_bounds(nr, nc):
            yield nr * GRID_SIZE + nc


def cell_to_pixel(index: int, cell_size: float = CELL_SIZE) -> tuple[float, float]:
    """Top-left corner of a cell as (x, y)."""
    row, col = to_row_col(index)
    return col * cell_size, row * cell_size


def pixel_to_cell(x: float, y: float, cell_size: float = CELL_SIZE) -> int:
    # Rounding absorbs float drift from repeated cell_size steps (14.4 * n)
    col = round(x / cell_size)
    row = round(y / cell_size)
    return to_index(row, col)
