# --- Grid ---
GRID_SIZE = 25
NUM_CELLS = GRID_SIZE * GRID_SIZE
START_CELL = 0
ROOT_FONT_PX = 16
CELL_SIZE = 0.9 * ROOT_FONT_PX  # 0.9rem

# --- Scoring and levels ---
BASE_POINTS = 100
BASE_WALL_COUNT = 200
WALL_INCREMENT = 20
MAX_LEVELS = 5

# --- Cell codes for Maze.to_grid() ---
CELL_PATH = 0
CELL_WALL = 1
CELL_ANCHOR = 2

# --- Rendering ---
SCREEN_WIDTH = 640
SCREEN_HEIGHT = 400
FPS = 30

COLOR_BG = (20, 25, 30)
COLOR_PATH = (40, 45, 50)
COLOR_WALL = (70, 80, 90)
COLOR_ANCHOR = (0, 200, 80)
COLOR_ANCHOR_ACCENT = (180, 255, 200)
COLOR_PLAYER = (0, 150, 255)
COLOR_PLAYER_ACCENT = (200, 240, 255)
COLOR_TEXT = (230, 230, 230)
COLOR_TEXT_DIM = (150, 150, 160)
COLOR_OVERLAY = (0, 0, 0, 180)
