import logging
import math

import gymnasium as gym
from gymnasium.spaces import MultiDiscrete, Box
import numpy as np
import pygame
import pygame.gfxdraw

from . import config
from .grid import cell_to_pixel
from .session import Direction, GameSession

logger = logging.getLogger(__name__)

# action[0]: 0-4 none/up/down/left/right
MOVEMENT_TO_DIRECTION = {
    1: Direction.UP,
    2: Direction.DOWN,
    3: Direction.LEFT,
    4: Direction.RIGHT,
}


class GameEnv(gym.Env):
    """
    Gymnasium host for a GameSession: forwards movement actions to
    ``GameSession.attempt_move`` and renders the board with pygame.
    """
    metadata = {"render_modes": ["rgb_array"]}

    # Must be a short, user-facing control string:
    user_guide = (
        "Controls: Use arrow keys (↑, ↓, ←, →) or WASD to move one cell at a time."
    )

    # Must be a short, user-facing description of the game:
    game_description = (
        "Reach the green anchor in five procedurally generated mazes. Every step costs a point, "
        "the points left when you reach the anchor are added to your score."
    )

    # Should frames auto-advance or wait for user input?
    auto_advance = False

    def __init__(self, render_mode="rgb_array"):
        super().__init__()
        self.render_mode = render_mode

        # --- Game Constants ---
        self.SCREEN_WIDTH = config.SCREEN_WIDTH
        self.SCREEN_HEIGHT = config.SCREEN_HEIGHT
        self.CELL_SIZE = config.CELL_SIZE
        self.BOARD_OFFSET = (20, 20)
        self.PANEL_X = 20 + math.ceil(config.GRID_SIZE * config.CELL_SIZE) + 30

        # --- Colors ---
        self.COLOR_BG = config.COLOR_BG
        self.COLOR_PATH = config.COLOR_PATH
        self.COLOR_WALL = config.COLOR_WALL
        self.COLOR_ANCHOR = config.COLOR_ANCHOR
        self.COLOR_ANCHOR_ACCENT = config.COLOR_ANCHOR_ACCENT
        self.COLOR_PLAYER = config.COLOR_PLAYER
        self.COLOR_PLAYER_ACCENT = config.COLOR_PLAYER_ACCENT
        self.COLOR_TEXT = config.COLOR_TEXT
        self.COLOR_TEXT_DIM = config.COLOR_TEXT_DIM

        # --- Gymnasium Spaces ---
        self.observation_space = Box(
            low=0, high=255, shape=(self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 2, 2])

        # --- Pygame Setup ---
        pygame.init()
        pygame.font.init()
        self.screen = pygame.Surface((self.SCREEN_WIDTH, self.SCREEN_HEIGHT))
        self.clock = pygame.time.Clock()
        self.font_ui = pygame.font.Font(None, 26)
        self.font_level = pygame.font.Font(None, 36)
        self.font_game_over = pygame.font.Font(None, 56)

        # --- Game State (initialized in reset) ---
        self.session = None
        self.steps = 0
        self.game_over_scores = []

        self.reset()

        # This is a critical self-check.
        self.validate_implementation()

    def _on_game_over(self, final_score):
        self.game_over_scores.append(final_score)
        logger.info("Episode finished after %s steps with final score %s", self.steps, final_score)

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        options = options or {}

        self.session = GameSession(
            on_game_over=self._on_game_over,
            np_random=self.np_random,
            level=options.get("level", 1),
            maze=options.get("maze"),
        )
        self.steps = 0
        self.game_over_scores = []

        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.session.is_over:
            return self._get_observation(), 0, True, False, self._get_info()

        self.steps += 1
        movement = int(action[0])
        # action[1] and action[2] are unused

        score_before = self.session.score
        direction = MOVEMENT_TO_DIRECTION.get(movement)
        if direction is not None:
            self.session.attempt_move(direction)

        reward = self.session.score - score_before
        terminated = self.session.is_over

        return (
            self._get_observation(),
            reward,
            terminated,
            False,  # truncated always False
            self._get_info()
        )

    def render(self):
        return self._get_observation()

    def _get_observation(self):
        self.screen.fill(self.COLOR_BG)
        self._render_game()
        self._render_ui()
        if self.session.is_over:
            self._render_game_over()

        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _cell_rect(self, index):
        x, y = cell_to_pixel(index, self.CELL_SIZE)
        size = math.ceil(self.CELL_SIZE)
        return pygame.Rect(
            self.BOARD_OFFSET[0] + round(x),
            self.BOARD_OFFSET[1] + round(y),
            size,
            size
        )

    def _render_game(self):
        """Renders the maze, the anchor and the player."""
        maze = self.session.maze
        board = pygame.Rect(
            self.BOARD_OFFSET[0],
            self.BOARD_OFFSET[1],
            math.ceil(config.GRID_SIZE * self.CELL_SIZE),
            math.ceil(config.GRID_SIZE * self.CELL_SIZE)
        )
        pygame.draw.rect(self.screen, self.COLOR_PATH, board)

        for index in maze.walls:
            pygame.draw.rect(self.screen, self.COLOR_WALL, self._cell_rect(index))

        # Draw Anchor
        anchor_rect = self._cell_rect(maze.anchor)
        pygame.gfxdraw.box(self.screen, anchor_rect, self.COLOR_ANCHOR)
        radius = max(1, int(self.CELL_SIZE * 0.2))
        pygame.gfxdraw.filled_circle(self.screen, anchor_rect.centerx, anchor_rect.centery, radius, self.COLOR_ANCHOR_ACCENT)

        # Draw Player
        player_rect = self._cell_rect(self.session.player_cell)
        player_radius = max(1, int(self.CELL_SIZE * 0.4))
        pygame.gfxdraw.aacircle(self.screen, player_rect.centerx, player_rect.centery, player_radius, self.COLOR_PLAYER)
        pygame.gfxdraw.filled_circle(self.screen, player_rect.centerx, player_rect.centery, player_radius, self.COLOR_PLAYER)
        pygame.gfxdraw.aacircle(self.screen, player_rect.centerx, player_rect.centery, max(1, int(player_radius * 0.5)), self.COLOR_PLAYER_ACCENT)

    def _render_ui(self):
        """Renders the scoreboard: score, level and points left."""
        level_text = self.font_level.render(f"LEVEL {self.session.level}/{config.MAX_LEVELS}", True, self.COLOR_TEXT)
        self.screen.blit(level_text, (self.PANEL_X, 30))

        score_text = self.font_ui.render(f"SCORE: {self.session.score}", True, self.COLOR_TEXT)
        self.screen.blit(score_text, (self.PANEL_X, 80))

        points_text = self.font_ui.render(f"POINTS LEFT: {self.session.points_left}", True, self.COLOR_TEXT)
        self.screen.blit(points_text, (self.PANEL_X, 110))

        # Points bar
        bar_width = self.SCREEN_WIDTH - self.PANEL_X - 20
        pygame.draw.rect(self.screen, self.COLOR_PATH, (self.PANEL_X, 140, bar_width, 8), border_radius=2)
        ratio = self.session.points_left / config.BASE_POINTS
        if ratio > 0:
            pygame.draw.rect(self.screen, self.COLOR_ANCHOR, (self.PANEL_X, 140, int(bar_width * ratio), 8), border_radius=2)

    def _render_game_over(self):
        overlay = pygame.Surface((self.SCREEN_WIDTH, self.SCREEN_HEIGHT), pygame.SRCALPHA)
        overlay.fill(config.COLOR_OVERLAY)
        self.screen.blit(overlay, (0, 0))

        end_text = self.font_game_over.render("GAME OVER", True, self.COLOR_ANCHOR)
        self.screen.blit(end_text, end_text.get_rect(center=(self.SCREEN_WIDTH / 2, self.SCREEN_HEIGHT / 2 - 30)))

        score_text = self.font_level.render(f"Final Score: {self.session.final_score}", True, self.COLOR_TEXT)
        self.screen.blit(score_text, score_text.get_rect(center=(self.SCREEN_WIDTH / 2, self.SCREEN_HEIGHT / 2 + 20)))

    def _get_info(self):
        info = self.session.snapshot()
        info["steps"] = self.steps
        return info

    def close(self):
        pygame.font.quit()
        pygame.quit()

    def validate_implementation(self):
        '''
        Call this at the end of __init__ to verify implementation:
        '''
        # Test action space
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        # Test observation space
        test_obs = self._get_observation()
        assert test_obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert test_obs.dtype == np.uint8

        # Test reset
        obs, info = self.reset()
        assert obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert isinstance(info, dict)

        # Test step
        test_action = self.action_space.sample()
        obs, reward, term, trunc, info = self.step(test_action)
        assert obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert isinstance(reward, (int, float))
        assert isinstance(term, bool)
        assert trunc == False
        assert isinstance(info, dict)

        print("✓ Implementation validated successfully")
