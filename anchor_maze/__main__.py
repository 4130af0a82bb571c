"""Manual play: main menu, game and game-over screens in a pygame window."""

import argparse
import logging
import os

import numpy as np
import pygame

from . import config
from .env import GameEnv

KEY_TO_MOVEMENT = {
    pygame.K_UP: 1,
    pygame.K_w: 1,
    pygame.K_DOWN: 2,
    pygame.K_s: 2,
    pygame.K_LEFT: 3,
    pygame.K_a: 3,
    pygame.K_RIGHT: 4,
    pygame.K_d: 4,
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="anchor_maze", description="Play the maze game")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for maze generation")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def draw_menu(env, surface):
    surface.fill(env.COLOR_BG)
    title = env.font_game_over.render("Maze Game", True, env.COLOR_ANCHOR)
    surface.blit(title, title.get_rect(center=(env.SCREEN_WIDTH / 2, env.SCREEN_HEIGHT / 2 - 40)))
    prompt = env.font_ui.render("Press ENTER to play, Q to quit", True, env.COLOR_TEXT)
    surface.blit(prompt, prompt.get_rect(center=(env.SCREEN_WIDTH / 2, env.SCREEN_HEIGHT / 2 + 20)))
    guide = env.font_ui.render(env.user_guide, True, env.COLOR_TEXT_DIM)
    surface.blit(guide, guide.get_rect(center=(env.SCREEN_WIDTH / 2, env.SCREEN_HEIGHT - 40)))


def draw_observation(surface, obs):
    frame = np.transpose(obs, (1, 0, 2))
    surface.blit(pygame.surfarray.make_surface(frame), (0, 0))


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    # Use "x11", "dummy" or "windows" depending on your system
    if os.environ.get("SDL_VIDEODRIVER") == "dummy":
        del os.environ["SDL_VIDEODRIVER"]

    env = GameEnv(render_mode="rgb_array")
    obs, info = env.reset(seed=args.seed)

    human_screen = pygame.display.set_mode((env.SCREEN_WIDTH, env.SCREEN_HEIGHT))
    pygame.display.set_caption("Maze Game")
    clock = pygame.time.Clock()

    print(env.game_description)
    print(env.user_guide)

    # screen is "menu", "game" or "gameover"
    screen = "menu"
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            if event.type != pygame.KEYDOWN:
                continue
            if event.key in (pygame.K_q, pygame.K_ESCAPE):
                running = False
            elif screen == "menu" and event.key in (pygame.K_RETURN, pygame.K_SPACE):
                screen = "game"
            elif screen == "gameover" and event.key in (pygame.K_RETURN, pygame.K_SPACE, pygame.K_r):
                obs, info = env.reset()
                screen = "game"
            elif screen == "game" and event.key in KEY_TO_MOVEMENT:
                obs, reward, terminated, truncated, info = env.step([KEY_TO_MOVEMENT[event.key], 0, 0])
                if reward:
                    print(f"Level cleared: +{reward} points, score {info['score']}")
                if terminated:
                    print(f"Game Over! Final Score: {info['final_score']}")
                    screen = "gameover"

        if screen == "menu":
            draw_menu(env, human_screen)
        else:
            draw_observation(human_screen, obs)
        pygame.display.flip()

        clock.tick(config.FPS)

    env.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
