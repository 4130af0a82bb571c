from .generator import Maze, generate_maze, is_path_available
from .session import Direction, GameSession

__all__ = ["Maze", "generate_maze", "is_path_available", "Direction", "GameSession"]
