"""Snake package exports."""

from .snake_engine import GRID_SIZE, INITIAL_SNAKE, Direction, Point, SnakeEngine

__all__ = ["Direction", "GRID_SIZE", "INITIAL_SNAKE", "Point", "SnakeEngine"]
