import os
import sys

import pytest

# Ensure project root (where maze_grid.py lives) is on sys.path
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from maze_grid import MazeGrid


def grid_from_picture(*rows):
    """Build a grid from rows of text, one row per y: '#' wall, 'S' start, 'E' end."""
    grid = MazeGrid(len(rows[0]), len(rows))
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch == '#': grid.place_wall((x, y))
            elif ch == 'S': grid.place_start((x, y))
            elif ch == 'E': grid.place_end((x, y))
    return grid


def is_walk(grid, path):
    """True if consecutive cells are 4-adjacent and none is a wall."""
    for (x0, y0), (x1, y1) in zip(path, path[1:]):
        if abs(x0 - x1) + abs(y0 - y1) != 1: return False
    return not any(grid.is_wall(cell) for cell in path)


@pytest.fixture
def open_grid():
    return grid_from_picture(
        "S......",
        ".......",
        ".......",
        ".......",
        "......E",
    )


@pytest.fixture
def walled_grid():
    return grid_from_picture(
        "S..#...",
        ".#.#.#.",
        ".#...#.",
        ".####..",
        "......E",
    )


@pytest.fixture
def blocked_grid():
    return grid_from_picture(
        "..#..",
        "S.#.E",
        "..#..",
    )
