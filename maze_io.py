"""Reading and writing mazes as a flat character-per-cell text file.

One line per grid column x, each line holding one character per row y:
``0`` open, ``1`` wall, ``2`` start, ``3`` end. Search results are never
written; visited and path cells are saved as open.
"""

import os

import requests

from maze_grid import MazeGrid, NODES_WIDTH, NODES_HEIGHT

MAZE_EXTENSION = ".maze"
DOWNLOAD_TIMEOUT_S = 15

OPEN_CHAR, WALL_CHAR, START_CHAR, END_CHAR = "0", "1", "2", "3"


class MazeFormatError(ValueError):
    pass


def dumps(grid):
    lines = []
    for x in range(grid.width):
        row = ""
        for y in range(grid.height):
            # markers come from start/end, since a search leaves the end FOUND
            if (x, y) == grid.start: row += START_CHAR
            elif (x, y) == grid.end: row += END_CHAR
            elif grid.is_wall((x, y)): row += WALL_CHAR
            else: row += OPEN_CHAR
        lines.append(row)
    return "\n".join(lines) + "\n"


def loads(text, width=NODES_WIDTH, height=NODES_HEIGHT):
    lines = [line.rstrip("\r\n ") for line in text.splitlines()]
    while lines and not lines[-1]: lines.pop()
    if len(lines) != width:
        raise MazeFormatError(f"Expected {width} lines, found {len(lines)}.")
    grid = MazeGrid(width, height)
    for x, line in enumerate(lines):
        if len(line) != height:
            raise MazeFormatError(f"Line {x + 1}: expected {height} characters, found {len(line)}.")
        for y, ch in enumerate(line):
            if ch == OPEN_CHAR: continue
            elif ch == WALL_CHAR: grid.place_wall((x, y))
            elif ch == START_CHAR:
                if grid.start is not None: raise MazeFormatError(f"Line {x + 1}: second start node at column {y + 1}.")
                grid.place_start((x, y))
            elif ch == END_CHAR:
                if grid.end is not None: raise MazeFormatError(f"Line {x + 1}: second end node at column {y + 1}.")
                grid.place_end((x, y))
            else:
                raise MazeFormatError(f"Line {x + 1}: unknown cell character {ch!r} at column {y + 1}.")
    return grid


def save_maze(grid, filename):
    """Write ``grid`` to ``filename``, adding the .maze extension when missing."""
    if not filename.endswith(MAZE_EXTENSION): filename += MAZE_EXTENSION
    with open(filename, 'w') as f: f.write(dumps(grid))
    return filename


def load_maze(filename, width=NODES_WIDTH, height=NODES_HEIGHT):
    with open(filename, 'r') as f: text = f.read()
    try:
        return loads(text, width, height)
    except MazeFormatError as e:
        raise MazeFormatError(f"{os.path.basename(filename)}: {e}") from None


def fetch_maze(url, timeout=DOWNLOAD_TIMEOUT_S, width=NODES_WIDTH, height=NODES_HEIGHT):
    """Download and parse a maze file. Network errors propagate as requests exceptions."""
    response = requests.get(url, timeout=timeout); response.raise_for_status()
    return loads(response.text, width, height)
