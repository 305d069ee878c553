import random
from collections import deque

import numpy as np

# --- Grid Dimensions ---
NODES_WIDTH = 47
NODES_HEIGHT = 25

# --- Node States ---
UNVISITED, WALL, START, END, VISITING, VISITED, PATH, FOUND = range(8)
SEARCH_STATES = (VISITING, VISITED, PATH, FOUND)
STATE_NAMES = {
    UNVISITED: "unvisited", WALL: "wall", START: "start", END: "end",
    VISITING: "visiting", VISITED: "visited", PATH: "path", FOUND: "found",
}

# --- Mouse Buttons (Tk numbering) ---
BUTTON_WALL, BUTTON_START, BUTTON_END = 1, 2, 3

# --- Directions: left, down, right, up ---
DX4 = [-1, 0, 1, 0]; DY4 = [0, 1, 0, -1]


class MazeNotReady(Exception):
    """Raised when a search is requested before both start and end are placed."""


class MazeGrid:
    def __init__(self, width=NODES_WIDTH, height=NODES_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        self.width = width
        self.height = height
        self.cells = np.full((width, height), UNVISITED, dtype=np.int8)
        self.start = None
        self.end = None

    def __repr__(self):
        return f"MazeGrid({self.width}x{self.height}, start={self.start}, end={self.end})"

    def copy(self):
        other = MazeGrid(self.width, self.height)
        other.cells = self.cells.copy()
        other.start, other.end = self.start, self.end
        return other

    # --- Cell Access ---
    def in_bounds(self, cell):
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def state(self, cell):
        x, y = cell
        return int(self.cells[x, y])

    def set_state(self, cell, state):
        x, y = cell
        self.cells[x, y] = state

    def is_wall(self, cell): return self.state(cell) == WALL
    def is_start(self, cell): return cell == self.start
    def is_end(self, cell): return cell == self.end
    def is_searched(self, cell): return self.state(cell) in (VISITING, VISITED)

    def has_search_results(self):
        return bool(np.isin(self.cells, SEARCH_STATES).any())

    def is_ready(self):
        return self.start is not None and self.end is not None

    def cells_in_state(self, state):
        xs, ys = np.nonzero(self.cells == state)
        return [(int(x), int(y)) for x, y in zip(xs, ys)]

    def neighbours(self, cell):
        x, y = cell; result = []
        for d in range(4):
            nxt = (x + DX4[d], y + DY4[d])
            if self.in_bounds(nxt) and not self.is_wall(nxt):
                result.append(nxt)
        return result

    # --- Editing ---
    def _forget_marker(self, cell):
        if cell == self.start: self.start = None
        if cell == self.end: self.end = None

    def clear_cell(self, cell):
        self._forget_marker(cell)
        self.set_state(cell, UNVISITED)

    def place_wall(self, cell):
        self._forget_marker(cell)
        self.set_state(cell, WALL)

    def place_start(self, cell):
        if self.start is not None and self.start != cell:
            self.set_state(self.start, UNVISITED)
        self._forget_marker(cell)
        self.set_state(cell, START)
        self.start = cell

    def place_end(self, cell):
        if self.end is not None and self.end != cell:
            self.set_state(self.end, UNVISITED)
        self._forget_marker(cell)
        self.set_state(cell, END)
        self.end = cell

    def apply_click(self, cell, button):
        """Left paints a wall, middle places the start, right places the end.

        Clicking an existing wall always clears it. Returns the new state.
        """
        if not self.in_bounds(cell):
            raise IndexError(f"cell {cell} outside {self.width}x{self.height} grid")
        if self.is_wall(cell): self.clear_cell(cell)
        elif button == BUTTON_WALL: self.place_wall(cell)
        elif button == BUTTON_START: self.place_start(cell)
        elif button == BUTTON_END: self.place_end(cell)
        else: self.clear_cell(cell)
        return self.state(cell)

    def clear_search_results(self):
        self.cells[np.isin(self.cells, SEARCH_STATES)] = UNVISITED
        if self.start is not None: self.set_state(self.start, START)
        if self.end is not None: self.set_state(self.end, END)

    def reset(self):
        self.cells.fill(UNVISITED)
        self.start = None
        self.end = None

    # --- Generation ---
    def generate_maze(self, rng=None):
        """Carve a perfect maze with an iterative recursive backtracker.

        Passages live on even (x, y); the odd cells between them are walls
        until knocked out. Start goes top-left, end bottom-right.
        """
        rng = rng or random.Random()
        self.reset()
        self.cells.fill(WALL)
        first = (0, 0)
        self.set_state(first, UNVISITED)
        visited = {first}; stack = deque([first])
        while stack:
            x, y = stack[-1]
            options = []
            for d in range(4):
                nx, ny = x + 2 * DX4[d], y + 2 * DY4[d]
                if self.in_bounds((nx, ny)) and (nx, ny) not in visited:
                    options.append((nx, ny, d))
            if options:
                nx, ny, d = rng.choice(options)
                self.set_state((x + DX4[d], y + DY4[d]), UNVISITED)
                self.set_state((nx, ny), UNVISITED)
                visited.add((nx, ny)); stack.append((nx, ny))
            else:
                stack.pop()
        last_x = self.width - 1 if (self.width - 1) % 2 == 0 else self.width - 2
        last_y = self.height - 1 if (self.height - 1) % 2 == 0 else self.height - 2
        self.place_start(first)
        if (last_x, last_y) != first:
            self.place_end((last_x, last_y))
        return self
