"""Depth-first, breadth-first and A* search over a MazeGrid.

Each search is a step generator. Every ``next()`` changes the visual state of
one or more nodes and yields the tuple of cells that changed, so a caller can
redraw just those cells and wait between frames. When the generator finishes,
its return value (``StopIteration.value``) is a ``SearchResult``.

    steps = search_steps(grid, "bfs")
    for changed in steps: redraw(changed)

``run_search`` drives the same generators to completion without any delay.
"""

import heapq
import math
import time
from collections import deque
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from maze_grid import MazeNotReady, VISITING, VISITED, PATH, FOUND

Cell = Tuple[int, int]


@dataclass
class SearchResult:
    algorithm: str
    found: bool
    path: List[Cell] = field(default_factory=list)
    expanded: int = 0
    runtime_ms: float = 0.0

    @property
    def path_length(self):
        return max(0, len(self.path) - 1)

    def summary(self):
        if not self.found:
            return f"{self.algorithm}: no path ({self.expanded} expanded, {self.runtime_ms:.0f} ms)"
        return f"{self.algorithm}: path {self.path_length} steps ({self.expanded} expanded, {self.runtime_ms:.0f} ms)"


# --- Heuristics ---
def euclidean(a, b):
    return math.hypot(a[0] - b[0], a[1] - b[1])

def manhattan(a, b):
    return abs(a[0] - b[0]) + abs(a[1] - b[1])

HEURISTICS = {"euclidean": euclidean, "manhattan": manhattan}


class _Trail:
    """Keeps at most one node VISITING; the previous one settles to VISITED.

    Used as a context manager so a search closed part way through does not
    leave a node stuck VISITING.
    """
    def __init__(self, grid):
        self.grid = grid
        self.current = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.settle()
        return False

    def visit(self, cell):
        changed = self.settle()
        # start keeps its marker while it is expanded
        if cell != self.grid.start:
            self.grid.set_state(cell, VISITING)
            self.current = cell
            changed.append(cell)
        return tuple(changed)

    def settle(self):
        if self.current is None: return []
        cell, self.current = self.current, None
        self.grid.set_state(cell, VISITED)
        return [cell]

    def finish(self, found_cell=None):
        changed = self.settle()
        if found_cell is not None:
            self.grid.set_state(found_cell, FOUND); changed.append(found_cell)
        return tuple(changed)


# --- Strategies ---
# Each returns (found, prev, expanded) when exhausted.

def dfs_steps(grid):
    start, end = grid.start, grid.end
    stack = [start]; prev = {}; visited = set(); expanded = 0
    with _Trail(grid) as trail:
        while stack:
            cur = stack.pop()
            if cur in visited: continue
            visited.add(cur)
            if cur == end:
                yield trail.finish(cur)
                return True, prev, expanded
            frame = trail.visit(cur)
            if frame: yield frame
            expanded += 1
            for adjacent in grid.neighbours(cur):
                if adjacent not in visited:
                    stack.append(adjacent)
                    prev[adjacent] = cur
        frame = trail.finish()
        if frame: yield frame
    return False, prev, expanded


def bfs_steps(grid):
    start, end = grid.start, grid.end
    queue = deque([start]); prev = {}; discovered = {start}; expanded = 0
    with _Trail(grid) as trail:
        while queue:
            cur = queue.popleft()
            if cur == end:
                yield trail.finish(cur)
                return True, prev, expanded
            frame = trail.visit(cur)
            if frame: yield frame
            expanded += 1
            for adjacent in grid.neighbours(cur):
                # first discovery fixes the predecessor, which keeps the path shortest
                if adjacent not in discovered:
                    discovered.add(adjacent)
                    prev[adjacent] = cur
                    queue.append(adjacent)
        frame = trail.finish()
        if frame: yield frame
    return False, prev, expanded


def astar_steps(grid, heuristic=euclidean):
    start, end = grid.start, grid.end
    g_cost = np.full((grid.width, grid.height), float('inf'))
    g_cost[start] = 0
    counter = 0
    open_heap = [(heuristic(start, end), counter, start)]
    prev = {}; closed = set(); expanded = 0
    with _Trail(grid) as trail:
        while open_heap:
            _, _, cur = heapq.heappop(open_heap)
            if cur in closed: continue
            if cur == end:
                yield trail.finish(cur)
                return True, prev, expanded
            closed.add(cur)
            frame = trail.visit(cur)
            if frame: yield frame
            expanded += 1
            for adjacent in grid.neighbours(cur):
                if adjacent in closed: continue
                tentative = g_cost[cur] + 1
                if tentative < g_cost[adjacent]:
                    g_cost[adjacent] = tentative
                    prev[adjacent] = cur
                    counter += 1
                    heapq.heappush(open_heap, (tentative + heuristic(adjacent, end), counter, adjacent))
        frame = trail.finish()
        if frame: yield frame
    return False, prev, expanded


ALGORITHMS = {
    "dfs": ("DFS", dfs_steps),
    "bfs": ("BFS", bfs_steps),
    "astar": ("A*", astar_steps),
}


# --- Path Reconstruction ---
def reconstruct_path(prev, start, end):
    """Walk the predecessor map back from end to start. Returns start..end, or []."""
    if start == end: return [start]
    path = [end]; cur = end
    while cur != start:
        cur = prev.get(cur)
        if cur is None or len(path) > len(prev):
            return []
        path.append(cur)
    path.reverse()
    return path


def path_steps(grid, path):
    """Mark interior path cells PATH, from the end back toward the start."""
    for cell in reversed(path[1:-1]):
        grid.set_state(cell, PATH)
        yield (cell,)


# --- Drivers ---
def _timed(strategy):
    """Run a strategy, counting only the time spent inside it."""
    elapsed = 0.0
    try:
        while True:
            t0 = time.perf_counter()
            try:
                frame = next(strategy)
            except StopIteration as stop:
                elapsed += time.perf_counter() - t0
                return stop.value, elapsed * 1000.0
            elapsed += time.perf_counter() - t0
            yield frame
    finally:
        # closing the outer generator must reach the strategy too
        strategy.close()


def _search_and_highlight(grid, label, strategy):
    (found, prev, expanded), runtime_ms = yield from _timed(strategy)
    path = reconstruct_path(prev, grid.start, grid.end) if found else []
    result = SearchResult(label, found and bool(path), path, expanded, runtime_ms)
    if result.found:
        print(f"{label} Runtime: {runtime_ms:.0f} ms")
        yield from path_steps(grid, path)
    else:
        print(f"{label}: end not reachable ({expanded} nodes expanded)")
    return result


def search_steps(grid, algorithm, heuristic=None):
    """Clear old results and return the frame generator for ``algorithm``."""
    if algorithm not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{algorithm}'. Choose from: {', '.join(ALGORITHMS)}")
    if heuristic is not None and heuristic not in HEURISTICS:
        raise ValueError(f"Unknown heuristic '{heuristic}'. Choose from: {', '.join(HEURISTICS)}")
    if not grid.is_ready():
        raise MazeNotReady("Place both a start and an end node before searching.")
    grid.clear_search_results()
    label, strategy = ALGORITHMS[algorithm]
    if algorithm == "astar" and heuristic is not None:
        steps = strategy(grid, HEURISTICS[heuristic])
    else:
        steps = strategy(grid)
    return _search_and_highlight(grid, label, steps)


def run_search(grid, algorithm, heuristic=None):
    steps = search_steps(grid, algorithm, heuristic)
    while True:
        try:
            next(steps)
        except StopIteration as stop:
            return stop.value
