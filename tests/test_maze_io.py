import pytest
import requests

import maze_io
from maze_io import dumps, loads, save_maze, load_maze, fetch_maze, MazeFormatError
from maze_grid import MazeGrid, NODES_WIDTH, NODES_HEIGHT, WALL
from pathfinding import run_search


def _sample_grid():
    grid = MazeGrid()
    grid.place_wall((3, 4)); grid.place_wall((3, 5))
    grid.place_start((0, 0)); grid.place_end((46, 24))
    return grid


def test_empty_board_layout():
    lines = dumps(MazeGrid()).splitlines()
    assert len(lines) == NODES_WIDTH
    assert all(line == "0" * NODES_HEIGHT for line in lines)


def test_one_line_per_column():
    lines = dumps(_sample_grid()).splitlines()
    assert lines[3][4] == "1" and lines[3][5] == "1"
    assert lines[0][0] == "2"
    assert lines[46][24] == "3"


def test_search_results_are_saved_as_open():
    grid = _sample_grid()
    run_search(grid, "bfs")
    text = dumps(grid)
    assert set(text) <= set("0123\n")
    assert text.count("2") == 1 and text.count("3") == 1
    assert text.count("1") == 2


def test_loads_restores_markers():
    grid = loads(dumps(_sample_grid()))
    assert grid.start == (0, 0)
    assert grid.end == (46, 24)
    assert grid.cells_in_state(WALL) == [(3, 4), (3, 5)]


def test_loads_tolerates_crlf_and_trailing_blank_lines():
    text = dumps(_sample_grid()).replace("\n", "\r\n") + "\r\n\r\n"
    assert loads(text).end == (46, 24)


def test_loads_custom_size():
    grid = loads("020\n013\n", width=2, height=3)
    assert grid.start == (0, 1)
    assert grid.end == (1, 2)
    assert grid.is_wall((1, 1))


@pytest.mark.parametrize("text, message", [
    ("000\n000\n", "Expected 3 lines"),
    ("000\n00\n000\n", "Line 2: expected 3 characters"),
    ("000\n0x0\n000\n", "unknown cell character"),
    ("200\n000\n002\n", "second start"),
    ("300\n030\n000\n", "second end"),
])
def test_loads_rejects_malformed(text, message):
    with pytest.raises(MazeFormatError, match=message):
        loads(text, width=3, height=3)


def test_format_error_is_a_value_error():
    assert issubclass(MazeFormatError, ValueError)


def test_save_adds_extension(tmp_path):
    path = save_maze(_sample_grid(), str(tmp_path / "level"))
    assert path.endswith(".maze")
    assert load_maze(path).start == (0, 0)


def test_save_keeps_existing_extension(tmp_path):
    path = save_maze(_sample_grid(), str(tmp_path / "level.maze"))
    assert path == str(tmp_path / "level.maze")


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_maze(str(tmp_path / "nope.maze"))


def test_load_error_names_the_file(tmp_path):
    bad = tmp_path / "broken.maze"
    bad.write_text("012\n")
    with pytest.raises(MazeFormatError, match="broken.maze"):
        load_maze(str(bad))


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")


def test_fetch_maze(monkeypatch):
    calls = []
    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse(dumps(_sample_grid()))
    monkeypatch.setattr(maze_io.requests, "get", fake_get)

    grid = fetch_maze("https://example.com/level.maze")
    assert grid.end == (46, 24)
    assert calls == [("https://example.com/level.maze", maze_io.DOWNLOAD_TIMEOUT_S)]


def test_fetch_maze_http_error(monkeypatch):
    monkeypatch.setattr(maze_io.requests, "get", lambda url, timeout: FakeResponse("", 404))
    with pytest.raises(requests.exceptions.HTTPError):
        fetch_maze("https://example.com/missing.maze")


def test_fetch_maze_bad_body(monkeypatch):
    monkeypatch.setattr(maze_io.requests, "get", lambda url, timeout: FakeResponse("not a maze"))
    with pytest.raises(MazeFormatError):
        fetch_maze("https://example.com/junk")


@pytest.mark.parametrize("algorithm", ["dfs", "bfs", "astar"])
def test_save_after_search_keeps_markers(tmp_path, algorithm):
    grid = MazeGrid()
    grid.place_start((0, 0)); grid.place_end((5, 5))
    run_search(grid, algorithm)
    reloaded = load_maze(save_maze(grid, str(tmp_path / "searched")))
    assert reloaded.start == (0, 0)
    assert reloaded.end == (5, 5)
    assert reloaded.is_ready()
    assert not reloaded.has_search_results()
