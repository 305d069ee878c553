import tkinter as tk
from tkinter import Canvas, Frame, Label, Menu, messagebox, filedialog, simpledialog
import os
import random
import time

import requests

from maze_grid import (MazeGrid, MazeNotReady, NODES_WIDTH, NODES_HEIGHT,
                       UNVISITED, WALL, START, END, VISITING, VISITED, PATH, FOUND, STATE_NAMES)
from pathfinding import search_steps, ALGORITHMS
from animator import SearchAnimator, parse_delay, DEFAULT_SEARCH_DELAY_MS
import maze_io

# --- Configuration Constants ---
CELL_SIZE_PX = 35
MARGIN = 15
CANVAS_WIDTH = 2 * MARGIN + NODES_WIDTH * CELL_SIZE_PX
CANVAS_HEIGHT = 2 * MARGIN + NODES_HEIGHT * CELL_SIZE_PX
APP_TITLE = "Maze Solver"

# --- THEMES ---
THEMES = {
    'light': {
        'background': "white", 'grid_line': "black", 'text': "black",
        UNVISITED: "light gray", WALL: "black", START: "green", END: "red",
        VISITING: "orange", VISITED: "blue", PATH: "dark orange", FOUND: "magenta",
    },
    'dark': {
        'background': "#2E2E2E", 'grid_line': "#444444", 'text': "#FFFFFF",
        UNVISITED: "#5C5C5C", WALL: "#111111", START: "#2ECC71", END: "#FF5555",
        VISITING: "#F39C12", VISITED: "#58a6ff", PATH: "#FFD54F", FOUND: "#9B59B6",
    }
}
KEY_STATES = [WALL, START, END, VISITING, VISITED, PATH, FOUND]


class MazeEditor:
    def __init__(self, master):
        self.master = master
        self.current_theme_name = 'light'
        self.grid = MazeGrid(NODES_WIDTH, NODES_HEIGHT)

        self.current_maze_file = None
        self.maze_modified = False

        self.search_delay_ms = DEFAULT_SEARCH_DELAY_MS
        self.animator = None
        self.last_result = None
        self.cell_items = []

        self._setup_gui()
        self._create_color_key()
        self.draw_grid()
        self._update_window_title()

        self.canvas.bind("<Button-1>", lambda e: self.on_canvas_click(e, 1))
        self.canvas.bind("<Button-2>", lambda e: self.on_canvas_click(e, 2))
        self.canvas.bind("<Button-3>", lambda e: self.on_canvas_click(e, 3))
        self.master.bind("<space>", lambda e: self.toggle_pause())
        self.master.bind("<Escape>", lambda e: self.stop_search())
        self.master.protocol("WM_DELETE_WINDOW", self.on_close_window)
        self.update_status("Left click: wall. Middle click: start. Right click: end.")

    @property
    def theme(self):
        return THEMES[self.current_theme_name]

    @property
    def search_active(self):
        return self.animator is not None and (self.animator.running or self.animator.paused)

    def _setup_gui(self):
        self.master.rowconfigure(0, weight=1) # Canvas row
        self.master.rowconfigure(1, weight=0) # Key row
        self.master.rowconfigure(2, weight=0) # Status row
        self.master.columnconfigure(0, weight=1)

        # --- Menu Bar ---
        menubar = Menu(self.master)
        file_menu = Menu(menubar, tearoff=0)
        file_menu.add_command(label="Save Maze", command=self.save_maze_file)
        file_menu.add_command(label="Open Maze", command=self.open_maze_file)
        file_menu.add_command(label="Open Maze from URL...", command=self.open_maze_url)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.on_close_window)
        menubar.add_cascade(label="File", menu=file_menu)

        board_menu = Menu(menubar, tearoff=0)
        board_menu.add_command(label="New Board", command=self.new_board)
        board_menu.add_command(label="Generate Maze", command=self.generate_maze)
        board_menu.add_command(label="Clear Search Results", command=self.clear_search_results)
        board_menu.add_separator()
        board_menu.add_command(label="Toggle Theme", command=self.toggle_theme)
        menubar.add_cascade(label="Board", menu=board_menu)

        algorithms_menu = Menu(menubar, tearoff=0)
        algorithms_menu.add_command(label="Depth-First Search", command=lambda: self.start_search("dfs"))
        algorithms_menu.add_command(label="Breadth-First Search", command=lambda: self.start_search("bfs"))
        algorithms_menu.add_command(label="A-star Search", command=lambda: self.start_search("astar"))
        algorithms_menu.add_separator()
        algorithms_menu.add_command(label="Exploring time per Node", command=self.ask_search_delay)
        algorithms_menu.add_command(label="Pause/Resume", command=self.toggle_pause, accelerator="Space")
        algorithms_menu.add_command(label="Step", command=self.step_search)
        algorithms_menu.add_command(label="Stop", command=self.stop_search, accelerator="Esc")
        menubar.add_cascade(label="Algorithms", menu=algorithms_menu)
        self.master.config(menu=menubar)

        # --- Maze Canvas ---
        self.canvas = Canvas(self.master, width=CANVAS_WIDTH, height=CANVAS_HEIGHT,
                             bg=self.theme['background'], highlightthickness=0)
        self.canvas.grid(row=0, column=0, sticky="nsew")

        # --- Bottom GUI elements ---
        self.key_frame = Frame(self.master, bd=1, relief=tk.GROOVE)
        self.key_frame.grid(row=1, column=0, sticky="ew", pady=(0, 5), padx=10)
        self.status_label = Label(self.master, text="Initializing...", bd=1, relief=tk.SUNKEN, anchor=tk.W)
        self.status_label.grid(row=2, column=0, sticky="ew", ipady=2)

    def _create_color_key(self):
        for widget in self.key_frame.winfo_children(): widget.destroy()
        for col, state in enumerate(KEY_STATES):
            frame = Frame(self.key_frame); frame.grid(row=0, column=col, sticky='w', padx=3)
            Label(frame, text="", width=2, relief=tk.RAISED, bd=1, bg=self.theme[state]).pack(side=tk.LEFT, padx=(0, 2))
            Label(frame, text=STATE_NAMES[state].capitalize(), anchor='w', font=("TkDefaultFont", 8)).pack(side=tk.LEFT)

    def _update_window_title(self):
        title = f"{APP_TITLE} ({self.grid.width}x{self.grid.height})"
        if self.current_maze_file: title = f"{title} - {os.path.basename(self.current_maze_file)}"
        if self.maze_modified: title += " *"
        self.master.title(title)

    def update_status(self, message):
        self.status_label.config(text=message)

    # --- Drawing ---
    def cell_to_pixel(self, x, y):
        return MARGIN + x * CELL_SIZE_PX, MARGIN + y * CELL_SIZE_PX

    def pixel_to_cell(self, px, py):
        x = (self.canvas.canvasx(px) - MARGIN) // CELL_SIZE_PX
        y = (self.canvas.canvasy(py) - MARGIN) // CELL_SIZE_PX
        cell = (int(x), int(y))
        return cell if self.grid.in_bounds(cell) else None

    def draw_grid(self):
        self.canvas.delete("all")
        self.canvas.config(bg=self.theme['background'])
        self.cell_items = [[None] * self.grid.height for _ in range(self.grid.width)]
        for x in range(self.grid.width):
            for y in range(self.grid.height):
                x0, y0 = self.cell_to_pixel(x, y)
                self.cell_items[x][y] = self.canvas.create_rectangle(
                    x0, y0, x0 + CELL_SIZE_PX, y0 + CELL_SIZE_PX,
                    fill=self.theme[self.grid.state((x, y))], outline=self.theme['grid_line'], tags="cell")

    def redraw_cells(self, cells):
        for x, y in cells:
            self.canvas.itemconfig(self.cell_items[x][y], fill=self.theme[self.grid.state((x, y))])

    def toggle_theme(self):
        self.current_theme_name = 'dark' if self.current_theme_name == 'light' else 'light'
        self._create_color_key()
        self.draw_grid()

    # --- Editing ---
    def _mark_modified(self):
        self.maze_modified = True
        self._update_window_title()

    def on_canvas_click(self, event, button):
        if self.search_active:
            self.update_status("Search running. Stop it (Esc) before editing."); return
        cell = self.pixel_to_cell(event.x, event.y)
        if cell is None: return
        old_start, old_end = self.grid.start, self.grid.end
        if self.grid.has_search_results():
            self.clear_search_results()
        new_state = self.grid.apply_click(cell, button)
        self.redraw_cells({c for c in (cell, old_start, old_end) if c is not None})
        self._mark_modified()
        self.update_status(f"Node {cell} set to {STATE_NAMES[new_state]}.")

    def _check_save_before_action(self, action_description="continue"):
        if not self.maze_modified: return True
        response = messagebox.askyesnocancel("Unsaved Changes", f"Maze has been modified. Save changes before {action_description}?", parent=self.master)
        if response is True: return self.save_maze_file()
        elif response is False: return True
        else: return False

    def new_board(self):
        self.stop_search()
        if not self._check_save_before_action("clearing the board"): return
        self.grid.reset(); self.last_result = None
        self.current_maze_file = None; self.maze_modified = False
        self._update_window_title(); self.draw_grid()
        self.update_status("New empty board.")

    def generate_maze(self):
        self.stop_search()
        if not self._check_save_before_action("generating new maze"): return
        self.grid.generate_maze(random.Random()); self.last_result = None
        self.current_maze_file = None; self._mark_modified(); self.draw_grid()
        self.update_status(f"Maze generated. Start {self.grid.start}, end {self.grid.end}.")

    def clear_search_results(self):
        self.stop_search(user_stopped=False)
        self.grid.clear_search_results(); self.last_result = None
        self.draw_grid()
        self.update_status("Search results cleared.")

    # --- Searching ---
    def start_search(self, algorithm):
        if self.search_active:
            self.update_status("A search is already running."); return
        try:
            steps = search_steps(self.grid, algorithm)
        except MazeNotReady as e:
            self.update_status(str(e)); print("DIDN'T LAUNCH: start or end missing"); return
        self.draw_grid()
        label = ALGORITHMS[algorithm][0]
        self.animator = SearchAnimator(self.master, steps, self.redraw_cells, self._on_search_done, self.search_delay_ms)
        self.animator.start()
        self.update_status(f"{label} running ({self.search_delay_ms} ms per node)...")

    def _on_search_done(self, result):
        self.last_result = result
        self.update_status(result.summary())

    def toggle_pause(self):
        if not self.search_active: return
        self.animator.toggle_pause()
        self.update_status("Search paused. Use Step to advance." if self.animator.paused else "Search resumed.")

    def step_search(self):
        if self.search_active and self.animator.paused: self.animator.step()

    def stop_search(self, user_stopped=True):
        if self.animator is None: return
        if not self.animator.stop(): return
        self.draw_grid() # the node being explored settles to visited
        if user_stopped:
            self.last_result = None
            self.update_status("Search stopped by user.")

    def ask_search_delay(self):
        text = simpledialog.askstring("Search Time", f"Enter a time it takes to search each node in milliseconds (default = {DEFAULT_SEARCH_DELAY_MS}ms)",
                                      initialvalue=str(self.search_delay_ms), parent=self.master)
        if text is None: return
        try:
            self.search_delay_ms = parse_delay(text)
        except ValueError as e:
            messagebox.showerror("Invalid Delay", str(e), parent=self.master); return
        if self.animator is not None: self.animator.delay_ms = self.search_delay_ms
        self.update_status(f"Exploring time per node set to {self.search_delay_ms} ms.")

    # --- Files ---
    def _load_grid(self, grid, source):
        self.stop_search(user_stopped=False)
        self.grid = grid; self.last_result = None
        self.current_maze_file = source; self.maze_modified = False
        self._update_window_title(); self.draw_grid()
        self.update_status(f"Loaded maze: {os.path.basename(source)}")

    def save_maze_file(self):
        self.clear_search_results()
        initial_filename = f"maze_{time.strftime('%Y%m%d_%H%M%S')}{maze_io.MAZE_EXTENSION}"
        if self.current_maze_file and os.path.exists(self.current_maze_file):
            initial_filename = os.path.basename(self.current_maze_file)
        filename = filedialog.asksaveasfilename(defaultextension=maze_io.MAZE_EXTENSION, initialfile=initial_filename,
                                                filetypes=[("Maze files", "*.maze"), ("All files", "*.*")], title="Save Maze As")
        if not filename: return False
        try:
            filename = maze_io.save_maze(self.grid, filename)
        except OSError as e:
            messagebox.showerror("Save Error", f"Failed save:\n{e}", parent=self.master); self.update_status("Save failed."); return False
        self.current_maze_file = filename; self.maze_modified = False; self._update_window_title()
        self.update_status(f"Maze saved to {os.path.basename(filename)}")
        return True

    def open_maze_file(self):
        self.stop_search(user_stopped=False)
        if not self._check_save_before_action("loading"): return
        filename = filedialog.askopenfilename(filetypes=[("Maze files", "*.maze"), ("Text files", "*.txt"), ("All files", "*.*")], title="Open Maze File")
        if not filename: return
        try:
            grid = maze_io.load_maze(filename)
        except FileNotFoundError: messagebox.showerror("Load Error", f"File not found:\n{filename}", parent=self.master); self.update_status("Load failed: File not found."); return
        except (ValueError, OSError) as e: messagebox.showerror("Load Error", f"Invalid maze file:\n{e}", parent=self.master); self.update_status(f"Load failed: {e}"); return
        self._load_grid(grid, filename)

    def open_maze_url(self):
        self.stop_search(user_stopped=False)
        if not self._check_save_before_action("loading from URL"): return
        url = simpledialog.askstring("Open Maze from URL", "Maze file URL:", parent=self.master)
        if not url: return
        self.update_status(f"Downloading {url}..."); self.master.update_idletasks()
        try:
            grid = maze_io.fetch_maze(url)
        except requests.exceptions.Timeout: messagebox.showerror("Error", f"Timeout downloading:\n{url}", parent=self.master); self.update_status("Download failed (timeout)."); return
        except requests.exceptions.RequestException as e: messagebox.showerror("Error", f"Network error:\n{e}", parent=self.master); self.update_status("Download failed (network)."); return
        except ValueError as e: messagebox.showerror("Error", f"Invalid maze file:\n{e}", parent=self.master); self.update_status(f"Load failed: {e}"); return
        self._load_grid(grid, url)

    def on_close_window(self):
        self.stop_search(user_stopped=False)
        if self._check_save_before_action("closing"): self.master.destroy()


def main():
    root = tk.Tk()
    root.title(APP_TITLE)
    root.resizable(False, False)
    MazeEditor(root)
    root.mainloop()


if __name__ == "__main__":
    main()
