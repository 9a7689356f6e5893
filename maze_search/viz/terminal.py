import time
from typing import List, Optional, Set

from rich.console import Console
from rich.live import Live
from rich.text import Text

from maze_search.core.grid import Cell, Grid


class TerminalRenderer:
    """
    Animates a search in the terminal.

    Use as a context manager and pass `observe` to Solver.solve(). Each call
    redraws the frame in place and then sleeps for `delay_ms`, which is what
    paces the animation (the solver waits for the observer to return).
    """
    GLYPH_BLOCKED = '█'
    GLYPH_FREE = ' '
    GLYPH_VISITED = '·'
    GLYPH_CURRENT = '@'
    GLYPH_PATH = '*'
    GLYPH_START = 'S'
    GLYPH_FINISH = 'F'

    STYLE_BLOCKED = "grey50"
    STYLE_VISITED = "dim cyan"
    STYLE_CURRENT = "bold yellow"
    STYLE_PATH = "bold magenta"
    STYLE_START = "bold green"
    STYLE_FINISH = "bold red"

    def __init__(self, grid: Grid, delay_ms: int = 80, console: Console = None):
        self.grid = grid
        self.delay = delay_ms / 1000.0
        self.console = console or Console()

        self.visited: Set[Cell] = set()
        self.current: Optional[Cell] = None
        self.path: Set[Cell] = set()
        self.live: Optional[Live] = None

    def __enter__(self):
        self.live = Live(self.render(), console=self.console, auto_refresh=False)
        self.live.start(refresh=True)
        return self

    def __exit__(self, exc_type, exc, tb):
        self.live.stop()
        self.live = None

    def observe(self, grid: Grid, cell: Cell):
        self.visited.add(cell)
        self.current = cell
        self.refresh()
        if self.delay > 0:
            time.sleep(self.delay)

    def show_path(self, path: Optional[List[Cell]]):
        self.current = None
        if path:
            self.path = set(path)
        self.refresh()

    def refresh(self):
        if self.live is not None:
            self.live.update(self.render(), refresh=True)

    def render(self) -> Text:
        grid = self.grid
        text = Text()
        for r in range(grid.n_rows):
            for c in range(grid.n_cols):
                cell = Cell(r, c)
                # Start/finish markers win over everything else
                if cell == grid.start:
                    text.append(self.GLYPH_START, style=self.STYLE_START)
                elif cell == grid.finish:
                    text.append(self.GLYPH_FINISH, style=self.STYLE_FINISH)
                elif not grid.is_free(cell):
                    text.append(self.GLYPH_BLOCKED, style=self.STYLE_BLOCKED)
                elif cell in self.path:
                    text.append(self.GLYPH_PATH, style=self.STYLE_PATH)
                elif cell == self.current:
                    text.append(self.GLYPH_CURRENT, style=self.STYLE_CURRENT)
                elif cell in self.visited:
                    text.append(self.GLYPH_VISITED, style=self.STYLE_VISITED)
                else:
                    text.append(self.GLYPH_FREE)
            if r < grid.n_rows - 1:
                text.append('\n')
        return text
