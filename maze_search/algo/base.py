from abc import ABC, abstractmethod
from typing import Callable, Iterator, List, Optional
from maze_search.core.grid import Cell, Grid

# Called once per visited cell, in visit order. Return value is ignored.
Observer = Callable[[Grid, Cell], None]


class Solver(ABC):
    name = ""

    def __init__(self, grid: Grid):
        # Borrowed, never mutated.
        self.grid = grid
        self.path: Optional[List[Cell]] = None
        self.visited_count = 0
        self.expanded_count = 0

    @abstractmethod
    def run(self) -> Iterator[Cell]:
        """
        Yields each cell as the search visits it.
        When the generator is exhausted, self.path holds the start->finish
        path, or None if finish was never reached.
        """
        pass

    def solve(self, observer: Optional[Observer] = None) -> Optional[List[Cell]]:
        """Runs the search to completion, reporting every visited cell to `observer`."""
        for cell in self.run():
            if observer is not None:
                observer(self.grid, cell)
        return self.path
