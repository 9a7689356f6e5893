import logging
from collections import deque
from typing import Deque, Dict, Iterator, List, Optional, Set, Type
from maze_search.core.grid import Cell, Grid
from maze_search.algo.base import Solver

logger = logging.getLogger(__name__)


class BFS(Solver):
    name = "BFS"

    def run(self) -> Iterator[Cell]:
        start, finish = self.grid.start, self.grid.finish

        # Search state lives only for this run
        trace: Dict[Cell, Cell] = {}
        visited: Set[Cell] = {start}
        queue: Deque[Cell] = deque([start])

        self.path = None
        self.visited_count = 1
        self.expanded_count = 0

        while queue:
            current = queue.popleft()
            self.expanded_count += 1
            yield current

            if current == finish:
                break

            for neighbor, direction in self.grid.open_neighbors(current):
                if neighbor not in visited:
                    visited.add(neighbor)
                    self.visited_count += 1
                    queue.append(neighbor)
                    # Step back the way we came
                    trace[neighbor] = neighbor.move(direction.reverse)

        self.path = self.reconstruct_path(trace, start, finish)
        logger.debug(
            f"BFS done: visited={self.visited_count} expanded={self.expanded_count} "
            f"path={'none' if self.path is None else len(self.path)}"
        )

    @staticmethod
    def reconstruct_path(trace: Dict[Cell, Cell], start: Cell, finish: Cell) -> Optional[List[Cell]]:
        if finish not in trace and finish != start:
            return None

        path = []
        curr = finish
        while curr is not None:
            path.append(curr)
            curr = trace.get(curr)
        path.reverse()
        return path


SOLVERS: Dict[str, Type[Solver]] = {
    BFS.name: BFS,
}


def get_solver(name: str, grid: Grid) -> Solver:
    key = name.upper()
    if key not in SOLVERS:
        raise KeyError(f"Unknown search algorithm {name!r}; choose from {', '.join(SOLVERS)}")
    return SOLVERS[key](grid)
