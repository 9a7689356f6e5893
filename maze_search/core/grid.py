import logging
import random
from array import array
from enum import Enum
from typing import Iterator, List, NamedTuple, Sequence, Tuple

logger = logging.getLogger(__name__)


class Direction(Enum):
    # (d_row, d_col); UP grows the row index
    UP = (1, 0)
    DOWN = (-1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def d_row(self) -> int:
        return self.value[0]

    @property
    def d_col(self) -> int:
        return self.value[1]

    @property
    def reverse(self) -> "Direction":
        return _OPPOSITE[self]

    @staticmethod
    def ordered() -> Tuple["Direction", ...]:
        """Expansion order. Decides which of several equal-length paths wins."""
        return _ORDER


_ORDER = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)
_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Cell(NamedTuple):
    row: int
    col: int

    def move(self, direction: Direction) -> "Cell":
        return Cell(self.row + direction.d_row, self.col + direction.d_col)


class Grid:
    BLOCKED = 0
    FREE = 1

    FREE_PROBABILITY = 2 / 3

    # Layout glyphs for from_layout / to_layout
    GLYPH_BLOCKED = '#'
    GLYPH_FREE = '.'
    GLYPH_START = 'S'
    GLYPH_FINISH = 'F'
    GLYPH_START_FINISH = '*'

    __slots__ = ('n_rows', 'n_cols', 'cells', 'start', 'finish')

    def __init__(self, n_rows: int, n_cols: int, seed: int = None, rng: random.Random = None):
        """
        Generates a random maze in a single pass.

        Border cells are always blocked, interior cells are free with
        probability FREE_PROBABILITY. Start and finish are then drawn
        independently (with replacement) from the free cells, so they may be
        the same cell and are not guaranteed to be connected.

        All randomness comes from `rng`, or from random.Random(seed) when no
        rng is given.
        """
        if n_rows < 3 or n_cols < 3:
            raise ValueError(
                f"Grid {n_rows}x{n_cols} has no interior cell; need at least 3 rows and 3 columns"
            )
        if rng is None:
            rng = random.Random(seed)

        self.n_rows = n_rows
        self.n_cols = n_cols
        # 'B' (unsigned char) -> 1 byte per cell, row-major
        self.cells = array('B', [self.BLOCKED] * (n_rows * n_cols))

        free_cells: List[Cell] = []
        for r in range(1, n_rows - 1):
            for c in range(1, n_cols - 1):
                if rng.random() < self.FREE_PROBABILITY:
                    self.cells[r * n_cols + c] = self.FREE
                    free_cells.append(Cell(r, c))

        if not free_cells:
            raise ValueError(f"Grid {n_rows}x{n_cols} came out with no free cell to place start/finish")

        self.start = rng.choice(free_cells)
        self.finish = rng.choice(free_cells)

        logger.debug(
            f"Generated {n_rows}x{n_cols} grid: {len(free_cells)} free cells, "
            f"start={tuple(self.start)} finish={tuple(self.finish)}"
        )

    @classmethod
    def from_layout(cls, lines: Sequence[str]) -> "Grid":
        """
        Builds a fixed grid from text rows.

            #####
            #S..#
            #.#F#
            #####

        '#' is blocked, '.' free, 'S' start, 'F' finish and '*' a single cell
        that is both. Borders are taken as written.
        """
        if not lines or not lines[0]:
            raise ValueError("Layout is empty")
        n_cols = len(lines[0])
        for r, line in enumerate(lines):
            if len(line) != n_cols:
                raise ValueError(f"Layout row {r} has {len(line)} columns, expected {n_cols}")

        grid = cls.__new__(cls)
        grid.n_rows = len(lines)
        grid.n_cols = n_cols
        grid.cells = array('B', [cls.BLOCKED] * (grid.n_rows * n_cols))

        starts, finishes = [], []
        for r, line in enumerate(lines):
            for c, ch in enumerate(line):
                if ch == cls.GLYPH_BLOCKED:
                    continue
                if ch not in (cls.GLYPH_FREE, cls.GLYPH_START, cls.GLYPH_FINISH, cls.GLYPH_START_FINISH):
                    raise ValueError(f"Unknown layout glyph {ch!r} at ({r}, {c})")
                grid.cells[r * n_cols + c] = cls.FREE
                if ch in (cls.GLYPH_START, cls.GLYPH_START_FINISH):
                    starts.append(Cell(r, c))
                if ch in (cls.GLYPH_FINISH, cls.GLYPH_START_FINISH):
                    finishes.append(Cell(r, c))

        if len(starts) != 1 or len(finishes) != 1:
            raise ValueError(
                f"Layout needs exactly one start and one finish, got {len(starts)} and {len(finishes)}"
            )
        grid.start = starts[0]
        grid.finish = finishes[0]
        return grid

    def to_layout(self) -> List[str]:
        lines = []
        for r in range(self.n_rows):
            row = []
            for c in range(self.n_cols):
                cell = Cell(r, c)
                if cell == self.start and cell == self.finish:
                    row.append(self.GLYPH_START_FINISH)
                elif cell == self.start:
                    row.append(self.GLYPH_START)
                elif cell == self.finish:
                    row.append(self.GLYPH_FINISH)
                elif self.cells[r * self.n_cols + c] == self.FREE:
                    row.append(self.GLYPH_FREE)
                else:
                    row.append(self.GLYPH_BLOCKED)
            lines.append(''.join(row))
        return lines

    def inside(self, cell: Cell) -> bool:
        return 0 <= cell[0] < self.n_rows and 0 <= cell[1] < self.n_cols

    def is_free(self, cell: Cell) -> bool:
        if not self.inside(cell):
            return False
        return self.cells[cell[0] * self.n_cols + cell[1]] == self.FREE

    def free_cells(self) -> Iterator[Cell]:
        for idx, value in enumerate(self.cells):
            if value == self.FREE:
                yield Cell(idx // self.n_cols, idx % self.n_cols)

    def open_neighbors(self, cell: Cell) -> Iterator[Tuple[Cell, Direction]]:
        """
        Yields (neighbor, direction_to_neighbor) for every free neighbor,
        in Direction.ordered() order.
        """
        for direction in Direction.ordered():
            neighbor = cell.move(direction)
            if self.is_free(neighbor):
                yield neighbor, direction

    @property
    def free_count(self) -> int:
        return sum(self.cells)
