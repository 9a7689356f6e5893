import argparse
from dataclasses import dataclass
from typing import Optional

from maze_search.algo.solvers import SOLVERS

MIN_DIMENSION = 3


@dataclass
class Config:
    n_rows: int = 8
    n_cols: int = 15
    algo: str = "BFS"
    step_delay: int = 80  # milliseconds
    seed: Optional[int] = None
    visual: bool = False
    headless: bool = False
    record: bool = False
    verbose: bool = False


def _parse_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value} is not a number")


def grid_dimension(value: str) -> int:
    n = _parse_int(value)
    if n < MIN_DIMENSION:
        raise argparse.ArgumentTypeError(
            f"{value} is too small; a grid needs at least {MIN_DIMENSION} cells per side to have an interior"
        )
    return n


def non_negative_int(value: str) -> int:
    n = _parse_int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"{value} must not be negative")
    return n


def algo_name(value: str) -> str:
    name = value.upper()
    if name not in SOLVERS:
        raise argparse.ArgumentTypeError(
            f"{value} is not a supported algorithm (choose from {', '.join(SOLVERS)})"
        )
    return name
