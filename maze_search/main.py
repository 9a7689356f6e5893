import argparse
import sys
import os
import logging
from typing import List, Optional

# Ensure project root is in path so we can import 'maze_search' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_search.config import Config, algo_name, grid_dimension, non_negative_int

logger = logging.getLogger("maze_search")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    defaults = Config()
    parser = argparse.ArgumentParser(description="Maze Search: random grid maze + animated breadth-first search")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--rows", "-r", type=grid_dimension, default=defaults.n_rows, help="Number of rows")
    parser.add_argument("--columns", "-c", type=grid_dimension, default=defaults.n_cols, help="Number of columns")
    parser.add_argument("--delay", "-d", type=non_negative_int, default=defaults.step_delay,
                        help="Delay between two search steps (in milliseconds)")
    parser.add_argument("--algo", "-a", type=algo_name, default=defaults.algo, help="Search algorithm (BFS)")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--headless", action="store_true", help="Search without drawing anything")
    mode.add_argument("--visual", action="store_true", help="Animate in a pygame window instead of the terminal")
    parser.add_argument("--record", action="store_true", help="Record the pygame window to mp4 (with --visual)")
    return parser


def parse_config(argv: Optional[List[str]] = None) -> Config:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.record and not args.visual:
        parser.error("--record needs --visual")
    return Config(
        n_rows=args.rows,
        n_cols=args.columns,
        algo=args.algo,
        step_delay=args.delay,
        seed=args.seed,
        visual=args.visual,
        headless=args.headless,
        record=args.record,
        verbose=args.verbose,
    )


def format_path(path) -> str:
    return " -> ".join(f"({r}, {c})" for r, c in path)


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_config(argv)
    setup_logging(config.verbose)

    from maze_search.core.grid import Grid
    from maze_search.algo.solvers import get_solver

    logger.info(f"Generating {config.n_rows}x{config.n_cols} maze (seed={config.seed})...")
    try:
        grid = Grid(config.n_rows, config.n_cols, seed=config.seed)
    except ValueError as e:
        logger.error(f"Cannot build maze: {e}")
        return 1
    for line in grid.to_layout():
        logger.debug(line)

    solver = get_solver(config.algo, grid)
    logger.info(f"Solving with {solver.name} from {tuple(grid.start)} to {tuple(grid.finish)}...")

    if config.headless:
        path = solver.solve()
    elif config.visual:
        from maze_search.viz.renderer import Renderer
        renderer = Renderer(grid, solver, step_delay=config.step_delay, record=config.record)
        renderer.init_window()
        renderer.run_loop()
        if not renderer.solve_finished:
            logger.info("Window closed before the search finished.")
            return 0
        path = solver.path
    else:
        from maze_search.viz.terminal import TerminalRenderer
        with TerminalRenderer(grid, delay_ms=config.step_delay) as view:
            path = solver.solve(view.observe)
            view.show_path(path)

    logger.info(f"Visited {solver.visited_count} cells, expanded {solver.expanded_count}")
    if path:
        print(f"Found path ({len(path) - 1} moves): {format_path(path)}")
    else:
        print("No path found")
    return 0


if __name__ == "__main__":
    sys.exit(main())
