import logging
import math
import pygame
from maze_search.core.grid import Cell, Grid
from maze_search.algo.base import Solver

logger = logging.getLogger(__name__)


class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_BLOCKED = (200, 200, 200)
    COLOR_VISITED = (60, 100, 160)  # Blue tint
    COLOR_CURRENT = (255, 255, 255)
    COLOR_SOLUTION = (255, 215, 0)  # Gold
    COLOR_START = (40, 200, 80)
    COLOR_FINISH = (220, 50, 50)

    def __init__(self, grid: Grid, solver: Solver, step_delay=80, width=1280, height=720, record=False):
        self.grid = grid
        self.solver = solver
        self.step_delay = step_delay  # ms between two solver steps
        self.screen_width = width
        self.screen_height = height

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        from maze_search.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record, label=f"{grid.n_rows}x{grid.n_cols}")

        # Search progress as seen through the solver's step generator
        self.visited = set()
        self.current = None
        self.solve_finished = False

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = min(available_w / self.grid.n_cols, available_h / self.grid.n_rows)

        # Center
        self.offset_x = (self.screen_width - self.grid.n_cols * self.cell_size) / 2
        self.offset_y = (self.screen_height - self.grid.n_rows * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze Search [{self.solver.name}] - {self.grid.n_rows}x{self.grid.n_cols}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

        self.fit_to_screen()

    def cell_to_screen(self, cell: Cell):
        sx = cell.col * self.cell_size + self.offset_x
        sy = cell.row * self.cell_size + self.offset_y
        return sx, sy

    def screen_to_cell(self, sx, sy) -> Cell:
        col = (sx - self.offset_x) / self.cell_size
        row = (sy - self.offset_y) / self.cell_size
        return Cell(math.floor(row), math.floor(col))

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(1.0, min(200.0, self.cell_size))

                # Keep the cell under the mouse in place
                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:  # Left or Right drag
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def cell_color(self, cell: Cell):
        if cell == self.grid.start:
            return self.COLOR_START
        if cell == self.grid.finish:
            return self.COLOR_FINISH
        if not self.grid.is_free(cell):
            return self.COLOR_BLOCKED
        if cell == self.current:
            return self.COLOR_CURRENT
        if cell in self.visited:
            return self.COLOR_VISITED
        return None

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        size = int(self.cell_size) + 1

        for r in range(self.grid.n_rows):
            for c in range(self.grid.n_cols):
                cell = Cell(r, c)
                color = self.cell_color(cell)
                if color is None:
                    continue
                sx, sy = self.cell_to_screen(cell)
                pygame.draw.rect(self.surface, color, (int(sx), int(sy), size, size))

        # Path on top, endpoints stay visible
        if self.solver.path:
            inset = max(1, size // 4)
            for cell in self.solver.path[1:-1]:
                sx, sy = self.cell_to_screen(cell)
                pygame.draw.rect(self.surface, self.COLOR_SOLUTION,
                                 (int(sx) + inset, int(sy) + inset, size - 2 * inset, size - 2 * inset))

    def describe_cell(self, cell: Cell) -> str:
        """HUD line for the cell under the mouse; empty when off the grid."""
        if not self.grid.inside(cell):
            return ""
        if cell == self.grid.start:
            kind = "start"
        elif cell == self.grid.finish:
            kind = "finish"
        elif not self.grid.is_free(cell):
            kind = "blocked"
        elif cell in self.visited:
            kind = "visited"
        else:
            kind = "free"
        return f"Cell: ({cell.row}, {cell.col}) {kind}"

    def draw_hud(self):
        if self.solve_finished:
            status = f"Path: {len(self.solver.path) - 1} moves" if self.solver.path else "No path"
        else:
            status = "Searching"
        hovered = self.screen_to_cell(*pygame.mouse.get_pos())
        info = [
            f"FPS: {int(self.clock.get_fps())}",
            f"Size: {self.grid.n_rows}x{self.grid.n_cols}",
            f"Visited: {len(self.visited)}",
            f"Status: {status}",
            self.describe_cell(hovered),
            "REC" if self.recorder.active else "",
        ]
        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def observe(self, grid: Grid, cell: Cell):
        self.visited.add(cell)
        self.current = cell

    def run_loop(self):
        solver_iter = self.solver.run()
        last_step = pygame.time.get_ticks() - self.step_delay

        while self.running:
            self.handle_input()

            # One solver step per step_delay
            now = pygame.time.get_ticks()
            if not self.solve_finished and now - last_step >= self.step_delay:
                last_step = now
                try:
                    self.observe(self.grid, next(solver_iter))
                except StopIteration:
                    self.solve_finished = True
                    self.current = None
                    logger.info(f"Search finished, visited {len(self.visited)} cells")

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(60)

        self.recorder.stop()
        pygame.quit()
