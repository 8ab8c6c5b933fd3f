import pygame
from mazegen.core.grid import Grid


class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (200, 200, 200)
    COLOR_SOLUTION = (255, 215, 0)  # Gold

    def __init__(self, grid: Grid, width=1280, height=720):
        self.grid = grid
        self.screen_width = width
        self.screen_height = height

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = min(available_w / self.grid.cols, available_h / self.grid.rows)

        total_maze_w = self.grid.cols * self.cell_size
        total_maze_h = self.grid.rows * self.cell_size
        self.offset_x = (self.screen_width - total_maze_w) / 2
        self.offset_y = (self.screen_height - total_maze_h) / 2

    def world_to_screen(self, col, row):
        sx = col * self.cell_size + self.offset_x
        sy = row * self.cell_size + self.offset_y
        return sx, sy

    def screen_to_world(self, sx, sy):
        """Returns the (row, col) under a screen position."""
        col = (sx - self.offset_x) / self.cell_size
        row = (sy - self.offset_y) / self.cell_size
        return int(row), int(col)

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"mazegen - {self.grid.rows}x{self.grid.cols}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_f:
                self.fit_to_screen()

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(0.001, min(100.0, self.cell_size))

                # Keep the mouse over the same spot
                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def visible_range(self):
        """(start_row, end_row, start_col, end_col) of the cells on screen."""
        start_col = max(0, int(-self.offset_x / self.cell_size))
        start_row = max(0, int(-self.offset_y / self.cell_size))
        end_col = min(self.grid.cols, int((self.screen_width - self.offset_x) / self.cell_size) + 1)
        end_row = min(self.grid.rows, int((self.screen_height - self.offset_y) / self.cell_size) + 1)
        return start_row, end_row, start_col, end_col

    def draw_grid(self):
        grid = self.grid
        self.surface.fill(self.COLOR_BG)
        start_row, end_row, start_col, end_col = self.visible_range()
        size = int(self.cell_size) + 1

        # Pass 1 - path cells
        for r in range(start_row, end_row):
            for c in range(start_col, end_col):
                if grid.is_visited(r, c):
                    px, py = self.world_to_screen(c, r)
                    pygame.draw.rect(self.surface, self.COLOR_SOLUTION, (int(px), int(py), size, size))

        if self.cell_size <= 4.0:
            return

        # Pass 2 - walls, exits left open
        last_row, last_col = grid.rows - 1, grid.cols - 1
        for r in range(start_row, end_row):
            for c in range(start_col, end_col):
                px, py = self.world_to_screen(c, r)
                px, py = int(px), int(py)

                if grid.has_bottom_wall(r, c) and not (r == last_row and grid.is_exit(Grid.DOWN, c)):
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), 1)
                if grid.has_right_wall(r, c) and not (c == last_col and grid.is_exit(Grid.RIGHT, r)):
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px + size, py), (px + size, py + size), 1)
                if r == 0 and not grid.is_exit(Grid.UP, c):
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px + size, py), 1)
                if c == 0 and not grid.is_exit(Grid.LEFT, r):
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px, py + size), 1)

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        info = [
            f"FPS: {fps}",
            f"Size: {self.grid.rows}x{self.grid.cols} ({self.grid.rows * self.grid.cols:,})",
            f"Zoom: {self.cell_size:.2f}",
            "F: fit to screen",
        ]
        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        while self.running:
            self.handle_input()
            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()
            self.clock.tick(60)
        pygame.quit()
