from typing import BinaryIO
import numpy as np
import cv2
from mazegen.core.grid import Grid


class RasterRenderer:
    # BGR, as OpenCV expects
    COLOR_BG = (255, 255, 255)
    COLOR_WALL = (0, 0, 0)
    COLOR_PATH = (255, 102, 102)

    def __init__(self, width: int = 612, height: int = 612):
        self.width = width
        self.height = height

    def cell_size(self, grid: Grid):
        h_wid = self.width // grid.cols
        v_wid = self.height // grid.rows
        if h_wid < 1 or v_wid < 1:
            raise ValueError(
                f"Output area {self.width}x{self.height} is too small for a {grid.rows}x{grid.cols} maze")
        return h_wid, v_wid

    def render(self, grid: Grid) -> np.ndarray:
        """Returns the maze as a (height+1, width+1, 3) uint8 BGR image."""
        h_wid, v_wid = self.cell_size(grid)
        img = np.full((self.height + 1, self.width + 1, 3), self.COLOR_BG, dtype=np.uint8)

        # Path first so walls stay visible on top of it
        pad = 2 if h_wid > 4 and v_wid > 4 else 0
        for r in range(grid.rows):
            for c in range(grid.cols):
                if grid.is_visited(r, c):
                    left, top, right, bottom = self._path_rect(grid.get_marker(r, c), r, c, h_wid, v_wid, pad)
                    cv2.rectangle(img, (left, top), (right, bottom), self.COLOR_PATH, -1)

        # Top and left exterior walls
        for c in range(grid.cols):
            if not grid.is_exit(Grid.UP, c):
                cv2.line(img, (c * h_wid, 0), (c * h_wid + h_wid, 0), self.COLOR_WALL, 1)
        for r in range(grid.rows):
            if not grid.is_exit(Grid.LEFT, r):
                cv2.line(img, (0, r * v_wid), (0, r * v_wid + v_wid), self.COLOR_WALL, 1)

        last_row, last_col = grid.rows - 1, grid.cols - 1
        for r in range(grid.rows):
            v_base = r * v_wid
            for c in range(grid.cols):
                h_base = c * h_wid
                if grid.has_right_wall(r, c) and not (c == last_col and grid.is_exit(Grid.RIGHT, r)):
                    cv2.line(img, (h_base + h_wid, v_base), (h_base + h_wid, v_base + v_wid), self.COLOR_WALL, 1)
                if grid.has_bottom_wall(r, c) and not (r == last_row and grid.is_exit(Grid.DOWN, c)):
                    cv2.line(img, (h_base, v_base + v_wid), (h_base + h_wid, v_base + v_wid), self.COLOR_WALL, 1)

        return img

    @staticmethod
    def _path_rect(marker, r, c, h_wid, v_wid, pad):
        # The marker stretches the block over the neighbouring cell it points at
        left = c * h_wid + pad
        top = r * v_wid + pad
        if marker in (Grid.UP, Grid.DOWN):
            width, height = h_wid, 2 * v_wid
        else:
            width, height = 2 * h_wid, v_wid
        if marker == Grid.LEFT:
            left -= h_wid
        elif marker == Grid.UP:
            top -= v_wid
        return left, top, left + width - 2 * pad, top + height - 2 * pad

    @staticmethod
    def encode(img: np.ndarray) -> bytes:
        ok, buf = cv2.imencode(".png", img)
        if not ok:
            raise RuntimeError("PNG encoding failed")
        return buf.tobytes()

    def write(self, grid: Grid, fp: BinaryIO):
        fp.write(self.encode(self.render(grid)))
