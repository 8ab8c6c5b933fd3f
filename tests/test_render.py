import unittest
import io
import sys
import os
import numpy as np
import cv2

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazegen.core.grid import Grid, pack_exit
from mazegen.algo.union_find import generate
from mazegen.algo.solvers import find_path
from mazegen.viz.text import TextRenderer
from mazegen.viz.raster import RasterRenderer
from mazegen.viz.eps import EpsRenderer
from mazegen.viz.renderer import Renderer


def zero_maze():
    grid = Grid(3, 3)
    generate(grid, random_source=lambda: 0.0)
    return grid


def two_by_two():
    # (0,0)-(0,1)
    #   |     |
    # (1,0) (1,1)
    grid = Grid(2, 2)
    grid.remove_wall(0, 0, Grid.RIGHT)
    grid.remove_wall(0, 0, Grid.DOWN)
    grid.remove_wall(0, 1, Grid.DOWN)
    return grid


class TestTextRenderer(unittest.TestCase):
    def test_plain_maze(self):
        expected = (
            "+---+---+---+\n"
            "            |\n"
            "+   +   +   +\n"
            "|   |   |   |\n"
            "+   +   +   +\n"
            "|   |   |    \n"
            "+---+---+---+\n"
        )
        self.assertEqual(TextRenderer().render(zero_maze()), expected)

    def test_solution(self):
        grid = zero_maze()
        find_path(grid, (0, 0), (2, 2))
        lines = TextRenderer().render(grid).split("\n")
        self.assertEqual(lines[1], "  @   @   @ |")
        self.assertEqual(lines[3], "|   |   | @ |")
        self.assertEqual(lines[5], "|   |   | @  ")

    def test_top_and_bottom_exits(self):
        grid = zero_maze()
        grid.exit_1 = pack_exit(1, Grid.UP)
        grid.exit_2 = pack_exit(2, Grid.DOWN)
        lines = TextRenderer().render(grid).split("\n")
        self.assertEqual(lines[0], "+---+   +---+")
        self.assertEqual(lines[1], "|           |")
        self.assertEqual(lines[6], "+---+---+   +")

    def test_does_not_mutate(self):
        grid = zero_maze()
        before = grid.cells.tobytes()
        out = io.StringIO()
        TextRenderer().write(grid, out)
        self.assertEqual(grid.cells.tobytes(), before)
        self.assertTrue(out.getvalue().startswith("+---"))


class TestRasterRenderer(unittest.TestCase):
    WHITE = [255, 255, 255]
    BLACK = [0, 0, 0]

    def test_image(self):
        grid = two_by_two()
        find_path(grid, (0, 0), (0, 1))
        img = RasterRenderer(100, 100).render(grid)

        self.assertEqual(img.shape, (101, 101, 3))
        self.assertEqual(img.dtype, np.uint8)
        # Entrance on the left of row 0, wall on the left of row 1
        self.assertEqual(img[25, 0].tolist(), self.WHITE)
        self.assertEqual(img[75, 0].tolist(), self.BLACK)
        # Wall between (1,0) and (1,1)
        self.assertEqual(img[75, 50].tolist(), self.BLACK)
        # Path block over the top row, untouched bottom row
        self.assertEqual(img[25, 25].tolist(), list(RasterRenderer.COLOR_PATH))
        self.assertEqual(img[25, 75].tolist(), list(RasterRenderer.COLOR_PATH))
        self.assertEqual(img[75, 25].tolist(), self.WHITE)

    def test_png_encoding(self):
        grid = generate(Grid(5, 7), seed=2)
        out = io.BytesIO()
        RasterRenderer(140, 100).write(grid, out)
        data = out.getvalue()
        self.assertTrue(data.startswith(b"\x89PNG"))

        decoded = cv2.imdecode(np.frombuffer(data, np.uint8), cv2.IMREAD_COLOR)
        self.assertEqual(decoded.shape, (101, 141, 3))

    def test_area_too_small(self):
        with self.assertRaises(ValueError):
            RasterRenderer(5, 5).render(Grid(10, 10))


class TestEpsRenderer(unittest.TestCase):
    def test_document(self):
        grid = zero_maze()
        find_path(grid, (0, 0), (2, 2))
        text = EpsRenderer(300, 300).render(grid)

        self.assertTrue(text.startswith("%!PS-Adobe-3.0 EPSF-3.0\n"))
        self.assertIn("%%BoundingBox: -2 -2 302 302\n", text)
        # One path marker per visited cell
        self.assertEqual(text.count("sgrey sg fill"), 5)
        # Entrance gap on the left edge, row 0
        self.assertIn("0 100.0 neg rmt 0 100.0 neg rlt 0 100.0 neg rlt dr", text)

    def test_exit_right_not_drawn(self):
        grid = Grid(1, 1)
        text = EpsRenderer(10, 10).render(grid)
        # Only the bottom wall remains for the single cell; right edge is the exit
        self.assertIn("np 0.0 0.0 mt 10.0 0 rlt dr", text)
        self.assertNotIn("mt 0 10.0 neg rlt", text)


class TestViewer(unittest.TestCase):
    def test_fit_to_screen(self):
        renderer = Renderer(Grid(10, 20), width=1280, height=720)
        renderer.fit_to_screen()
        self.assertAlmostEqual(renderer.cell_size, 60.0)
        self.assertAlmostEqual(renderer.offset_x, 40.0)
        self.assertAlmostEqual(renderer.offset_y, 60.0)

    def test_screen_round_trip(self):
        renderer = Renderer(Grid(10, 20), width=1280, height=720)
        renderer.fit_to_screen()
        sx, sy = renderer.world_to_screen(3, 7)
        self.assertEqual(renderer.screen_to_world(sx + 1, sy + 1), (7, 3))
        self.assertEqual(renderer.visible_range(), (0, 10, 0, 20))

if __name__ == '__main__':
    unittest.main()
