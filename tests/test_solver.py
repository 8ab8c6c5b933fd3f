import unittest
from collections import deque
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazegen.core.grid import Grid, pack_exit
from mazegen.algo.union_find import generate
from mazegen.algo.solvers import WallWalker, find_path, default_endpoints
from mazegen.io.serializer import MazeSerializer


def tree_distance(grid, src, dst):
    dist = {src: 0}
    queue = deque([src])
    while queue:
        cell = queue.popleft()
        for nxt in grid.get_open_neighbors(*cell):
            if nxt not in dist:
                dist[nxt] = dist[cell] + 1
                queue.append(nxt)
    return dist[dst]


def visited_cells(grid):
    return {(r, c) for r in range(grid.rows) for c in range(grid.cols) if grid.is_visited(r, c)}


class TestSolvers(unittest.TestCase):
    def zero_maze(self):
        # (0,0)-(0,1)-(0,2)
        #   |     |     |
        # (1,0) (1,1) (1,2)
        #   |     |     |
        # (2,0) (2,1) (2,2)
        grid = Grid(3, 3)
        generate(grid, random_source=lambda: 0.0)
        return grid

    def test_straight_path(self):
        grid = self.zero_maze()
        path = find_path(grid, (0, 0), (2, 2))
        self.assertEqual(path, [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2)])
        self.assertEqual(visited_cells(grid), set(path))
        # Markers on the path point toward the target, the target points back
        self.assertEqual(MazeSerializer.dumps(grid), "3 3 3 9\nEEJbbJddD\n")

    def test_backtracks_out_of_dead_ends(self):
        grid = self.zero_maze()
        # Clockwise search from (1,1) goes down into the (2,1) dead end first
        path = find_path(grid, (1, 1), (2, 2))
        self.assertEqual(path, [(1, 1), (0, 1), (0, 2), (1, 2), (2, 2)])
        self.assertEqual(visited_cells(grid), set(path))

    def test_same_endpoints(self):
        grid = self.zero_maze()
        path = find_path(grid, (1, 1), (1, 1))
        self.assertEqual(path, [(1, 1)])
        self.assertEqual(visited_cells(grid), {(1, 1)})

    def test_previous_path_cleared(self):
        grid = self.zero_maze()
        find_path(grid, (0, 0), (2, 2))
        find_path(grid, (2, 0), (1, 0))
        self.assertEqual(visited_cells(grid), {(2, 0), (1, 0)})

    def test_paths_are_unique_tree_paths(self):
        grid = Grid(15, 20)
        generate(grid, seed=99)
        walls = bytes(b & (Grid.RIGHT_WALL | Grid.BOTTOM_WALL) for b in grid.cells)

        pairs = [((0, 0), (14, 19)), ((14, 0), (0, 19)), ((7, 7), (7, 8)), ((3, 15), (12, 2))]
        for src, dst in pairs:
            with self.subTest(src=src, dst=dst):
                path = find_path(grid, src, dst)
                self.assertEqual(path[0], src)
                self.assertEqual(path[-1], dst)
                self.assertEqual(len(set(path)), len(path), "path must not repeat cells")
                self.assertEqual(len(path) - 1, tree_distance(grid, src, dst))
                self.assertEqual(visited_cells(grid), set(path))
                for a, b in zip(path, path[1:]):
                    self.assertIn(b, list(grid.get_open_neighbors(*a)))

        # Walls are never touched
        self.assertEqual(bytes(b & (Grid.RIGHT_WALL | Grid.BOTTOM_WALL) for b in grid.cells), walls)

    def test_solver_interface(self):
        grid = Grid(20, 20)
        generate(grid, seed=4)
        walker = WallWalker(grid)
        statuses = list(walker.run((0, 0), (19, 19)))
        self.assertEqual(statuses[-1], "Solved")
        self.assertEqual(walker.visited_count, len(walker.path))

    def test_out_of_bounds(self):
        grid = self.zero_maze()
        with self.assertRaises(IndexError):
            find_path(grid, (0, 0), (3, 0))
        with self.assertRaises(IndexError):
            find_path(grid, (-1, 0), (0, 0))

    def test_ungenerated_maze(self):
        grid = Grid(3, 3) # All walls
        with self.assertRaises(ValueError):
            find_path(grid, (0, 0), (2, 2))

    def test_disconnected_maze(self):
        grid = Grid(1, 4)
        grid.remove_wall(0, 0, Grid.RIGHT)
        grid.remove_wall(0, 2, Grid.RIGHT)
        with self.assertRaises(ValueError):
            find_path(grid, (0, 0), (0, 3))

    def test_default_endpoints(self):
        grid = Grid(4, 5)
        self.assertEqual(default_endpoints(grid), ((0, 0), (3, 4)))
        grid.exit_1 = pack_exit(2, Grid.UP)
        grid.exit_2 = pack_exit(1, Grid.DOWN)
        self.assertEqual(default_endpoints(grid), ((0, 2), (3, 1)))

if __name__ == '__main__':
    unittest.main()
