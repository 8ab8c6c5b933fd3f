import logging
from typing import Iterator, List, Tuple
from mazegen.core.grid import Grid
from mazegen.algo.base import Solver

logger = logging.getLogger(__name__)


class WallWalker(Solver):
    """
    Marks the unique path between two cells of a perfect maze.

    The walk keeps no stack; the cell markers carry all of its state, and
    they mean different things in the two phases:

    1. Search. At each cell, try directions clockwise starting one past the
       cell's marker and leave by the first open one, storing it in the
       marker ("the way I left"). The neighbour's marker is set to the way
       back. In a tree this visits each branch once, returns from dead ends
       through the stored way back, and must end at the target.
    2. Marking. Once the target is reached, every cell on the path has
       last left toward the target, so its marker now means "next step
       toward the target". Following markers from the start sets visited
       on exactly the path cells, both endpoints included. Renderers read
       the markers of visited cells as the local path direction.
    """

    def run(self, start: Tuple[int, int], end: Tuple[int, int]) -> Iterator[str]:
        grid = self.grid
        # Bounds are the caller's job; get_index raises IndexError on violation
        grid.get_index(*start)
        grid.get_index(*end)

        grid.unmark()
        self.path = []
        self.visited_count = 0

        # Each tree edge is crossed at most twice while searching
        max_steps = 2 * grid.rows * grid.cols
        row, col = start
        steps = 0

        # Phase 1: search
        while (row, col) != end:
            direction = grid.get_marker(row, col)
            for _ in range(4):
                direction = (direction + 1) % 4
                if grid.can_move(row, col, direction):
                    break
            else:
                raise ValueError(f"Unescapable cell ({row}, {col}); the maze is not fully generated")

            grid.set_marker(row, col, direction)
            row += Grid.DR[direction]
            col += Grid.DC[direction]
            grid.set_marker(row, col, Grid.OPPOSITE[direction])

            steps += 1
            if steps > max_steps:
                raise ValueError("Search did not reach the target; the maze is not a perfect maze")
            if steps % 1000 == 0:
                yield f"Steps: {steps}"

        logger.debug("reached %s from %s in %d steps", end, start, steps)

        # Phase 2: markers on the path now point toward the target
        row, col = start
        while True:
            grid.set_visited(row, col)
            self.path.append((row, col))
            if (row, col) == end:
                break
            if len(self.path) > grid.rows * grid.cols:
                raise ValueError("Path markers do not lead to the target; the maze is not a perfect maze")
            direction = grid.get_marker(row, col)
            row += Grid.DR[direction]
            col += Grid.DC[direction]

        self.visited_count = len(self.path)
        yield "Solved"


def find_path(grid: Grid, src: Tuple[int, int], dst: Tuple[int, int]) -> List[Tuple[int, int]]:
    """Marks the path from src to dst (0-based) on 'grid' and returns its cells."""
    return WallWalker(grid).run_all(src, dst)


def default_endpoints(grid: Grid) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """Cells just inside the entrance (exit_1) and the exit (exit_2)."""
    return grid.exit_cell(grid.exit_1), grid.exit_cell(grid.exit_2)
