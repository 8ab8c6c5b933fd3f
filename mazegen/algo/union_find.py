import logging
from typing import Iterator, Optional
from mazegen.core.grid import Grid
from mazegen.algo.base import Generator, RandomSource
from mazegen.algo.disjoint_set import DisjointSet, ADJ_POP

logger = logging.getLogger(__name__)


class UnionFindGenerator(Generator):
    """
    Randomized spanning tree by repeated relaxation.

    Each pass reshuffles every cell and, for each cell that still borders a
    different set, knocks down the wall to one such neighbour chosen at
    random and merges the two sets. Generation ends after a pass in which no
    cell borders another set, i.e. once everything is one set.
    """

    def __init__(self, grid: Grid, random_source: Optional[RandomSource] = None, seed: int = None):
        super().__init__(grid, random_source=random_source, seed=seed)
        self.done_count = 0
        self.union_count = 0
        self.passes = 0

    def run(self) -> Iterator[str]:
        grid = self.grid
        rand = self.random
        grid.reset()

        n_cells = grid.rows * grid.cols
        sets = DisjointSet(grid.rows, grid.cols)
        # Scan order, reshuffled before every pass
        queue = list(range(n_cells))

        self.done_count = 0
        self.union_count = 0
        self.passes = 0

        while self.done_count < n_cells:
            # Fisher-Yates
            for pos in range(n_cells - 1, 0, -1):
                exch = int(rand() * (pos + 1))
                queue[pos], queue[exch] = queue[exch], queue[pos]

            self.done_count = 0
            joined = 0
            for cur in queue:
                adj = sets.cross_set_neighbors(cur)
                pop = ADJ_POP[adj]
                if pop == 0:
                    self.done_count += 1
                    continue

                # A single candidate is forced and consumes no draw
                skip = int(rand() * pop) if pop > 1 else 0
                for direction in Grid.DIRECTIONS:
                    if (adj >> direction) & 1:
                        if skip == 0:
                            break
                        skip -= 1

                row, col = divmod(cur, grid.cols)
                nrow, ncol = grid.remove_wall(row, col, direction)
                sets.union(nrow * grid.cols + ncol, cur)
                joined += 1

            self.union_count += joined
            self.passes += 1
            self.step_count += 1
            logger.debug("pass %d: joined %d, settled %d/%d", self.passes, joined, self.done_count, n_cells)
            yield f"Pass {self.passes}: joined {joined}, settled {self.done_count}/{n_cells}"

        logger.debug("%dx%d maze done after %d passes (%d walls removed)",
                     grid.rows, grid.cols, self.passes, self.union_count)
        yield "Done"


def generate(grid: Grid, random_source: Optional[RandomSource] = None, seed: int = None) -> Grid:
    """Turns 'grid' into a perfect maze in place and returns it."""
    UnionFindGenerator(grid, random_source=random_source, seed=seed).run_all()
    return grid
