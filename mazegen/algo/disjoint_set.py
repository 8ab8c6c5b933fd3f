from array import array
from mazegen.core.grid import Grid

# Population count of a 4-bit direction mask
ADJ_POP = (0, 1, 1, 2, 1, 2, 2, 3,
           1, 2, 2, 3, 2, 3, 3, 4)


class DisjointSet:
    """
    Union-find over the linear cell indices of a rows x cols grid.
    Only lives for the duration of one generation run.
    """

    __slots__ = ('rows', 'cols', 'parents')

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        # Every cell starts as its own singleton set
        self.parents = array('L', range(rows * cols))

    def find(self, idx: int) -> int:
        parents = self.parents
        root = idx
        while parents[root] != root:
            root = parents[root]

        # Second pass: point everything on the way directly at the root
        while parents[idx] != root:
            nxt = parents[idx]
            parents[idx] = root
            idx = nxt
        return root

    def union(self, a: int, b: int) -> bool:
        """Redirects the root of a's set to the root of b's set."""
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False
        self.parents[root_a] = root_b
        return True

    def cross_set_neighbors(self, idx: int) -> int:
        """
        Bitmask (1 << direction) of the grid-adjacent cells that are in a
        different set than idx. Walls are not considered.
        """
        own = self.find(idx)
        row, col = divmod(idx, self.cols)
        cols = self.cols
        out = 0

        if row > 0 and self.find(idx - cols) != own:
            out |= 1 << Grid.UP
        if col < cols - 1 and self.find(idx + 1) != own:
            out |= 1 << Grid.RIGHT
        if row < self.rows - 1 and self.find(idx + cols) != own:
            out |= 1 << Grid.DOWN
        if col > 0 and self.find(idx - 1) != own:
            out |= 1 << Grid.LEFT
        return out

    def count_sets(self) -> int:
        return sum(1 for i in range(len(self.parents)) if self.parents[i] == i)
