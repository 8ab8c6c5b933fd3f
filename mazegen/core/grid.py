from array import array
from dataclasses import dataclass
from typing import Iterator, Tuple


def pack_exit(position: int, direction: int) -> int:
    """Packs an exit as (position along the edge, edge direction)."""
    return (position << 2) | direction


def exit_position(value: int) -> int:
    return value >> 2


def exit_direction(value: int) -> int:
    return value & 3


@dataclass(frozen=True)
class Cell:
    right_wall: bool
    bottom_wall: bool
    marker: int
    visited: bool


class Grid:
    # Direction codes (also the bit index in adjacency masks)
    UP    = 0
    RIGHT = 1
    DOWN  = 2
    LEFT  = 3

    DIRECTIONS = (UP, RIGHT, DOWN, LEFT)
    OPPOSITE = {UP: DOWN, RIGHT: LEFT, DOWN: UP, LEFT: RIGHT}
    DR = {UP: -1, RIGHT: 0, DOWN: 1, LEFT: 0}
    DC = {UP: 0, RIGHT: 1, DOWN: 0, LEFT: -1}
    NAMES = {UP: "up", RIGHT: "right", DOWN: "down", LEFT: "left"}

    # Cell byte layout. The low nibble is the stored (compact) cell value.
    RIGHT_WALL   = 0b00001
    BOTTOM_WALL  = 0b00010
    MARKER_MASK  = 0b01100
    MARKER_SHIFT = 2
    VISITED      = 0b10000

    # Both walls present, marker UP, not visited
    DEFAULT = RIGHT_WALL | BOTTOM_WALL

    __slots__ = ('rows', 'cols', 'cells', 'exit_1', 'exit_2')

    def __init__(self, rows: int, cols: int):
        if rows < 1 or cols < 1:
            raise ValueError(f"A maze must have at least one row and one column, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        # 'B' (unsigned char) -> 1 byte per cell
        self.cells = array('B', [self.DEFAULT]) * (rows * cols)
        self.exit_1 = pack_exit(0, self.LEFT)
        self.exit_2 = pack_exit(rows - 1, self.RIGHT)

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.rows == other.rows and self.cols == other.cols
                and self.exit_1 == other.exit_1 and self.exit_2 == other.exit_2
                and self.cells == other.cells)

    __hash__ = None

    def __repr__(self):
        return f"Grid({self.rows}x{self.cols}, exits={self.exit_1},{self.exit_2})"

    def get_index(self, row: int, col: int) -> int:
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return row * self.cols + col
        raise IndexError(f"Cell ({row}, {col}) out of bounds for {self.rows}x{self.cols} maze")

    def reset(self):
        """Every cell back to both walls, marker UP, not visited."""
        self.cells = array('B', [self.DEFAULT]) * len(self.cells)

    def unmark(self):
        """Clears path scratch state (visited, marker). Walls are untouched."""
        walls = self.RIGHT_WALL | self.BOTTOM_WALL
        cells = self.cells
        for i in range(len(cells)):
            cells[i] &= walls

    def clear(self):
        """Releases cell storage. Safe to call more than once."""
        self.cells = array('B')
        self.rows = 0
        self.cols = 0

    # Cell access

    def has_right_wall(self, row: int, col: int) -> bool:
        return (self.cells[row * self.cols + col] & self.RIGHT_WALL) != 0

    def has_bottom_wall(self, row: int, col: int) -> bool:
        return (self.cells[row * self.cols + col] & self.BOTTOM_WALL) != 0

    def get_marker(self, row: int, col: int) -> int:
        return (self.cells[row * self.cols + col] & self.MARKER_MASK) >> self.MARKER_SHIFT

    def set_marker(self, row: int, col: int, direction: int):
        idx = row * self.cols + col
        self.cells[idx] = (self.cells[idx] & ~self.MARKER_MASK) | (direction << self.MARKER_SHIFT)

    def is_visited(self, row: int, col: int) -> bool:
        return (self.cells[row * self.cols + col] & self.VISITED) != 0

    def set_visited(self, row: int, col: int, visited: bool = True):
        idx = row * self.cols + col
        if visited:
            self.cells[idx] |= self.VISITED
        else:
            self.cells[idx] &= ~self.VISITED

    def cell(self, row: int, col: int) -> Cell:
        val = self.cells[self.get_index(row, col)]
        return Cell(
            right_wall=bool(val & self.RIGHT_WALL),
            bottom_wall=bool(val & self.BOTTOM_WALL),
            marker=(val & self.MARKER_MASK) >> self.MARKER_SHIFT,
            visited=bool(val & self.VISITED),
        )

    def set_cell(self, row: int, col: int, cell: Cell):
        val = (cell.marker & 3) << self.MARKER_SHIFT
        if cell.right_wall:
            val |= self.RIGHT_WALL
        if cell.bottom_wall:
            val |= self.BOTTOM_WALL
        if cell.visited:
            val |= self.VISITED
        self.cells[self.get_index(row, col)] = val

    # Topology

    def remove_wall(self, row: int, col: int, direction: int) -> Tuple[int, int]:
        """
        Knocks down the wall between (row, col) and its neighbour in 'direction'.
        Walls are only stored on the right/bottom edges, so UP and LEFT clear
        the neighbour's bottom/right wall. Returns the neighbour's coordinates.
        """
        nrow = row + self.DR[direction]
        ncol = col + self.DC[direction]
        if not (0 <= nrow < self.rows and 0 <= ncol < self.cols):
            raise IndexError(f"No neighbour {self.NAMES[direction]} of ({row}, {col})")

        if direction == self.UP:
            self.cells[nrow * self.cols + ncol] &= ~self.BOTTOM_WALL
        elif direction == self.RIGHT:
            self.cells[row * self.cols + col] &= ~self.RIGHT_WALL
        elif direction == self.DOWN:
            self.cells[row * self.cols + col] &= ~self.BOTTOM_WALL
        else:
            self.cells[nrow * self.cols + ncol] &= ~self.RIGHT_WALL
        return nrow, ncol

    def can_move(self, row: int, col: int, direction: int) -> bool:
        # The outer border is an implicit, unbreakable wall
        cells, cols = self.cells, self.cols
        if direction == self.UP:
            return row > 0 and not (cells[(row - 1) * cols + col] & self.BOTTOM_WALL)
        if direction == self.RIGHT:
            return col < cols - 1 and not (cells[row * cols + col] & self.RIGHT_WALL)
        if direction == self.DOWN:
            return row < self.rows - 1 and not (cells[row * cols + col] & self.BOTTOM_WALL)
        return col > 0 and not (cells[row * cols + col - 1] & self.RIGHT_WALL)

    def get_neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nrow, ncol, direction) for all in-bounds grid neighbours,
        in UP, RIGHT, DOWN, LEFT order. Does NOT check walls.
        """
        if row > 0:
            yield (row - 1, col, self.UP)
        if col < self.cols - 1:
            yield (row, col + 1, self.RIGHT)
        if row < self.rows - 1:
            yield (row + 1, col, self.DOWN)
        if col > 0:
            yield (row, col - 1, self.LEFT)

    def get_open_neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int]]:
        for direction in self.DIRECTIONS:
            if self.can_move(row, col, direction):
                yield (row + self.DR[direction], col + self.DC[direction])

    # Exits

    def exit_cell(self, value: int) -> Tuple[int, int]:
        """Border cell pierced by the packed exit 'value'."""
        pos = exit_position(value)
        direction = exit_direction(value)
        if direction == self.UP:
            return 0, pos
        if direction == self.DOWN:
            return self.rows - 1, pos
        if direction == self.LEFT:
            return pos, 0
        return pos, self.cols - 1

    def is_exit(self, direction: int, position: int) -> bool:
        return pack_exit(position, direction) in (self.exit_1, self.exit_2)
