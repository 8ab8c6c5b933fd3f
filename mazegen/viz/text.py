from typing import TextIO
from mazegen.core.grid import Grid


class TextRenderer:
    """
    Plain-text drawing:

        +---+---+
          @ | @
        +   +   +
    """

    def render(self, grid: Grid) -> str:
        lines = []

        # Top border, respecting exits
        top = []
        for c in range(grid.cols):
            top.append("+   " if grid.is_exit(Grid.UP, c) else "+---")
        top.append("+")
        lines.append("".join(top))

        last_col = grid.cols - 1
        last_row = grid.rows - 1
        for r in range(grid.rows):
            # The left border is drawn as we go
            row = [" " if grid.is_exit(Grid.LEFT, r) else "|"]
            for c in range(grid.cols):
                row.append(" @ " if grid.is_visited(r, c) else "   ")
                wall = grid.has_right_wall(r, c)
                if c == last_col and grid.is_exit(Grid.RIGHT, r):
                    wall = False
                row.append("|" if wall else " ")
            lines.append("".join(row))

            bottom = ["+"]
            for c in range(grid.cols):
                wall = grid.has_bottom_wall(r, c)
                if r == last_row and grid.is_exit(Grid.DOWN, c):
                    wall = False
                bottom.append("---+" if wall else "   +")
            lines.append("".join(bottom))

        return "\n".join(lines) + "\n"

    def write(self, grid: Grid, fp: TextIO):
        fp.write(self.render(grid))
