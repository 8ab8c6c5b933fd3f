import io
import logging
from typing import TextIO, Union
from mazegen.core.grid import Grid

logger = logging.getLogger(__name__)


class MalformedMazeError(ValueError):
    """Stored maze text could not be decoded."""


class MazeSerializer:
    """
    Compact text form of a maze.

    Format:
    - Header line: "<rows> <cols> <exit_1> <exit_2>"
    - rows*cols letters in row-major order, one per cell. The cell value
      v = marker << 2 | bottom_wall << 1 | right_wall (0-15) is written as
      'A' + v when the cell is on the marked path, 'a' + v otherwise.
    - A newline after every LINE_WIDTH letters, and after the last one.
    Whitespace between letters is not significant when loading.
    """

    LINE_WIDTH = 80

    @staticmethod
    def dump(grid: Grid, fp: TextIO):
        fp.write(f"{grid.rows} {grid.cols} {grid.exit_1} {grid.exit_2}\n")

        pos = 0
        line = []
        for val in grid.cells:
            base = ord('A') if val & Grid.VISITED else ord('a')
            line.append(chr(base + (val & 0x0F)))
            pos = (pos + 1) % MazeSerializer.LINE_WIDTH
            if not pos:
                line.append("\n")
                fp.write("".join(line))
                line = []
        if pos:
            line.append("\n")
            fp.write("".join(line))

    @staticmethod
    def dumps(grid: Grid) -> str:
        buf = io.StringIO()
        MazeSerializer.dump(grid, buf)
        return buf.getvalue()

    @staticmethod
    def load(fp: TextIO) -> Grid:
        return MazeSerializer.loads(fp.read())

    @staticmethod
    def loads(data: Union[str, bytes]) -> Grid:
        if isinstance(data, bytes):
            try:
                data = data.decode('ascii')
            except UnicodeDecodeError as e:
                raise MalformedMazeError(f"Stored maze is not ASCII text: {e}") from e

        tokens = data.split(None, 4)
        if len(tokens) < 4:
            raise MalformedMazeError("Missing dimension line")
        for t in tokens[:4]:
            # Unsigned decimal only; int() would also take "-1", "+3" and "1_0"
            if not ('0' <= t[0] <= '9' and t.isdigit()):
                raise MalformedMazeError(f"Invalid dimension line: {t!r} is not an unsigned integer")
        try:
            rows, cols, exit_1, exit_2 = (int(t) for t in tokens[:4])
        except ValueError as e:
            raise MalformedMazeError(f"Invalid dimension line: {e}") from e

        try:
            grid = Grid(rows, cols)
        except ValueError as e:
            raise MalformedMazeError(str(e)) from e
        grid.exit_1 = exit_1
        grid.exit_2 = exit_2

        body = "".join(tokens[4].split()) if len(tokens) == 5 else ""
        n_cells = rows * cols
        if len(body) < n_cells:
            r, c = divmod(len(body), cols)
            raise MalformedMazeError(f"Premature end of input at {r} x {c}")

        cells = grid.cells
        for idx in range(n_cells):
            ch = body[idx]
            if 'a' <= ch <= 'p':
                cells[idx] = ord(ch) - ord('a')
            elif 'A' <= ch <= 'P':
                cells[idx] = (ord(ch) - ord('A')) | Grid.VISITED
            else:
                r, c = divmod(idx, cols)
                raise MalformedMazeError(f"Invalid cell character {ch!r} at {r} x {c}")

        logger.debug("loaded %dx%d maze", rows, cols)
        return grid

    @staticmethod
    def save(grid: Grid, filepath: str):
        with open(filepath, "w", newline="\n") as f:
            MazeSerializer.dump(grid, f)

    @staticmethod
    def load_file(filepath: str) -> Grid:
        with open(filepath, "r") as f:
            return MazeSerializer.load(f)
