from typing import TextIO
from mazegen.core.grid import Grid


class EpsRenderer:
    """Encapsulated PostScript output; the area is in points."""

    LINE_WIDTH = 1.0  # weight of walls
    LINE_GREY = 0.0   # colour of walls
    SOLN_GREY = 0.7   # colour of path markers
    SOLN_GAP = 0.2    # path marker gap from walls, fraction of a cell

    def __init__(self, width: int = 612, height: int = 612):
        self.width = width
        self.height = height

    def render(self, grid: Grid) -> str:
        h_res, v_res = self.width, self.height
        h_wid = h_res / grid.cols
        v_wid = v_res / grid.rows
        gap = self.SOLN_GAP
        out = []

        out.append(
            "%!PS-Adobe-3.0 EPSF-3.0\n"
            f"%%BoundingBox: -2 -2 {h_res + 2} {v_res + 2}\n"
            "%%DocumentData: Clean7Bit\n\n")
        out.append(
            "/np  {newpath} bind def\n"
            "/slw {setlinewidth} bind def\n"
            "/sg  {setgray} bind def\n"
            "/mt  {moveto} bind def\n"
            "/rmt {rmoveto} bind def\n"
            "/lt  {lineto} bind def\n"
            "/rlt {rlineto} bind def\n"
            "/stk {stroke} bind def\n"
            f"/sgrey {self.SOLN_GREY:.1f} def\n"
            f"/lgrey {self.LINE_GREY:.1f} def\n"
            f"/lwid  {self.LINE_WIDTH:.1f} def\n"
            "/dr {lwid slw lgrey sg stk} def\n\n")

        # Exterior walls; exits are skipped with a move instead of a line
        out.append(f"% Exterior walls\nnp\n0 {v_res} mt\n")
        for c in range(grid.cols):
            op = "rmt" if grid.is_exit(Grid.UP, c) else "rlt"
            out.append(f"{h_wid:.1f} 0 {op} ")
        out.append(f"dr\nnp\n0 {v_res} mt\n")
        for r in range(grid.rows):
            op = "rmt" if grid.is_exit(Grid.LEFT, r) else "rlt"
            out.append(f"0 {v_wid:.1f} neg {op} ")
        out.append("dr\n\n")

        last_row, last_col = grid.rows - 1, grid.cols - 1
        for r in range(grid.rows):
            v_base = r * v_wid
            for c in range(grid.cols):
                h_base = c * h_wid
                cell = grid.cell(r, c)
                r_wall = cell.right_wall and not (c == last_col and grid.is_exit(Grid.RIGHT, r))
                b_wall = cell.bottom_wall and not (r == last_row and grid.is_exit(Grid.DOWN, c))

                if r_wall or b_wall:
                    out.append("np ")
                    if r_wall:
                        out.append(f"{h_base + h_wid:.1f} {v_res - v_base:.1f} mt 0 {v_wid:.1f} neg rlt ")
                    if b_wall:
                        out.append(f"{h_base:.1f} {v_res - v_base - v_wid:.1f} mt {h_wid:.1f} 0 rlt ")
                    out.append("dr\n")

                if cell.visited:
                    if cell.marker in (Grid.UP, Grid.DOWN):
                        h_dis = (1.0 - 2 * gap) * h_wid
                        v_dis = (2.0 - 2 * gap) * v_wid
                    else:
                        h_dis = (2.0 - 2 * gap) * h_wid
                        v_dis = (1.0 - 2 * gap) * v_wid

                    hp = h_base + gap * h_wid
                    vp = v_base + gap * v_wid
                    if cell.marker == Grid.UP:
                        vp = v_base - (1.0 - gap) * v_wid
                    elif cell.marker == Grid.LEFT:
                        hp = h_base - (1.0 - gap) * h_wid

                    out.append(
                        f"np {hp:.1f} {v_res - vp:.1f} mt {h_dis:.1f} 0 rlt 0 {v_dis:.1f} neg rlt "
                        f"{h_dis:.1f} neg 0 rlt 0 {v_dis:.1f} rlt sgrey sg fill\n")

        return "".join(out)

    def write(self, grid: Grid, fp: TextIO):
        fp.write(self.render(grid))
