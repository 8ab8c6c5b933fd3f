import argparse
import logging
import sys
import time

from mazegen.core.grid import Grid, pack_exit

logger = logging.getLogger("mazegen")

# Edge letters accepted in exit specs
EDGE_CODES = {
    't': Grid.UP, 'u': Grid.UP, '^': Grid.UP,
    'l': Grid.LEFT, '<': Grid.LEFT,
    'r': Grid.RIGHT, '>': Grid.RIGHT,
    'b': Grid.DOWN, 'd': Grid.DOWN, 'v': Grid.DOWN,
}

FORMATS = ("text", "png", "eps", "compact")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def parse_dims(text: str):
    """'RRxCC' -> (RR, CC), whitespace allowed around the numbers."""
    first, sep, second = text.partition('x')
    if not sep:
        raise argparse.ArgumentTypeError(f"expected AxB, got {text!r}")
    try:
        return int(first), int(second)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected AxB, got {text!r}")


def parse_dim_pair(text: str):
    """'RxC-RxC' (1-based) -> ((r, c), (r, c)) 0-based."""
    first, sep, second = text.partition('-')
    if not sep:
        raise argparse.ArgumentTypeError(f"expected RxC-RxC, got {text!r}")
    (r1, c1), (r2, c2) = parse_dims(first), parse_dims(second)
    return (r1 - 1, c1 - 1), (r2 - 1, c2 - 1)


def parse_exit_pos(text: str) -> int:
    """'dPOS' -> packed exit, e.g. 'l1' is the first row on the left edge."""
    if not text or text[0].lower() not in EDGE_CODES:
        raise argparse.ArgumentTypeError(f"expected an edge (t, l, b, r) and a position, got {text!r}")
    try:
        pos = int(text[1:])
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an edge (t, l, b, r) and a position, got {text!r}")
    if pos < 1:
        raise argparse.ArgumentTypeError(f"exit positions start at 1, got {pos}")
    return pack_exit(pos - 1, EDGE_CODES[text[0].lower()])


def positive_dims(text: str):
    dims = parse_dims(text)
    if dims[0] < 1 or dims[1] < 1:
        raise argparse.ArgumentTypeError("a maze must have at least one row and one column")
    return dims


def add_output_args(parser: argparse.ArgumentParser):
    parser.add_argument("--format", "-f", choices=FORMATS, default="text", help="Output format")
    parser.add_argument("--area", type=parse_dims, default=(612, 612),
                        help="Output area HxV (pixels for png, points for eps, ignored for text)")
    parser.add_argument("--out", "-o", type=str, help="Output file path (default: standard output)")
    parser.add_argument("--visual", action="store_true", help="Show the maze in a window")
    parser.add_argument("--mark", type=parse_dim_pair, help="Mark a path from RxC to RxC (1-based)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="mazegen: perfect maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--dims", "-d", type=positive_dims, default=(10, 10), help="Maze dimensions RxC")
    gen_parser.add_argument("--seed", "-r", type=int, default=None, help="Random seed (default: current time)")
    gen_parser.add_argument("--entrance", "-e", type=parse_exit_pos, help="Entrance position, e.g. l1")
    gen_parser.add_argument("--exit", "-x", type=parse_exit_pos, help="Exit position, e.g. r10")
    gen_parser.add_argument("--solve", "-s", action="store_true", help="Mark the path from entrance to exit")
    add_output_args(gen_parser)

    solve_parser = subparsers.add_parser("solve", help="Mark a path in a stored maze")
    solve_parser.add_argument("input_file", help="Stored (compact) maze, - for standard input")
    add_output_args(solve_parser)

    return parser


def write_output(grid: Grid, args):
    from mazegen.io.serializer import MazeSerializer

    width, height = args.area
    if args.format == "png":
        from mazegen.viz.raster import RasterRenderer
        renderer = RasterRenderer(width, height)
        data = renderer.encode(renderer.render(grid))
        if args.out:
            with open(args.out, "wb") as f:
                f.write(data)
        else:
            sys.stdout.buffer.write(data)
        return

    if args.format == "eps":
        from mazegen.viz.eps import EpsRenderer
        text = EpsRenderer(width, height).render(grid)
    elif args.format == "compact":
        text = MazeSerializer.dumps(grid)
    else:
        from mazegen.viz.text import TextRenderer
        text = TextRenderer().render(grid)

    if args.out:
        with open(args.out, "w", newline="\n") as f:
            f.write(text)
    else:
        sys.stdout.write(text)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    if args.format != "text" and (args.area[0] < 1 or args.area[1] < 1):
        parser.error("output area requires nonzero dimensions")

    logger.debug(f"Running command: {args.command}")
    seed = None

    if args.command == "generate":
        from mazegen.algo.union_find import UnionFindGenerator

        rows, cols = args.dims
        seed = args.seed if args.seed is not None else int(time.time())
        try:
            grid = Grid(rows, cols)
        except MemoryError:
            logger.error(f"Insufficient memory to create {rows} x {cols} maze")
            return 1
        if args.entrance is not None:
            grid.exit_1 = args.entrance
        if args.exit is not None:
            grid.exit_2 = args.exit

        logger.info(f"Generating {rows}x{cols} maze...")
        try:
            UnionFindGenerator(grid, seed=seed).run_all()
        except MemoryError:
            logger.error(f"Insufficient memory to generate {rows} x {cols} maze")
            grid.clear()
            return 1
    else:
        from mazegen.io.serializer import MazeSerializer, MalformedMazeError

        try:
            if args.input_file == "-":
                grid = MazeSerializer.load(sys.stdin)
            else:
                grid = MazeSerializer.load_file(args.input_file)
        except OSError as e:
            logger.error(f"Unable to open input file '{args.input_file}': {e}")
            return 1
        except MalformedMazeError as e:
            logger.error(f"Unable to load maze from input stream: {e}")
            return 1
        except MemoryError:
            logger.error(f"Insufficient memory to load maze from '{args.input_file}'")
            return 1
        logger.info(f"Loaded {grid.rows}x{grid.cols} maze.")

    # Which path to mark, if any
    endpoints = None
    if args.mark:
        endpoints = args.mark
    elif args.command == "solve" or args.solve:
        from mazegen.algo.solvers import default_endpoints
        endpoints = default_endpoints(grid)

    if endpoints:
        from mazegen.algo.solvers import find_path

        for label, (r, c) in zip(("Source", "Target"), endpoints):
            if not (0 <= r < grid.rows and 0 <= c < grid.cols):
                logger.error(f"{label} position {r + 1}x{c + 1} out of range "
                             f"(maze dimensions are {grid.rows}x{grid.cols})")
                return 1
        try:
            path = find_path(grid, *endpoints)
        except ValueError as e:
            logger.error(str(e))
            return 1
        logger.debug(f"Path length: {len(path)}")

    logger.info("Maze parameters:")
    logger.info(f"  Dimensions:  {grid.rows}x{grid.cols}")
    logger.info(f" Output area:  {args.area[0]}x{args.area[1]}")
    logger.info(f"      Format:  {args.format}")
    if seed is not None:
        logger.info(f" Random seed:  {seed}")
    logger.info(f"      Target:  {args.out or '<standard output>'}")
    if endpoints:
        (r1, c1), (r2, c2) = endpoints
        logger.info(f"    Solution:  ({r1 + 1} x {c1 + 1}) to ({r2 + 1} x {c2 + 1})")
    else:
        logger.info("    Solution:  NONE")

    try:
        write_output(grid, args)
    except OSError as e:
        logger.error(f"Unable to write output: {e}")
        return 1
    except ValueError as e:
        logger.error(str(e))
        return 1

    if args.visual:
        from mazegen.viz.renderer import Renderer
        renderer = Renderer(grid)
        renderer.init_window()
        renderer.run_loop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
