import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazegen.core.grid import Grid
from mazegen.algo.union_find import UnionFindGenerator
from mazegen.algo.solvers import find_path, default_endpoints
from mazegen.io.serializer import MazeSerializer


def benchmark_size(rows: int, cols: int):
    print(f"\n--- Benchmarking {rows}x{cols} ({rows*cols/1e6:.2f}M cells) ---")

    start_time = time.time()
    grid = Grid(rows, cols)
    print(f"Grid Init: {time.time() - start_time:.4f}s")
    print(f"Memory (Grid Data): ~{len(grid.cells) / (1024 * 1024):.2f} MB")

    print("Generating...")
    algo = UnionFindGenerator(grid, seed=42)
    gen_start = time.time()
    algo.run_all()
    gen_time = time.time() - gen_start
    print(f"Generation Time: {gen_time:.4f}s ({algo.passes} passes)")
    print(f"Speed: {(rows*cols)/gen_time:,.0f} cells/sec")

    src, dst = default_endpoints(grid)
    solve_start = time.time()
    path = find_path(grid, src, dst)
    print(f"Path Time: {time.time() - solve_start:.4f}s (length {len(path)})")

    store_start = time.time()
    text = MazeSerializer.dumps(grid)
    MazeSerializer.loads(text)
    print(f"Store + Load Time: {time.time() - store_start:.4f}s ({len(text):,} chars)")


def run_suite():
    sizes = [
        (10, 10),
        (100, 100),
        (500, 500),
    ]

    for rows, cols in sizes:
        benchmark_size(rows, cols)


if __name__ == "__main__":
    run_suite()
