import random
from abc import ABC, abstractmethod
from typing import Callable, Iterator, List, Optional, Tuple
from mazegen.core.grid import Grid

# Zero-argument callable returning floats in [0, 1)
RandomSource = Callable[[], float]


class Generator(ABC):
    def __init__(self, grid: Grid, random_source: Optional[RandomSource] = None, seed: int = None):
        self.grid = grid
        self.seed = seed
        if random_source is None:
            random_source = random.Random(seed).random
        self.random = random_source
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual grid modifications happen in-place on self.grid.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass


class Solver(ABC):
    def __init__(self, grid: Grid):
        self.grid = grid
        self.path: List[Tuple[int, int]] = []
        self.visited_count = 0

    @abstractmethod
    def run(self, start: Tuple[int, int], end: Tuple[int, int]) -> Iterator[str]:
        pass

    def run_all(self, start: Tuple[int, int], end: Tuple[int, int]) -> List[Tuple[int, int]]:
        for _ in self.run(start, end):
            pass
        return self.path
