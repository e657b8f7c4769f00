import logging
import random
from enum import Enum

from grid import BOX, EMPTY, SIZE, clone_grid, count_clues
from solver import SudokuSolver

log = logging.getLogger(__name__)


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    VERY_HARD = "very-hard"
    IMPOSSIBLE = "impossible"

    @classmethod
    def parse(cls, value):
        """Map a level name to a Difficulty; anything unknown plays as medium."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            log.warning("Unknown difficulty %r, using %s", value, cls.MEDIUM.value)
            return cls.MEDIUM


# Inclusive bounds on the number of clues left visible.
CLUE_RANGES = {
    Difficulty.EASY: (40, 49),
    Difficulty.MEDIUM: (30, 39),
    Difficulty.HARD: (25, 34),
    Difficulty.VERY_HARD: (20, 29),
    Difficulty.IMPOSSIBLE: (15, 24),
}


def canonical_solution():
    return [[(row * BOX + row // BOX + col) % SIZE + 1 for col in range(SIZE)]
            for row in range(SIZE)]


def shuffle_bands(grid, rng):
    """Permute the rows inside each band; rows never leave their band."""
    for start in range(0, SIZE, BOX):
        band = grid[start:start + BOX]
        rng.shuffle(band)
        grid[start:start + BOX] = band
    return grid


class SudokuGenerator:
    def __init__(self, level='medium', rng=None):
        self.level = Difficulty.parse(level)
        self.rng = rng or random.Random()
        self.solution = None
        self._generate_solution()

    def _generate_solution(self):
        self.solution = shuffle_bands(canonical_solution(), self.rng)

    def pick_clue_count(self):
        low, high = CLUE_RANGES[self.level]
        return self.rng.randint(low, high)

    def get_puzzle(self, clues=None):
        puzzle = clone_grid(self.solution)
        if clues is None:
            clues = self.pick_clue_count()
        if not 0 <= clues <= SIZE * SIZE:
            raise ValueError(f"Clue count must be between 0 and {SIZE * SIZE}, got {clues}")

        to_remove = SIZE * SIZE - clues
        while to_remove > 0:
            r = self.rng.randrange(SIZE)
            c = self.rng.randrange(SIZE)
            if puzzle[r][c] != EMPTY:
                puzzle[r][c] = EMPTY
                to_remove -= 1

        log.debug("Generated %s puzzle with %d clues", self.level.value, count_clues(puzzle))
        return puzzle

    def get_solution(self):
        return clone_grid(self.solution)

    def has_unique_solution(self, puzzle, max_steps=None):
        """True or False, or None when `max_steps` runs out before the answer is known."""
        count = SudokuSolver(max_steps=max_steps).count_solutions(clone_grid(puzzle), limit=2)
        if count is None:
            return None
        return count == 1
