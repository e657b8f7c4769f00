"""Backtracking search over a grid.

The search always picks the first empty cell in row-major order and tries
digits 1-9 in ascending order, so the same input grid always produces the
same solution.
"""
import logging
from enum import Enum

from grid import EMPTY, DIGITS, SIZE, clone_grid, find_conflicts, is_safe, validate_grid

log = logging.getLogger(__name__)


class Outcome(Enum):
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    BUDGET_EXHAUSTED = "budget_exhausted"


class _BudgetExhausted(Exception):
    pass


def find_empty(grid):
    for i in range(SIZE):
        for j in range(SIZE):
            if grid[i][j] == EMPTY:
                return (i, j)  # row, col
    return None


def _restore(grid, snapshot):
    for row, saved in zip(grid, snapshot):
        row[:] = saved


class SudokuSolver:
    """Fills a grid in place.

    `max_steps` bounds the number of tentative placements a single call may
    make. None means the search runs until it either succeeds or exhausts
    every branch.
    """

    def __init__(self, max_steps=None):
        self.max_steps = max_steps
        self.steps = 0

    def run(self, board):
        """Solve `board` in place and return an Outcome.

        On SOLVED the board holds a complete solution. On any other outcome
        the board is left exactly as it was passed in.
        """
        validate_grid(board)
        self.steps = 0

        conflicts = find_conflicts(board)
        if conflicts:
            log.debug("Clues already conflict: %s", conflicts)
            return Outcome.UNSOLVABLE

        snapshot = clone_grid(board)
        try:
            solved = self._search(board)
        except _BudgetExhausted:
            _restore(board, snapshot)
            log.info("Gave up after %d steps", self.steps)
            return Outcome.BUDGET_EXHAUSTED

        if not solved:
            log.debug("No solution after %d steps", self.steps)
            return Outcome.UNSOLVABLE
        log.debug("Solved in %d steps", self.steps)
        return Outcome.SOLVED

    def solve(self, board):
        return self.run(board) is Outcome.SOLVED

    def count_solutions(self, board, limit=2):
        """Count completions of `board`, stopping once `limit` are found.

        The board is left unchanged. Returns None if the step budget runs out
        before the count is settled.
        """
        validate_grid(board)
        self.steps = 0
        if find_conflicts(board):
            return 0

        snapshot = clone_grid(board)
        try:
            return self._count(board, limit)
        except _BudgetExhausted:
            _restore(board, snapshot)
            log.info("Stopped counting solutions after %d steps", self.steps)
            return None

    def _tick(self):
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            raise _BudgetExhausted()

    def _search(self, board):
        find = find_empty(board)
        if not find:
            return True
        row, col = find

        for num in DIGITS:
            if is_safe(board, row, col, num):
                self._tick()
                board[row][col] = num

                if self._search(board):
                    return True

                board[row][col] = EMPTY
        return False

    def _count(self, board, limit):
        find = find_empty(board)
        if not find:
            return 1
        row, col = find

        count = 0
        for num in DIGITS:
            if is_safe(board, row, col, num):
                self._tick()
                board[row][col] = num
                count += self._count(board, limit - count)
                board[row][col] = EMPTY  # Backtrack
                if count >= limit:
                    return count
        return count


def solve(board, max_steps=None):
    """Fill `board` with a solution and return True, or leave it untouched and return False."""
    return SudokuSolver(max_steps=max_steps).solve(board)
