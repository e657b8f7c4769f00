"""The 9x9 cell matrix and the constraint queries over it.

A grid is a list of 9 rows, each a list of 9 ints. 0 is an empty cell,
1-9 are placed digits.
"""
import logging

log = logging.getLogger(__name__)

SIZE = 9
BOX = 3
EMPTY = 0
DIGITS = range(1, SIZE + 1)


class InvalidGrid(ValueError):
    """The value handed in is not a 9x9 matrix of integers 0-9."""


def empty_grid():
    return [[EMPTY for _ in range(SIZE)] for _ in range(SIZE)]


def clone_grid(grid):
    return [row[:] for row in grid]


def validate_grid(grid):
    if not isinstance(grid, list) or len(grid) != SIZE:
        raise InvalidGrid(f"Grid must be a list of {SIZE} rows")
    for r, row in enumerate(grid):
        if not isinstance(row, list) or len(row) != SIZE:
            raise InvalidGrid(f"Row {r} must be a list of {SIZE} cells")
        for c, value in enumerate(row):
            # bool is an int subclass; True would otherwise pass as 1
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidGrid(f"Cell ({r}, {c}) is {value!r}, expected an integer")
            if not EMPTY <= value <= SIZE:
                raise InvalidGrid(f"Cell ({r}, {c}) is {value}, expected 0-{SIZE}")


def is_safe(grid, row, col, num):
    """True if `num` is not already in the row, column or box of (row, col)."""
    for i in range(SIZE):
        if grid[row][i] == num or grid[i][col] == num:
            return False

    start_row = row - row % BOX
    start_col = col - col % BOX
    for i in range(start_row, start_row + BOX):
        for j in range(start_col, start_col + BOX):
            if grid[i][j] == num:
                return False

    return True


def count_clues(grid):
    return sum(1 for row in grid for value in row if value != EMPTY)


def units(grid):
    """Yield (unit, index, values) for every row, column and box."""
    for r in range(SIZE):
        yield "row", r, grid[r]
    for c in range(SIZE):
        yield "col", c, [grid[r][c] for r in range(SIZE)]
    for b in range(SIZE):
        r0 = BOX * (b // BOX)
        c0 = BOX * (b % BOX)
        yield "box", b, [grid[r0 + i][c0 + j] for i in range(BOX) for j in range(BOX)]


def find_conflicts(grid):
    conflicts = []
    for unit, index, values in units(grid):
        seen = set()
        dups = set()
        for v in values:
            if v == EMPTY:
                continue
            if v in seen:
                dups.add(v)
            seen.add(v)
        for digit in sorted(dups):
            conflicts.append({"unit": unit, "index": index, "digit": digit})
    return conflicts


def is_solved(grid):
    if any(value == EMPTY for row in grid for value in row):
        return False
    return not find_conflicts(grid)
