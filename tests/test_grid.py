# tests/test_grid.py
import pytest

from grid import (InvalidGrid, clone_grid, count_clues, empty_grid, find_conflicts,
                  is_safe, is_solved, validate_grid)


def test_is_safe_rejects_row_column_and_box(puzzle):
    # r0c2 is empty: 5 and 3 are in the row, 8 in the column, 9 and 6 in the box
    for num in (5, 3, 7, 8, 9, 6):
        assert not is_safe(puzzle, 0, 2, num)
    assert is_safe(puzzle, 0, 2, 1)
    assert is_safe(puzzle, 0, 2, 4)


def test_is_safe_has_no_side_effects(puzzle):
    before = clone_grid(puzzle)
    is_safe(puzzle, 4, 4, 5)
    assert puzzle == before


def test_validate_accepts_well_formed_grids(puzzle, solution):
    validate_grid(empty_grid())
    validate_grid(puzzle)
    validate_grid(solution)


@pytest.mark.parametrize("bad", [
    None,
    [],
    [[0] * 9] * 8,
    [[0] * 8 for _ in range(9)],
    [[0] * 9 for _ in range(8)] + [[0] * 8 + [10]],
    [[0] * 9 for _ in range(8)] + [[0] * 8 + [-1]],
    [[0] * 9 for _ in range(8)] + [[0] * 8 + ["5"]],
    [[0] * 9 for _ in range(8)] + [[0] * 8 + [True]],
    [[0] * 9 for _ in range(8)] + [(0,) * 9],
])
def test_validate_rejects_malformed_grids(bad):
    with pytest.raises(InvalidGrid):
        validate_grid(bad)


def test_find_conflicts_reports_each_unit(puzzle):
    assert find_conflicts(puzzle) == []
    puzzle[0][2] = 5  # same row and box as r0c0
    conflicts = find_conflicts(puzzle)
    assert {"unit": "row", "index": 0, "digit": 5} in conflicts
    assert {"unit": "box", "index": 0, "digit": 5} in conflicts
    assert all(c["unit"] != "col" for c in conflicts)


def test_is_solved(puzzle, solution):
    assert is_solved(solution)
    assert not is_solved(puzzle)
    solution[0][0], solution[0][1] = solution[0][1], solution[0][0]
    assert not is_solved(solution)


def test_count_clues(puzzle, solution):
    assert count_clues(empty_grid()) == 0
    assert count_clues(puzzle) == 30
    assert count_clues(solution) == 81
