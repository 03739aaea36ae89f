import random

import pytest

from pixel_nonogram.core.clues import derive_clues, derive_line_clue
from pixel_nonogram.core.errors import MalformedGrid
from pixel_nonogram.schemas.nonogram import NonogramCell


def cells(pattern: str):
    return [[NonogramCell(filled=ch == "#") for ch in line] for line in pattern.split()]


class TestLineClue:
    def test_trailing_run_is_flushed(self):
        assert derive_line_clue([True, True, True, True]) == [4]

    def test_empty_line_reads_as_zero(self):
        assert derive_line_clue([False] * 6) == [0]
        assert derive_line_clue([]) == [0]

    def test_runs_in_reading_order(self):
        assert derive_line_clue([True, False, True, True, False, False, True]) == [1, 2, 1]

    def test_leading_gap_is_ignored(self):
        assert derive_line_clue([False, False, True, True, False]) == [2]

    def test_returns_fresh_list_for_empty_lines(self):
        first = derive_line_clue([False])
        first.append(9)
        assert derive_line_clue([False]) == [0]


class TestDeriveClues:
    def test_rows_and_columns(self):
        clues = derive_clues(cells("""
            ##.#
            ....
            #.##
        """))
        assert clues.row_clues == [[2, 1], [0], [1, 2]]
        assert clues.col_clues == [[1, 1], [1], [1], [1, 1]]

    def test_fully_filled_grid(self):
        clues = derive_clues(cells("#####\n" * 5))
        assert clues.row_clues == [[5]] * 5
        assert clues.col_clues == [[5]] * 5

    def test_fully_empty_grid(self):
        clues = derive_clues(cells(".....\n" * 5))
        assert clues.row_clues == [[0]] * 5
        assert clues.col_clues == [[0]] * 5

    def test_accepts_plain_booleans(self):
        clues = derive_clues([[True, False], [True, True]])
        assert clues.row_clues == [[1], [2]]
        assert clues.col_clues == [[2], [1]]

    def test_clue_totals_match_filled_counts(self):
        rng = random.Random(1234)
        for _ in range(50):
            rows, columns = rng.randint(1, 12), rng.randint(1, 12)
            grid = [[rng.random() < 0.45 for _ in range(columns)] for _ in range(rows)]
            clues = derive_clues(grid)

            for row, clue in zip(grid, clues.row_clues):
                assert clue
                assert sum(clue) == sum(row)
            for c, clue in enumerate(clues.col_clues):
                assert clue
                assert sum(clue) == sum(row[c] for row in grid)

    def test_empty_grid_is_rejected(self):
        with pytest.raises(MalformedGrid, match="no rows"):
            derive_clues([])

    def test_ragged_grid_is_rejected(self):
        with pytest.raises(MalformedGrid, match="Row 1"):
            derive_clues([[True, False], [True]])

    def test_zero_width_grid_is_rejected(self):
        with pytest.raises(MalformedGrid):
            derive_clues([[], []])
