import itertools
from typing import List, Sequence

from pixel_nonogram.core.errors import MalformedGrid
from pixel_nonogram.schemas.nonogram import NonogramClues

EMPTY_LINE_CLUE = [0]


def derive_line_clue(line: Sequence[bool]) -> List[int]:
    """Run lengths of filled cells in reading order; an empty line reads as [0]."""
    runs = [len(list(group)) for filled, group in itertools.groupby(bool(cell) for cell in line) if filled]
    return runs or list(EMPTY_LINE_CLUE)


def filled_lines(grid) -> List[List[bool]]:
    if not grid:
        raise MalformedGrid("Grid has no rows")

    matrix = [[bool(getattr(cell, "filled", cell)) for cell in row] for row in grid]

    width = len(matrix[0])
    if width == 0:
        raise MalformedGrid("Grid rows are empty")
    for index, row in enumerate(matrix):
        if len(row) != width:
            raise MalformedGrid(f"Row {index} has {len(row)} cells, expected {width}")

    return matrix


def derive_clues(grid) -> NonogramClues:
    """
    Accepts a grid of NonogramCell (or plain booleans) and returns the clue
    sequences for every row (left to right) and column (top to bottom).
    """
    matrix = filled_lines(grid)

    row_clues = [derive_line_clue(row) for row in matrix]
    col_clues = [derive_line_clue(column) for column in zip(*matrix)]

    return NonogramClues(row_clues=row_clues, col_clues=col_clues)
