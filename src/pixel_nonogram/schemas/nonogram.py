from typing import List, Tuple

import msgspec


class NonogramCell(msgspec.Struct, frozen=True):
    filled: bool
    source_color: Tuple[int, int, int] = (255, 255, 255)


class NonogramClues(msgspec.Struct):
    row_clues: List[List[int]]
    col_clues: List[List[int]]


class NonogramPuzzle(msgspec.Struct):
    columns: int
    rows: int
    grid: List[List[NonogramCell]]
    clues: NonogramClues

    def filled_matrix(self) -> List[List[bool]]:
        return [[cell.filled for cell in row] for row in self.grid]
