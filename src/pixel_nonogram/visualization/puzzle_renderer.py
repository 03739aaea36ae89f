from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from pixel_nonogram.schemas.nonogram import NonogramPuzzle
from pixel_nonogram.utils.config import settings

SUPPORTED_FORMATS = {".png": "png", ".pdf": "pdf"}

# Sheet geometry, in inches
CELL_INCHES = 0.3
SHEET_PADDING = 0.5

FILLED_COLOR = "#1f2937"
EMPTY_COLOR = "white"
GRID_LINE_COLOR = "#d1d5db"
MAJOR_LINE_COLOR = "#6b7280"
CLUE_BACKGROUND = "#f9fafb"
CLUE_TEXT_COLOR = "#374151"
MAJOR_LINE_EVERY = 5


def clue_margins(puzzle: NonogramPuzzle):
    row_depth = max(len(clue) for clue in puzzle.clues.row_clues)
    col_depth = max(len(clue) for clue in puzzle.clues.col_clues)
    return row_depth, col_depth


def draw_clues(ax, puzzle: NonogramPuzzle, row_depth: int, col_depth: int, fontsize: float):
    # Column clues sit above the grid, last number nearest the grid
    for x, clue in enumerate(puzzle.clues.col_clues):
        ax.add_patch(Rectangle((x, -col_depth), 1, col_depth, facecolor=CLUE_BACKGROUND,
                               edgecolor=GRID_LINE_COLOR, linewidth=0.5))
        for i, number in enumerate(reversed(clue)):
            ax.text(x + 0.5, -0.5 - i, str(number), ha="center", va="center",
                    fontsize=fontsize, color=CLUE_TEXT_COLOR)

    # Row clues sit left of the grid, last number nearest the grid
    for y, clue in enumerate(puzzle.clues.row_clues):
        ax.add_patch(Rectangle((-row_depth, y), row_depth, 1, facecolor=CLUE_BACKGROUND,
                               edgecolor=GRID_LINE_COLOR, linewidth=0.5))
        for i, number in enumerate(reversed(clue)):
            ax.text(-0.5 - i, y + 0.5, str(number), ha="center", va="center",
                    fontsize=fontsize, color=CLUE_TEXT_COLOR)


def draw_grid(ax, puzzle: NonogramPuzzle, show_solution: bool):
    for y, row in enumerate(puzzle.grid):
        for x, cell in enumerate(row):
            color = FILLED_COLOR if (show_solution and cell.filled) else EMPTY_COLOR
            ax.add_patch(Rectangle((x, y), 1, 1, facecolor=color,
                                   edgecolor=GRID_LINE_COLOR, linewidth=0.5))

    for x in range(0, puzzle.columns + 1, MAJOR_LINE_EVERY):
        ax.plot([x, x], [0, puzzle.rows], color=MAJOR_LINE_COLOR, linewidth=1.2)
    for y in range(0, puzzle.rows + 1, MAJOR_LINE_EVERY):
        ax.plot([0, puzzle.columns], [y, y], color=MAJOR_LINE_COLOR, linewidth=1.2)

    ax.add_patch(Rectangle((0, 0), puzzle.columns, puzzle.rows, fill=False,
                           edgecolor=MAJOR_LINE_COLOR, linewidth=1.5))


def render_puzzle(
    puzzle: NonogramPuzzle,
    path,
    show_solution: bool = True,
    dpi: Optional[int] = None
) -> Path:
    """
    Renders the puzzle sheet (clues plus grid) to a PNG or PDF, chosen by the
    file suffix. Returns the written path.
    """
    path = Path(path)
    fmt = SUPPORTED_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise ValueError(f"Unsupported export format '{path.suffix}'. Use .png or .pdf")

    path.parent.mkdir(parents=True, exist_ok=True)

    row_depth, col_depth = clue_margins(puzzle)
    total_w = puzzle.columns + row_depth
    total_h = puzzle.rows + col_depth

    fig, ax = plt.subplots(figsize=(total_w * CELL_INCHES + SHEET_PADDING,
                                    total_h * CELL_INCHES + SHEET_PADDING))
    fontsize = CELL_INCHES * 72 * 0.45

    draw_clues(ax, puzzle, row_depth, col_depth, fontsize)
    draw_grid(ax, puzzle, show_solution)

    ax.set_xlim(-row_depth, puzzle.columns)
    ax.set_ylim(puzzle.rows, -col_depth)
    ax.set_aspect("equal")
    ax.axis("off")

    fig.savefig(path, format=fmt, dpi=dpi or settings.RENDER_DPI, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    return path
