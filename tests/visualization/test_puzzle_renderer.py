from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from matplotlib.colors import to_rgba
from matplotlib.patches import Rectangle

from pixel_nonogram.core.image import ImageSamples
from pixel_nonogram.core.pipeline import build_puzzle
from pixel_nonogram.visualization.puzzle_renderer import (
    FILLED_COLOR,
    clue_margins,
    render_puzzle,
)


@pytest.fixture
def puzzle():
    pixels = [[(0, 0, 0), (255, 255, 255), (0, 0, 0)]]
    return build_puzzle(ImageSamples.from_rows(pixels), 6, 5)


def drawn_facecolors(ax: MagicMock):
    return [
        c.args[0].get_facecolor()
        for c in ax.add_patch.call_args_list
        if isinstance(c.args[0], Rectangle)
    ]


def test_clue_margins(puzzle):
    row_depth, col_depth = clue_margins(puzzle)
    assert row_depth == max(len(c) for c in puzzle.clues.row_clues)
    assert col_depth == max(len(c) for c in puzzle.clues.col_clues)


def test_render_png(puzzle, tmp_path: Path):
    out = render_puzzle(puzzle, tmp_path / "sheets" / "puzzle.png", dpi=50)
    assert out.exists()
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_render_pdf(puzzle, tmp_path: Path):
    out = render_puzzle(puzzle, tmp_path / "puzzle.PDF", dpi=50)
    assert out.read_bytes()[:4] == b"%PDF"


def test_unsupported_format(puzzle, tmp_path: Path):
    with pytest.raises(ValueError, match="Unsupported export format"):
        render_puzzle(puzzle, tmp_path / "puzzle.svg")
    assert not (tmp_path / "puzzle.svg").exists()


def test_solution_cells_are_dark(mocker: Any, puzzle, tmp_path: Path):
    mock_plt = mocker.patch("pixel_nonogram.visualization.puzzle_renderer.plt")
    mock_fig, mock_ax = MagicMock(), MagicMock()
    mock_plt.subplots.return_value = (mock_fig, mock_ax)

    render_puzzle(puzzle, tmp_path / "solved.png")

    filled = sum(cell.filled for row in puzzle.grid for cell in row)
    assert drawn_facecolors(mock_ax).count(to_rgba(FILLED_COLOR)) == filled
    mock_fig.savefig.assert_called_once()
    mock_plt.close.assert_called_once_with(mock_fig)


def test_blank_sheet_hides_solution(mocker: Any, puzzle, tmp_path: Path):
    mock_plt = mocker.patch("pixel_nonogram.visualization.puzzle_renderer.plt")
    mock_fig, mock_ax = MagicMock(), MagicMock()
    mock_plt.subplots.return_value = (mock_fig, mock_ax)

    render_puzzle(puzzle, tmp_path / "blank.png", show_solution=False)

    assert to_rgba(FILLED_COLOR) not in drawn_facecolors(mock_ax)
    texts = [c.args[2] for c in mock_ax.text.call_args_list]
    expected = sum(len(c) for c in puzzle.clues.row_clues + puzzle.clues.col_clues)
    assert len(texts) == expected
