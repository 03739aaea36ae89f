import sys
from pathlib import Path
from typing import Annotated, List, Optional

import msgspec
import typer
from rich.console import Console
from rich.markup import escape

from pixel_nonogram.core.clues import derive_clues
from pixel_nonogram.core.errors import NonogramError
from pixel_nonogram.core.pipeline import build_puzzle, clamp_dimension, suggest_rows
from pixel_nonogram.data.loader import load_image, load_text_grid
from pixel_nonogram.schemas.nonogram import NonogramClues, NonogramPuzzle
from pixel_nonogram.utils.config import settings
from pixel_nonogram.visualization.puzzle_renderer import render_puzzle

app = typer.Typer(help="Pixel Nonogram: turn any picture into a picross puzzle.")
console = Console()

CYAN_STYLE = "cyan"
GREEN_STYLE = "green"
RED_STYLE = "red"
YELLOW_STYLE = "yellow"
BOLD_STYLE = "bold"
DIM_STYLE = "dim"

DISPLAY_SYMBOL_FILLED = "█ "
DISPLAY_SYMBOL_EMPTY = "· "
CLUE_SEPARATOR = " "
MIN_SLOT_WIDTH = 2


def resolve_dimensions(image_width, image_height, columns, rows, quiet=False):
    """
    Clamps requested dimensions to the interactive range and fills in the row
    count from the image aspect ratio when none was given.
    """
    requested_columns = settings.DEFAULT_COLUMNS if columns is None else columns
    final_columns = clamp_dimension(requested_columns)
    if final_columns != requested_columns and not quiet:
        console.print(f"[{YELLOW_STYLE}]Columns clamped to {final_columns} "
                      f"(allowed {settings.MIN_GRID_SIZE}-{settings.MAX_GRID_SIZE}).[/{YELLOW_STYLE}]")

    if rows is None:
        final_rows = suggest_rows(image_width, image_height, final_columns)
        if not quiet:
            console.print(f"[{DIM_STYLE}]No row count given. Using {final_rows} to keep the aspect ratio.[/{DIM_STYLE}]")
    else:
        final_rows = clamp_dimension(rows)
        if final_rows != rows and not quiet:
            console.print(f"[{YELLOW_STYLE}]Rows clamped to {final_rows} "
                          f"(allowed {settings.MIN_GRID_SIZE}-{settings.MAX_GRID_SIZE}).[/{YELLOW_STYLE}]")

    return final_columns, final_rows


def format_clue(clue):
    return CLUE_SEPARATOR.join(str(n) for n in clue)


def display_clues(clues: NonogramClues):
    console.print(f"\n[{BOLD_STYLE}]Puzzle Clues:[/{BOLD_STYLE}]")
    console.print(f"[{DIM_STYLE}]Rows: {clues.row_clues}[/{DIM_STYLE}]")
    console.print(f"[{DIM_STYLE}]Columns: {clues.col_clues}[/{DIM_STYLE}]")


def display_puzzle(matrix, clues: NonogramClues):
    """Column clues stacked above the grid, row clues to its left."""
    row_labels = [format_clue(clue) for clue in clues.row_clues]
    label_width = max(len(label) for label in row_labels)
    col_depth = max(len(clue) for clue in clues.col_clues)
    shown_columns = min(len(clues.col_clues), settings.MAX_GRID_SIZE)
    # Each column slot fits its widest clue number plus a space
    slot = max(MIN_SLOT_WIDTH, max(len(str(n)) for clue in clues.col_clues for n in clue) + 1)
    filled_symbol = DISPLAY_SYMBOL_FILLED.ljust(slot)
    empty_symbol = DISPLAY_SYMBOL_EMPTY.ljust(slot)

    console.print()
    for level in range(col_depth):
        cells = ""
        for clue in clues.col_clues[:shown_columns]:
            pad = col_depth - len(clue)
            cells += f"{clue[level - pad]:<{slot}}" if level >= pad else " " * slot
        console.print(f"{' ' * label_width} │ [{CYAN_STYLE}]{cells}[/{CYAN_STYLE}]", highlight=False, soft_wrap=True)

    console.print(f"{'─' * label_width}─┼─" + "─" * slot * shown_columns, style=DIM_STYLE, soft_wrap=True)

    for label, row in zip(row_labels, matrix):
        row_str = ""
        for cell in row[:shown_columns]:
            row_str += f"[{BOLD_STYLE} {CYAN_STYLE}]{filled_symbol}[/]" if cell else f"[{DIM_STYLE}]{empty_symbol}[/]"
        console.print(f"{label.rjust(label_width)} │ {row_str}", highlight=False, soft_wrap=True)

    if shown_columns < len(clues.col_clues):
        console.print(f"[{DIM_STYLE}]Display truncated to {shown_columns} of {len(clues.col_clues)} columns.[/{DIM_STYLE}]")


def export_sheets(puzzle: NonogramPuzzle, targets: List[Path], show_solution: bool):
    written = []
    for target in targets:
        if not target.is_absolute() and target.parent == Path("."):
            target = settings.EXPORT_DIR / target
        written.append(render_puzzle(puzzle, target, show_solution=show_solution))
        console.print(f"[{GREEN_STYLE}]✓ Exported: {written[-1]}[/{GREEN_STYLE}]")
    return written


@app.command()
def generate(
    image_path: Annotated[Path, typer.Argument(help="Image to convert")],
    columns: Annotated[Optional[int], typer.Option(help="Grid columns")] = None,
    rows: Annotated[Optional[int], typer.Option(help="Grid rows (defaults to the image aspect ratio)")] = None,
    export: Annotated[Optional[List[Path]], typer.Option(help="Write a .png or .pdf sheet; repeatable")] = None,
    blank: bool = typer.Option(False, help="Export an unsolved sheet (clues only)"),
    as_json: bool = typer.Option(False, "--json", help="Print the puzzle as JSON"),
):
    try:
        image = load_image(image_path)
        final_columns, final_rows = resolve_dimensions(image.width, image.height, columns, rows, quiet=as_json)
        puzzle = build_puzzle(image, final_columns, final_rows)
    except (OSError, NonogramError) as e:
        console.print(f"[{BOLD_STYLE} {RED_STYLE}]Error:[/{BOLD_STYLE} {RED_STYLE}] {escape(str(e))}", highlight=False)
        sys.exit(1)

    if as_json:
        typer.echo(msgspec.json.encode(puzzle).decode("utf-8"))
        return puzzle

    console.print(f"[{BOLD_STYLE} {GREEN_STYLE}]Nonogram generated ({puzzle.columns}x{puzzle.rows}) "
                  f"from {image.width}x{image.height} image.[/{BOLD_STYLE} {GREEN_STYLE}]")
    display_puzzle(puzzle.filled_matrix(), puzzle.clues)

    if export:
        try:
            export_sheets(puzzle, export, show_solution=not blank)
        except (OSError, ValueError) as e:
            console.print(f"[{BOLD_STYLE} {RED_STYLE}]Export failed:[/{BOLD_STYLE} {RED_STYLE}] {escape(str(e))}", highlight=False)
            sys.exit(1)

    return puzzle


@app.command()
def clues(
    grid_path: Annotated[Path, typer.Argument(help="Text grid: '#' filled, '.' empty, one row per line")]
):
    try:
        matrix = load_text_grid(grid_path)
        result = derive_clues(matrix)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[{BOLD_STYLE} {RED_STYLE}]Error:[/{BOLD_STYLE} {RED_STYLE}] {escape(str(e))}", highlight=False)
        sys.exit(1)

    display_clues(result)
    display_puzzle(matrix, result)
    return result


def main():
    app()


if __name__ == "__main__":
    main()
