import math

from pixel_nonogram.core.clues import derive_clues
from pixel_nonogram.core.image import ImageSamples
from pixel_nonogram.core.quantizer import quantize
from pixel_nonogram.schemas.nonogram import NonogramPuzzle
from pixel_nonogram.utils.config import settings


def clamp_dimension(value: int, lower: int = None, upper: int = None) -> int:
    lower = settings.MIN_GRID_SIZE if lower is None else lower
    upper = settings.MAX_GRID_SIZE if upper is None else upper
    return max(lower, min(upper, int(value)))


def suggest_rows(image_width: int, image_height: int, columns: int) -> int:
    """Row count that keeps the source aspect ratio for the given column count."""
    return clamp_dimension(math.floor(columns * image_height / image_width + 0.5))


def build_puzzle(image: ImageSamples, columns: int, rows: int) -> NonogramPuzzle:
    grid = quantize(image, columns, rows)
    clues = derive_clues(grid)
    return NonogramPuzzle(columns=columns, rows=rows, grid=grid, clues=clues)
