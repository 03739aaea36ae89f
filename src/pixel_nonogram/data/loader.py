from pathlib import Path
from typing import List

import numpy as np
from PIL import Image

from pixel_nonogram.core.errors import MalformedGrid
from pixel_nonogram.core.image import ImageSamples

BACKGROUND_RGBA = (255, 255, 255, 255)

FILLED_SYMBOLS = set("#Xx1█")
EMPTY_SYMBOLS = set(".0-·_")


def load_image(path) -> ImageSamples:
    """
    Decodes an image file into RGB samples. Transparent areas are composited
    over white, the same background the quantizer letterboxes with.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image missing at {path}")

    with Image.open(path) as img:
        img.load()
        if img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info:
            rgba = img.convert("RGBA")
            background = Image.new("RGBA", rgba.size, BACKGROUND_RGBA)
            rgb = Image.alpha_composite(background, rgba).convert("RGB")
        else:
            rgb = img.convert("RGB")

    return ImageSamples(np.asarray(rgb))


def parse_text_grid(text: str) -> List[List[bool]]:
    grid = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped:
            continue

        row = []
        for char in stripped:
            if char in FILLED_SYMBOLS:
                row.append(True)
            elif char in EMPTY_SYMBOLS:
                row.append(False)
            else:
                raise ValueError(f"Line {line_no}: unknown grid symbol {char!r}")
        grid.append(row)

    if not grid:
        raise MalformedGrid("Grid file contains no rows")

    width = len(grid[0])
    if any(len(row) != width for row in grid):
        raise MalformedGrid("Grid rows must all have the same length")

    return grid


def load_text_grid(path) -> List[List[bool]]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Grid file missing at {path}")
    return parse_text_grid(path.read_text(encoding="utf-8"))
