from typing import List, Tuple

import numpy as np

from pixel_nonogram.core.errors import InvalidDimensions
from pixel_nonogram.core.image import ImageSamples
from pixel_nonogram.schemas.nonogram import NonogramCell

BACKGROUND_VALUE = 255.0
BRIGHTNESS_THRESHOLD = 128
# Float noise from coverage weights is rounded away before 8-bit truncation
CANVAS_ROUNDING_DECIMALS = 6


class Placement:
    """Where the scaled image lands on the canvas."""

    def __init__(self, scale: float, offset_x: float, offset_y: float, scaled_width: float, scaled_height: float):
        self.scale = scale
        self.offset_x = offset_x
        self.offset_y = offset_y
        self.scaled_width = scaled_width
        self.scaled_height = scaled_height

    def __repr__(self):
        return (
            f"Placement(scale={self.scale:.4f}, offset=({self.offset_x:.2f}, {self.offset_y:.2f}), "
            f"size=({self.scaled_width:.2f}, {self.scaled_height:.2f}))"
        )


def validate_dimensions(columns, rows):
    for name, value in (("columns", columns), ("rows", rows)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidDimensions(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise InvalidDimensions(f"{name} must be positive, got {value}")


def compute_placement(image_width: int, image_height: int, columns: int, rows: int) -> Placement:
    scale = min(columns / image_width, rows / image_height)
    scaled_width = image_width * scale
    scaled_height = image_height * scale
    return Placement(
        scale=scale,
        offset_x=(columns - scaled_width) / 2,
        offset_y=(rows - scaled_height) / 2,
        scaled_width=scaled_width,
        scaled_height=scaled_height,
    )


def coverage_weights(source_len: int, target_len: int, scale: float, offset: float) -> np.ndarray:
    """
    Overlap between each target pixel [t, t + 1) and each scaled source
    pixel [offset + i * scale, offset + (i + 1) * scale).
    Returns a (target_len, source_len) matrix; row sums are the covered fraction.
    """
    edges = offset + np.arange(source_len + 1, dtype=np.float64) * scale
    targets = np.arange(target_len, dtype=np.float64)[:, np.newaxis]

    lo = np.maximum(edges[np.newaxis, :-1], targets)
    hi = np.minimum(edges[np.newaxis, 1:], targets + 1.0)
    return np.clip(hi - lo, 0.0, None)


def render_canvas(image: ImageSamples, columns: int, rows: int) -> np.ndarray:
    """
    Draws the image fit-to-box and centered on a white columns x rows canvas
    using area-averaging resampling. Returns uint8 samples, shape (rows, columns, 3).
    """
    placement = compute_placement(image.width, image.height, columns, rows)

    weights_x = coverage_weights(image.width, columns, placement.scale, placement.offset_x)
    weights_y = coverage_weights(image.height, rows, placement.scale, placement.offset_y)

    pixels = image.pixels.astype(np.float64)
    drawn = np.einsum("yh,hwc,xw->yxc", weights_y, pixels, weights_x, optimize=True)

    coverage = np.outer(weights_y.sum(axis=1), weights_x.sum(axis=1))
    background = (1.0 - coverage)[:, :, np.newaxis] * BACKGROUND_VALUE

    canvas = np.round(drawn + background, CANVAS_ROUNDING_DECIMALS)
    return np.floor(np.clip(canvas, 0.0, BACKGROUND_VALUE)).astype(np.uint8)


def brightness(color: Tuple[int, int, int]) -> float:
    r, g, b = color
    return (int(r) + int(g) + int(b)) / 3


def is_filled(color: Tuple[int, int, int]) -> bool:
    return brightness(color) < BRIGHTNESS_THRESHOLD


def quantize(image: ImageSamples, columns: int, rows: int) -> List[List[NonogramCell]]:
    validate_dimensions(columns, rows)
    canvas = render_canvas(image, columns, rows)

    grid = []
    for y in range(rows):
        row = []
        for x in range(columns):
            r, g, b = canvas[y, x]
            color = (int(r), int(g), int(b))
            row.append(NonogramCell(filled=is_filled(color), source_color=color))
        grid.append(row)

    return grid
