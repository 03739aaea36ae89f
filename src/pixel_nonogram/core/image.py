from typing import Sequence, Tuple

import numpy as np

from pixel_nonogram.core.errors import DegenerateImage

CHANNELS = 3
MIN_SAMPLE = 0
MAX_SAMPLE = 255


class ImageSamples:
    """
    Read-only RGB sample buffer, shape (height, width, 3), addressed by (x, y).
    The caller's array is copied so later mutations never leak in.
    """

    def __init__(self, pixels):
        data = np.array(pixels)

        if data.ndim == 2:
            data = np.repeat(data[:, :, np.newaxis], CHANNELS, axis=2)

        if data.ndim != 3 or data.shape[2] != CHANNELS:
            raise ValueError(f"Expected an (height, width, 3) sample array, got shape {data.shape}")

        if data.shape[0] == 0 or data.shape[1] == 0:
            raise DegenerateImage(f"Image must be at least 1x1, got {data.shape[1]}x{data.shape[0]}")

        if data.dtype != np.uint8:
            if np.any(data < MIN_SAMPLE) or np.any(data > MAX_SAMPLE):
                raise ValueError("Sample values must be within [0, 255]")
            data = data.astype(np.uint8)

        data.setflags(write=False)
        self._pixels = data

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Tuple[int, int, int]]]) -> "ImageSamples":
        if len(rows) == 0:
            raise DegenerateImage("Image must be at least 1x1, got no rows")
        return cls(np.array(rows, dtype=np.int64).reshape(len(rows), -1, CHANNELS))

    @classmethod
    def solid(cls, width: int, height: int, color: Tuple[int, int, int]) -> "ImageSamples":
        return cls(np.full((height, width, CHANNELS), color, dtype=np.uint8))

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    def sample(self, x: int, y: int) -> Tuple[int, int, int]:
        r, g, b = self._pixels[y, x]
        return int(r), int(g), int(b)

    def __repr__(self):
        return f"ImageSamples(width={self.width}, height={self.height})"
