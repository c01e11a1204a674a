"""
Pixel storage for seam carving.

A PixelBuffer owns one (3, H0, W0) uint8 tensor allocated at construction
and never reallocated. Seam removal compacts pixels inside that tensor and
shrinks the logical size; only the sub-rectangle [:, :height, :width] is
valid. Everything beyond it is stale and must not be read.
"""

import logging

import numpy as np
import torch
from typing import Sequence, Tuple

from .errors import DegenerateImageError, MalformedSeamError

logger = logging.getLogger(__name__)


class PixelBuffer:
    """
    Fixed-capacity RGB buffer with a shrinking logical size.

    Args:
        pixels: uint8 tensor (3, H, W), channel-first. Copied.
    """

    depth = 3

    def __init__(self, pixels: torch.Tensor):
        if not isinstance(pixels, torch.Tensor):
            raise TypeError(f"Expected a torch.Tensor, got {type(pixels).__name__}")
        if pixels.dim() != 3 or pixels.shape[0] != self.depth:
            raise DegenerateImageError(
                f"Expected pixels of shape (3, H, W), got {tuple(pixels.shape)}")
        if pixels.dtype != torch.uint8:
            raise DegenerateImageError(f"Expected uint8 pixels, got {pixels.dtype}")

        _, H, W = pixels.shape
        if H < 1 or W < 1:
            raise DegenerateImageError(f"Image must be at least 1x1, got {W}x{H}")

        self._data = pixels.detach().clone().contiguous()
        self.original_height = H
        self.original_width = W
        self._height = H
        self._width = W

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Build from an (H, W, 3) uint8 array, the layout Pillow hands out."""
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != cls.depth:
            raise DegenerateImageError(
                f"Expected an array of shape (H, W, 3), got {array.shape}")
        if array.dtype != np.uint8:
            raise DegenerateImageError(f"Expected uint8 pixels, got {array.dtype}")
        return cls(torch.from_numpy(array.copy()).permute(2, 0, 1))

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def shape(self) -> Tuple[int, int, int]:
        return (self.depth, self._height, self._width)

    def __repr__(self):
        return (f"PixelBuffer({self._width}x{self._height}, "
                f"capacity={self.original_width}x{self.original_height})")

    def view(self) -> torch.Tensor:
        """Logical (3, height, width) view. Shares storage; do not write to it."""
        return self._data[:, :self._height, :self._width]

    def to_tensor(self) -> torch.Tensor:
        return self.view().clone()

    def to_array(self) -> np.ndarray:
        """Copy of the logical image as (height, width, 3) uint8."""
        return self.view().permute(1, 2, 0).contiguous().cpu().numpy()

    def _check_bounds(self, y: int, x: int):
        if not (0 <= y < self._height and 0 <= x < self._width):
            raise IndexError(
                f"Pixel ({y}, {x}) outside logical size {self._height}x{self._width}")

    def get_pixel(self, y: int, x: int) -> Tuple[int, int, int]:
        self._check_bounds(y, x)
        return tuple(int(v) for v in self._data[:, y, x].tolist())

    def set_pixel(self, y: int, x: int, value: Sequence[int]):
        self._check_bounds(y, x)
        if len(value) != self.depth:
            raise ValueError(f"Expected {self.depth} channel values, got {len(value)}")
        self._data[:, y, x] = torch.tensor(value, dtype=torch.uint8)

    def _valid_indices(self, seam: torch.Tensor, limit: int, strict: bool):
        indices = [int(v) for v in seam.tolist()]
        bad = [i for i, v in enumerate(indices) if not 0 <= v < limit]
        if bad and strict:
            raise MalformedSeamError(
                f"Seam index out of range [0, {limit}) at position(s) {bad[:5]}")
        return indices

    def remove_vertical_seam(self, seam: torch.Tensor, strict: bool = False):
        """
        Delete one pixel per row, shifting the rest of each row left.

        Args:
            seam: (height,) column index per row
            strict: raise on out-of-range indices instead of skipping the row
        """
        H, W = self._height, self._width
        if seam.dim() != 1 or seam.shape[0] != H:
            raise MalformedSeamError(
                f"Vertical seam must have length {H}, got {tuple(seam.shape)}")

        indices = self._valid_indices(seam, W, strict)
        for y, x in enumerate(indices):
            if not 0 <= x < W:
                logger.debug("Skipping out-of-range seam column %d at row %d", x, y)
                continue
            # Source and destination overlap, copy the tail first
            self._data[:, y, x:W - 1] = self._data[:, y, x + 1:W].clone()

        self._width -= 1

    def remove_horizontal_seam(self, seam: torch.Tensor, strict: bool = False):
        """
        Delete one pixel per column, shifting the rest of each column up.

        Args:
            seam: (width,) row index per column
            strict: raise on out-of-range indices instead of skipping the column
        """
        H, W = self._height, self._width
        if seam.dim() != 1 or seam.shape[0] != W:
            raise MalformedSeamError(
                f"Horizontal seam must have length {W}, got {tuple(seam.shape)}")

        indices = self._valid_indices(seam, H, strict)
        for x, y in enumerate(indices):
            if not 0 <= y < H:
                logger.debug("Skipping out-of-range seam row %d at column %d", y, x)
                continue
            self._data[:, y:H - 1, x] = self._data[:, y + 1:H, x].clone()

        self._height -= 1
