"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

We use the dual-gradient energy: squared color differences between
opposite neighbors, summed over channels and over both axes.
"""

import torch
from typing import Union

from .buffer import PixelBuffer
from .errors import DegenerateImageError


def dual_gradient_energy(pixels: Union[PixelBuffer, torch.Tensor]) -> torch.Tensor:
    """
    Compute dual-gradient energy for an RGB image.

    E(y,x) = sum_c (I(y,x+1) - I(y,x-1))^2 + sum_c (I(y+1,x) - I(y-1,x))^2

    Neighbors wrap around the image edges, so the left neighbor of column 0
    is column W-1 and the upper neighbor of row 0 is row H-1. Differences
    are taken in int64, which holds any squared 8-bit difference.

    Energy is recomputed from scratch after every seam removal rather than
    updated locally.

    Args:
        pixels: PixelBuffer, or image tensor (C, H, W)

    Returns:
        Energy map (H, W), float64, non-negative
    """
    if isinstance(pixels, PixelBuffer):
        pixels = pixels.view()

    if pixels.dim() != 3 or pixels.shape[1] < 1 or pixels.shape[2] < 1:
        raise DegenerateImageError(
            f"Expected a non-empty (C, H, W) image, got {tuple(pixels.shape)}")

    image = pixels.to(torch.int64)

    # torch.roll(shifts=-1) brings the right/lower neighbor into place
    dx = torch.roll(image, shifts=-1, dims=2) - torch.roll(image, shifts=1, dims=2)
    dy = torch.roll(image, shifts=-1, dims=1) - torch.roll(image, shifts=1, dims=1)

    energy = (dx * dx).sum(dim=0) + (dy * dy).sum(dim=0)

    return energy.to(torch.float64)
