"""
Seam computation and removal.

Seams are found with exact dynamic programming over the pixel grid
(Avidan & Shamir 2007). A vertical seam holds one column index per row,
a horizontal seam one row index per column; consecutive entries differ
by at most one.
"""

import logging

import torch

from .buffer import PixelBuffer
from .errors import DegenerateImageError

logger = logging.getLogger(__name__)

DIRECTIONS = ('vertical', 'horizontal')


def _check_direction(direction: str):
    if direction not in DIRECTIONS:
        raise ValueError(f"Invalid direction: {direction}")


def _vertical_dp(energy: torch.Tensor) -> torch.Tensor:
    H, W = energy.shape
    device = energy.device

    cost = energy.to(torch.float64)
    dist = torch.empty((H, W), dtype=torch.float64, device=device)
    back = torch.full((H, W), -1, dtype=torch.long, device=device)
    dist[0] = cost[0]

    cols = torch.arange(W, device=device)
    has_left = cols > 0
    has_right = cols < W - 1

    for i in range(1, H):
        prev = dist[i - 1]
        left = torch.full_like(prev, float('inf'))
        left[1:] = prev[:-1]
        right = torch.full_like(prev, float('inf'))
        right[:-1] = prev[1:]

        # Candidates in order left, straight, right; earlier wins ties
        best_val = prev
        best_col = cols
        take = has_left & (left <= best_val)
        best_val = torch.where(take, left, best_val)
        best_col = torch.where(take, cols - 1, best_col)
        take = has_right & (right < best_val)
        best_val = torch.where(take, right, best_val)
        best_col = torch.where(take, cols + 1, best_col)

        dist[i] = cost[i] + best_val
        back[i] = best_col

    # argmin returns the first minimum, i.e. the smallest column
    col = int(torch.argmin(dist[H - 1]).item())

    seam = torch.empty(H, dtype=torch.long)
    seam[H - 1] = col
    back = back.cpu()
    for i in range(H - 1, 0, -1):
        col = int(back[i, col])
        seam[i - 1] = col

    return seam.to(device)


def dp_seam(energy: torch.Tensor, direction: str = 'vertical') -> torch.Tensor:
    """
    Compute a minimum total-energy seam with dynamic programming.

    For vertical seams:
        M[0, j] = E[0, j]
        M[i, j] = E[i, j] + min(M[i-1, j-1], M[i-1, j], M[i-1, j+1])

    Neighbors outside the grid are omitted (no wraparound). Ties between
    predecessors go to the lowest index, as do ties in the last row. The
    horizontal case is the same recurrence on the transposed energy map.

    Args:
        energy: Energy map (H, W)
        direction: 'vertical' or 'horizontal'

    Returns:
        Seam indices - for vertical: (H,) with column index per row
                      for horizontal: (W,) with row index per column
    """
    _check_direction(direction)
    if energy.dim() != 2 or energy.shape[0] < 1 or energy.shape[1] < 1:
        raise DegenerateImageError(
            f"Expected a non-empty (H, W) energy map, got {tuple(energy.shape)}")

    if direction == 'vertical':
        return _vertical_dp(energy)
    return _vertical_dp(energy.t())


def seam_energy(energy: torch.Tensor, seam: torch.Tensor,
                direction: str = 'vertical') -> float:
    """Total energy of the pixels on a seam."""
    _check_direction(direction)
    steps = torch.arange(seam.shape[0], device=energy.device)
    if direction == 'vertical':
        return float(energy[steps, seam].sum().item())
    return float(energy[seam, steps].sum().item())


def is_connected(seam: torch.Tensor) -> bool:
    """True if consecutive seam indices differ by at most one."""
    if seam.shape[0] < 2:
        return True
    return bool((seam[1:] - seam[:-1]).abs().max().item() <= 1)


def remove_seam(buffer: PixelBuffer, seam: torch.Tensor,
                direction: str = 'vertical', strict: bool = False) -> PixelBuffer:
    """
    Remove a seam from a buffer in place.

    Pixels past the seam shift by one toward it and the logical width
    (vertical) or height (horizontal) drops by one. No new storage is
    allocated.

    Out-of-range seam indices are skipped silently for that row/column
    unless strict is set, in which case MalformedSeamError is raised
    before anything is modified.

    Args:
        buffer: PixelBuffer to carve
        seam: Seam indices
        direction: 'vertical' or 'horizontal'
        strict: Reject out-of-range indices

    Returns:
        The same buffer, one column or row smaller
    """
    _check_direction(direction)

    if direction == 'vertical':
        buffer.remove_vertical_seam(seam, strict=strict)
    else:
        buffer.remove_horizontal_seam(seam, strict=strict)

    return buffer
