"""Shared test fixtures for the seam-carving test suite."""

import itertools
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seam_carving.buffer import PixelBuffer
from seam_carving.config import CarveConfig


@pytest.fixture
def config():
    """Config independent of the environment, progress logging off."""
    return CarveConfig(height_first=False, strict_seams=False, log_every=0,
                       log_level='WARNING')


@pytest.fixture
def random_buffer():
    """Random 12x16 RGB buffer."""
    return PixelBuffer(make_random_image(12, 16, seed=7))


def make_random_image(H, W, seed=0):
    """Random uint8 RGB image (3, H, W)."""
    generator = torch.Generator().manual_seed(seed)
    return torch.randint(0, 256, (3, H, W), dtype=torch.uint8, generator=generator)


def make_uniform_image(H, W, color=(90, 140, 200)):
    """Solid-color uint8 RGB image (3, H, W)."""
    return torch.tensor(color, dtype=torch.uint8).view(3, 1, 1).expand(3, H, W).clone()


def make_coordinate_image(H, W):
    """Channel 0 holds the column index, channel 1 the row index."""
    image = torch.zeros(3, H, W, dtype=torch.uint8)
    image[0] = torch.arange(W, dtype=torch.uint8).unsqueeze(0).expand(H, W)
    image[1] = torch.arange(H, dtype=torch.uint8).unsqueeze(1).expand(H, W)
    return image


def brute_force_min_energy(energy, direction='vertical'):
    """Minimum total energy over every connected seam, by enumeration."""
    if direction == 'horizontal':
        energy = energy.t()
    H, W = energy.shape
    best = float('inf')
    for start in range(W):
        for steps in itertools.product((-1, 0, 1), repeat=H - 1):
            col = start
            total = energy[0, col].item()
            valid = True
            for i, step in enumerate(steps, start=1):
                col += step
                if not 0 <= col < W:
                    valid = False
                    break
                total += energy[i, col].item()
            if valid:
                best = min(best, total)
    return best
