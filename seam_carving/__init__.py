"""
Content-aware image resizing by seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007.
"""

__version__ = "0.1.0"

from .buffer import PixelBuffer
from .config import CarveConfig
from .energy import dual_gradient_energy
from .errors import (CarvingError, DegenerateImageError, InvalidTargetError,
                     MalformedSeamError, ImageIOError)
from .seam import dp_seam, seam_energy, is_connected, remove_seam
from .carving import CarvePhase, CarvingLoop, carve

__all__ = [
    'PixelBuffer',
    'CarveConfig',
    'dual_gradient_energy',
    'CarvingError',
    'DegenerateImageError',
    'InvalidTargetError',
    'MalformedSeamError',
    'ImageIOError',
    'dp_seam',
    'seam_energy',
    'is_connected',
    'remove_seam',
    'CarvePhase',
    'CarvingLoop',
    'carve',
]
