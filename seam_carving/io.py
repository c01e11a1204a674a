"""Load and save images as (3, H, W) uint8 tensors."""

import numpy as np
import torch
from pathlib import Path
from PIL import Image
from typing import Union

from .errors import ImageIOError

PathLike = Union[str, Path]


def load_image(path: PathLike) -> torch.Tensor:
    """Load an image file as an RGB uint8 tensor (3, H, W)."""
    try:
        with Image.open(path) as img:
            img_array = np.array(img.convert('RGB'), dtype=np.uint8)
    except FileNotFoundError as ex:
        raise ImageIOError(f"Input not found: {path}") from ex
    except OSError as ex:
        raise ImageIOError(f"Failed to open image '{path}': {ex}") from ex
    return torch.from_numpy(img_array).permute(2, 0, 1).contiguous()


def to_pil(pixels: torch.Tensor) -> Image.Image:
    """Convert a uint8 tensor (3, H, W) to a Pillow RGB image."""
    img_array = pixels.detach().permute(1, 2, 0).contiguous().cpu().numpy()
    return Image.fromarray(img_array.astype(np.uint8))


def save_image(pixels: torch.Tensor, path: PathLike):
    """Save a uint8 tensor (3, H, W); format follows the file extension."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        to_pil(pixels).save(path)
    except (OSError, ValueError) as ex:
        raise ImageIOError(f"Failed to write image '{path}': {ex}") from ex
