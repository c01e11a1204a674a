"""
Seam visualization.

Paint seams onto copies of the image and collect the frames of a carving
run into an animated GIF. Purely observational; nothing here touches the
buffer being carved.
"""

import logging

import torch
from pathlib import Path
from PIL import Image
from typing import List, Sequence, Union

from .buffer import PixelBuffer
from .io import to_pil

logger = logging.getLogger(__name__)

SEAM_COLOR = (255, 0, 0)


def overlay_seam(pixels: Union[PixelBuffer, torch.Tensor], seam: torch.Tensor,
                 direction: str = 'vertical',
                 color: Sequence[int] = SEAM_COLOR) -> torch.Tensor:
    """
    Visualize a seam on an image.

    The seam pixel and its two neighbors across the seam are painted so the
    seam stays visible on large images. Indices outside the image are skipped.

    Args:
        pixels: PixelBuffer or uint8 image tensor (3, H, W)
        seam: Seam indices
        direction: 'vertical' or 'horizontal'
        color: RGB paint color

    Returns:
        Copy of the image with the seam painted
    """
    if isinstance(pixels, PixelBuffer):
        pixels = pixels.view()
    img_vis = pixels.clone()
    _, H, W = img_vis.shape
    paint = torch.tensor(list(color), dtype=img_vis.dtype, device=img_vis.device)

    if direction == 'vertical':
        for i, col in enumerate(seam.tolist()[:H]):
            if not 0 <= col < W:
                continue
            lo, hi = max(0, col - 1), min(W, col + 2)
            img_vis[:, i, lo:hi] = paint.unsqueeze(1)
    elif direction == 'horizontal':
        for j, row in enumerate(seam.tolist()[:W]):
            if not 0 <= row < H:
                continue
            lo, hi = max(0, row - 1), min(H, row + 2)
            img_vis[:, lo:hi, j] = paint.unsqueeze(1)
    else:
        raise ValueError(f"Invalid direction: {direction}")

    return img_vis


class SeamRecorder:
    """
    Observer that keeps one frame per seam for a carving run.

    With include_carved, pass after_removal to the CarvingLoop as well and
    the image right after each removal is kept too, so every recorded seam
    contributes two frames.

    Frames are pasted onto a black canvas of the original size so the GIF
    does not jump around as the image shrinks.
    """

    def __init__(self, color: Sequence[int] = SEAM_COLOR, every: int = 1,
                 include_carved: bool = False):
        if every < 1:
            raise ValueError(f"every must be >= 1, got {every}")
        self.color = tuple(color)
        self.every = every
        self.include_carved = include_carved
        self.frames: List[Image.Image] = []
        self._canvas_size = None
        self._calls = 0
        self._recorded_last = False

    def __call__(self, buffer: PixelBuffer, seam: torch.Tensor, direction: str):
        if self._canvas_size is None:
            self._canvas_size = (buffer.original_width, buffer.original_height)
        self._calls += 1
        self._recorded_last = (self._calls - 1) % self.every == 0
        if not self._recorded_last:
            return
        self.frames.append(self._on_canvas(
            overlay_seam(buffer, seam, direction, self.color)))

    def after_removal(self, buffer: PixelBuffer, direction: str):
        """Keep the carved image that follows a recorded seam frame."""
        if self.include_carved and self._recorded_last:
            self.frames.append(self._on_canvas(buffer.view()))

    def _on_canvas(self, pixels: torch.Tensor) -> Image.Image:
        frame = Image.new('RGB', self._canvas_size)
        frame.paste(to_pil(pixels), (0, 0))
        return frame

    def add_final(self, buffer: PixelBuffer):
        """Append the finished image as the last frame."""
        if self._canvas_size is None:
            self._canvas_size = (buffer.original_width, buffer.original_height)
        self.frames.append(self._on_canvas(buffer.view()))

    def save_gif(self, output_path: Union[str, Path], fps: int = 10):
        if not self.frames:
            raise ValueError("No frames were recorded")
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")

        duration = int(1000 / fps)
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0,
            optimize=False
        )
        logger.info("Wrote %d frames to %s", len(self.frames), output_path)
