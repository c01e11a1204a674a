"""
High-level carving functions that orchestrate the seam carving workflow.
"""

import enum
import logging
import numbers

import torch
from typing import Callable, Optional, Union

from .buffer import PixelBuffer
from .config import CarveConfig
from .energy import dual_gradient_energy
from .errors import InvalidTargetError
from .seam import dp_seam, remove_seam, seam_energy

logger = logging.getLogger(__name__)

# observer(buffer, seam, direction), called after a seam is found and
# before it is removed. Must not modify the buffer.
SeamObserver = Callable[[PixelBuffer, torch.Tensor, str], None]

# after_removal(buffer, direction), called once the seam is gone.
RemovalObserver = Callable[[PixelBuffer, str], None]


class CarvePhase(enum.Enum):
    REDUCING_WIDTH = 'reducing_width'
    REDUCING_HEIGHT = 'reducing_height'
    DONE = 'done'


_PHASE_DIRECTION = {
    CarvePhase.REDUCING_WIDTH: 'vertical',
    CarvePhase.REDUCING_HEIGHT: 'horizontal',
}


def _validate_target(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidTargetError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidTargetError(f"{name} must be positive, got {value}")
    return int(value)


class CarvingLoop:
    """
    Shrink a PixelBuffer to a target size, one seam at a time.

    Width and height are reduced in two strictly sequential phases (width
    first unless config.height_first). Every iteration recomputes energy on
    the current buffer, finds the cheapest seam, and removes it. Targets are
    clamped to the original size, and neither dimension goes below 1.

    Each call to step() is one complete iteration, so a caller can stop
    between iterations and still hold a valid, smaller image.

    Args:
        buffer: PixelBuffer to carve; mutated in place
        target_width: desired width, >= 1
        target_height: desired height, >= 1
        config: CarveConfig (defaults read from the environment)
        observer: optional SeamObserver for visualization
        after_removal: optional RemovalObserver, sees each carved result
    """

    def __init__(self, buffer: PixelBuffer, target_width: int, target_height: int,
                 config: Optional[CarveConfig] = None,
                 observer: Optional[SeamObserver] = None,
                 after_removal: Optional[RemovalObserver] = None):
        target_width = _validate_target('target_width', target_width)
        target_height = _validate_target('target_height', target_height)

        self.buffer = buffer
        self.config = config if config is not None else CarveConfig()
        self.observer = observer
        self.after_removal = after_removal
        self.target_width = min(target_width, buffer.original_width)
        self.target_height = min(target_height, buffer.original_height)
        self.seams_removed = {'vertical': 0, 'horizontal': 0}

        if self.config.height_first:
            self._phases = [CarvePhase.REDUCING_HEIGHT, CarvePhase.REDUCING_WIDTH]
        else:
            self._phases = [CarvePhase.REDUCING_WIDTH, CarvePhase.REDUCING_HEIGHT]
        self._phase_index = 0
        self.phase = self._settle()

    def _phase_done(self, phase: CarvePhase) -> bool:
        if phase is CarvePhase.REDUCING_WIDTH:
            return self.buffer.width <= self.target_width or self.buffer.width <= 1
        return self.buffer.height <= self.target_height or self.buffer.height <= 1

    def _settle(self) -> CarvePhase:
        while self._phase_index < len(self._phases):
            phase = self._phases[self._phase_index]
            if not self._phase_done(phase):
                return phase
            self._phase_index += 1
        return CarvePhase.DONE

    @property
    def done(self) -> bool:
        return self.phase is CarvePhase.DONE

    @property
    def total_seams(self) -> int:
        return self.seams_removed['vertical'] + self.seams_removed['horizontal']

    def step(self) -> bool:
        """Remove one seam. Returns False once there is nothing left to do."""
        if self.done:
            return False

        direction = _PHASE_DIRECTION[self.phase]
        energy = dual_gradient_energy(self.buffer)
        seam = dp_seam(energy, direction=direction)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s seam at %dx%d, energy %.1f", direction,
                         self.buffer.width, self.buffer.height,
                         seam_energy(energy, seam, direction))

        if self.observer is not None:
            self.observer(self.buffer, seam, direction)

        remove_seam(self.buffer, seam, direction=direction,
                    strict=self.config.strict_seams)
        self.seams_removed[direction] += 1

        if self.after_removal is not None:
            self.after_removal(self.buffer, direction)

        every = self.config.log_every
        if every and self.total_seams % every == 0:
            logger.info("Removed %d seams, size now %dx%d", self.total_seams,
                        self.buffer.width, self.buffer.height)

        self.phase = self._settle()
        return True

    def run(self) -> PixelBuffer:
        """Carve until both targets are met."""
        logger.info("Carving %dx%d -> %dx%d", self.buffer.width, self.buffer.height,
                    self.target_width, self.target_height)
        while self.step():
            pass
        logger.info("Done: %d vertical, %d horizontal seams removed, final size %dx%d",
                    self.seams_removed['vertical'], self.seams_removed['horizontal'],
                    self.buffer.width, self.buffer.height)
        return self.buffer


def carve(image: Union[PixelBuffer, torch.Tensor], target_width: int,
          target_height: int, config: Optional[CarveConfig] = None,
          observer: Optional[SeamObserver] = None,
          after_removal: Optional[RemovalObserver] = None) -> torch.Tensor:
    """
    Content-aware resize of an image.

    Args:
        image: uint8 image tensor (3, H, W) or a PixelBuffer (copied either way)
        target_width: desired width
        target_height: desired height
        config: CarveConfig
        observer: optional SeamObserver
        after_removal: optional RemovalObserver

    Returns:
        Carved image (3, target_height, target_width), uint8
    """
    if isinstance(image, PixelBuffer):
        image = image.view()
    buffer = PixelBuffer(image)
    CarvingLoop(buffer, target_width, target_height,
                config=config, observer=observer,
                after_removal=after_removal).run()
    return buffer.to_tensor()
