# seam_carving/config.py

import os
from dataclasses import dataclass, field


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class CarveConfig:
    """Knobs for a carving run.

    Values can be overridden via environment variables:
    - SEAM_CARVING_HEIGHT_FIRST  reduce height before width
    - SEAM_CARVING_STRICT_SEAMS  out-of-range seam indices raise instead of being skipped
    - SEAM_CARVING_LOG_EVERY     progress log interval in seams (0 disables)
    - SEAM_CARVING_LOG_LEVEL     logging level used by the CLI
    """

    height_first: bool = field(
        default_factory=lambda: _env_flag("SEAM_CARVING_HEIGHT_FIRST")
    )
    strict_seams: bool = field(
        default_factory=lambda: _env_flag("SEAM_CARVING_STRICT_SEAMS")
    )
    log_every: int = field(
        default_factory=lambda: _env_int("SEAM_CARVING_LOG_EVERY", 50)
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("SEAM_CARVING_LOG_LEVEL", "WARNING").upper()
    )

    def __post_init__(self):
        if self.log_every < 0:
            raise ValueError(f"log_every must be >= 0, got {self.log_every}")

    @classmethod
    def from_env(cls) -> "CarveConfig":
        return cls()
