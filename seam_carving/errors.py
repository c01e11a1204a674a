"""
Exceptions raised by the carving core.

Everything derives from CarvingError so callers (the CLI, mostly) can catch
one type. The value-like failures also derive from ValueError.
"""


class CarvingError(RuntimeError):
    """Raised when content-aware resizing fails."""


class DegenerateImageError(CarvingError, ValueError):
    """Image has no pixels, the wrong shape, or the wrong dtype."""


class InvalidTargetError(CarvingError, ValueError):
    """Requested target dimensions are not positive integers."""


class MalformedSeamError(CarvingError, ValueError):
    """Seam does not fit the buffer it is being removed from."""


class ImageIOError(CarvingError):
    """Image could not be read or written."""
