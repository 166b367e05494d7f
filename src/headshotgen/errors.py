"""Custom exceptions for the headshot compositing pipeline."""


class HeadshotError(Exception):
    """Base exception for all headshotgen errors."""


class DecodeError(HeadshotError):
    """Raised when an image blob cannot be decoded.

    Typical causes: empty upload, unsupported format, truncated file.
    """


class InvalidSourceError(HeadshotError):
    """Raised when a decoded raster has zero width or height."""


class RenderTargetError(HeadshotError):
    """Raised when a drawing surface cannot be allocated.

    Typical causes: non-positive canvas size, out of memory.
    """


class BatchGenerationError(HeadshotError):
    """Raised when a batch produces no images at all.

    Attributes:
        failures: Per-slot failure records collected before giving up.
    """

    def __init__(self, message: str, failures: list | None = None) -> None:
        super().__init__(message)
        self.failures = list(failures or [])
