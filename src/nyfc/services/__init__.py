"""External service integrations."""

from .stability import StabilityClient, ImageResult
from .suno import SunoClient, SunoOptions, SunoAutomationError, save_track_metadata

__all__ = [
    "StabilityClient",
    "ImageResult",
    "SunoClient",
    "SunoOptions",
    "SunoAutomationError",
    "save_track_metadata",
]
