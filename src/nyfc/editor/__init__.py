"""Audio merging and video assembly module."""

from .compositor import (
    create_video,
    export,
    resize_clip,
)
from .audio import (
    list_tracks,
    load_audio,
    merge_audio_files,
    get_audio_duration,
)

__all__ = [
    # Compositor
    "create_video",
    "export",
    "resize_clip",
    # Audio
    "list_tracks",
    "load_audio",
    "merge_audio_files",
    "get_audio_duration",
]
