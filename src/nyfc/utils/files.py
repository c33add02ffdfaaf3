"""Output layout and file naming."""

import re
from pathlib import Path

SLUG_MAX_LENGTH = 30


def slugify(text: str) -> str:
    """Convert a text prompt into a safe file prefix.

    Every character outside ``[a-z0-9]`` becomes an underscore, runs of
    underscores collapse to one and the result is cut to 30 characters.
    """
    slug = re.sub(r"[^a-z0-9]", "_", text.lower())
    slug = re.sub(r"_+", "_", slug)
    return slug[:SLUG_MAX_LENGTH]


class OutputPaths:
    """Fixed locations of the pipeline artifacts under one root."""

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @property
    def audio_dir(self) -> Path:
        return self._root / "audio"

    @property
    def merged_audio(self) -> Path:
        return self._root / "merged_audio.mp3"

    @property
    def image(self) -> Path:
        return self._root / "image.png"

    @property
    def video(self) -> Path:
        return self._root / "final_video.mp4"

    @property
    def tracks_metadata(self) -> Path:
        return self.audio_dir / "tracks.json"

    def ensure_audio_dir(self) -> Path:
        """Create the audio download folder if needed and return it."""
        self.audio_dir.mkdir(parents=True, exist_ok=True)
        return self.audio_dir
