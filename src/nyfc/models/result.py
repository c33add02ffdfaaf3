"""Pipeline run result model."""

from typing import List
from pathlib import Path
from pydantic import BaseModel, Field

from .track import TrackResult


class PipelineResult(BaseModel):
    """Artifacts produced by one pipeline run."""

    tracks: List[TrackResult] = Field(default_factory=list, description="Downloaded tracks")
    merged_audio: Path = Field(..., description="Concatenated audio file")
    image: Path = Field(..., description="Generated still image")
    video: Path = Field(..., description="Final video file")

    @property
    def track_names(self) -> List[str]:
        return [track.track_name for track in self.tracks]
