"""Generated track model."""

from datetime import datetime
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field


class TrackResult(BaseModel):
    """A track that was generated and downloaded from Suno."""

    prompt: str = Field(..., description="Style prompt the track was generated from")
    track_name: str = Field(..., description="Title typed into Suno, also the file stem")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the download finished")
    local_path: Optional[Path] = Field(None, description="Downloaded MP3 file")

    class Config:
        """Pydantic config."""
        frozen = False
