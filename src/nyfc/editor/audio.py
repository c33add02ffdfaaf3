"""Audio merging for the downloaded tracks."""

import logging
from pathlib import Path
from typing import List

from moviepy import AudioFileClip, concatenate_audioclips

logger = logging.getLogger(__name__)


def load_audio(audio_path: Path) -> AudioFileClip:
    """Load an audio file.

    Args:
        audio_path: Path to the audio file.

    Returns:
        AudioFileClip instance.

    Raises:
        FileNotFoundError: If audio file doesn't exist.
    """
    if not audio_path.exists():
        raise FileNotFoundError(f"Audio file not found: {audio_path}")

    return AudioFileClip(str(audio_path))


def list_tracks(audio_dir: Path) -> List[Path]:
    """Return the MP3 files in a directory, sorted by file name."""
    if not audio_dir.is_dir():
        return []

    return sorted(
        (path for path in audio_dir.iterdir() if path.is_file() and path.name.endswith(".mp3")),
        key=lambda path: path.name,
    )


def merge_audio_files(
    audio_dir: Path,
    output_path: Path,
    codec: str = "libmp3lame",
    bitrate: str = "192k"
) -> Path:
    """Concatenate every MP3 track in a directory into one file.

    Args:
        audio_dir: Directory holding the downloaded tracks.
        output_path: Path for the merged MP3.
        codec: Audio codec passed to ffmpeg.
        bitrate: Output audio bitrate.

    Returns:
        Path to the merged audio file.

    Raises:
        FileNotFoundError: If the directory holds no MP3 tracks.
    """
    tracks = list_tracks(audio_dir)
    if not tracks:
        raise FileNotFoundError("No audio tracks found to merge.")

    logger.info(f"Found {len(tracks)} audio tracks. Merging...")

    clips = [load_audio(track) for track in tracks]
    try:
        merged = concatenate_audioclips(clips)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        merged.write_audiofile(str(output_path), codec=codec, bitrate=bitrate, logger=None)
    finally:
        for clip in clips:
            clip.close()

    logger.info(f"Audio merged successfully: {output_path}")
    return output_path


def get_audio_duration(audio_path: Path) -> float:
    """Get the duration of an audio file.

    Args:
        audio_path: Path to audio file.

    Returns:
        Duration in seconds.
    """
    audio = load_audio(audio_path)
    duration = audio.duration
    audio.close()
    return duration
