"""Video compositor for turning a still image and a soundtrack into a video."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from moviepy import ImageClip, VideoClip

from .audio import load_audio

logger = logging.getLogger(__name__)


def create_video(
    image_path: Path,
    audio_path: Path,
    output_path: Path,
    size: Tuple[int, int] = (1920, 1080),
    fps: int = 1
) -> Path:
    """Render a still image over an audio track.

    The image is held for the full length of the audio.

    Args:
        image_path: Still image to show.
        audio_path: Soundtrack for the video.
        output_path: Path for the output MP4.
        size: Output resolution as (width, height).
        fps: Frame rate; a still image needs very few frames.

    Returns:
        Path to the rendered video.

    Raises:
        FileNotFoundError: If the image or the audio file doesn't exist.
    """
    if not image_path.exists():
        raise FileNotFoundError("Image file not found.")

    if not audio_path.exists():
        raise FileNotFoundError("Merged audio file not found.")

    logger.info("Creating video from image and audio...")

    audio = load_audio(audio_path)
    video = ImageClip(str(image_path)).with_duration(audio.duration)
    video = resize_clip(video, width=size[0], height=size[1]).with_audio(audio)

    try:
        export(
            video,
            output_path,
            fps=fps,
            audio_bitrate="192k",
            ffmpeg_params=["-tune", "stillimage"],
        )
    finally:
        video.close()
        audio.close()

    logger.info(f"Video created successfully: {output_path}")
    return output_path


def export(
    video: VideoClip,
    output_path: Path,
    fps: int = 30,
    codec: str = "libx264",
    audio_codec: str = "aac",
    bitrate: Optional[str] = None,
    audio_bitrate: Optional[str] = None,
    preset: str = "medium",
    pixel_format: str = "yuv420p",
    ffmpeg_params: Optional[List[str]] = None
) -> Path:
    """Export video to file with proper encoding.

    Args:
        video: Video clip to export.
        output_path: Path for output file.
        fps: Frames per second (default 30).
        codec: Video codec (default libx264).
        audio_codec: Audio codec (default aac).
        bitrate: Video bitrate (e.g., "5000k"). None for auto.
        audio_bitrate: Audio bitrate (e.g., "192k"). None for auto.
        preset: Encoding preset (ultrafast, fast, medium, slow, slower).
        pixel_format: Output pixel format.
        ffmpeg_params: Extra arguments passed straight to ffmpeg.

    Returns:
        Path to the exported video file.
    """
    # Ensure output directory exists
    output_path.parent.mkdir(parents=True, exist_ok=True)

    export_params = {
        "fps": fps,
        "codec": codec,
        "audio_codec": audio_codec,
        "preset": preset,
        "pixel_format": pixel_format,
    }

    if bitrate:
        export_params["bitrate"] = bitrate

    if audio_bitrate:
        export_params["audio_bitrate"] = audio_bitrate

    if ffmpeg_params:
        export_params["ffmpeg_params"] = ffmpeg_params

    video.write_videofile(str(output_path), **export_params)

    return output_path


def resize_clip(
    clip: VideoClip,
    width: Optional[int] = None,
    height: Optional[int] = None
) -> VideoClip:
    """Resize a video clip.

    Args:
        clip: Video clip to resize.
        width: Target width in pixels.
        height: Target height in pixels.

    Returns:
        Resized video clip.
    """
    if width and height:
        return clip.resized((width, height))
    elif width:
        return clip.resized(width=width)
    elif height:
        return clip.resized(height=height)
    return clip
