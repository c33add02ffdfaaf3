"""CLI entry point for the NowYouFoundChill pipeline."""

import logging
import typer
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import config
from .models import PipelineRequest, describe_validation_error
from .utils import OutputPaths

app = typer.Typer(
    name="nyfc",
    help="Music, image and video content pipeline",
    no_args_is_help=True
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"nyfc version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """NowYouFoundChill - Generate music, artwork and a video from prompts."""
    pass


def _output_paths(output_dir: Optional[Path]) -> OutputPaths:
    return OutputPaths(output_dir or config.output_dir)


@app.command()
def serve(
    host: Optional[str] = typer.Option(
        None,
        "--host",
        help="Interface to bind (default: HOST env var or 0.0.0.0)"
    ),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to listen on (default: PORT env var or 8080)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Start the HTTP server that runs the pipeline on POST /."""
    import uvicorn

    setup_logging(verbose)
    bind_host = host or config.host
    bind_port = port or config.port
    typer.echo(f"✅ NowYouFoundChill running at http://localhost:{bind_port}")
    uvicorn.run("nyfc.server:app", host=bind_host, port=bind_port)


@app.command()
def run(
    prompts: List[str] = typer.Option(
        ...,
        "--prompt",
        "-p",
        help="Music style prompt (repeat at least 5 times)"
    ),
    image_prompt: str = typer.Option(
        ...,
        "--image-prompt",
        "-i",
        help="Text prompt for the still image"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (default: NYFC_OUTPUT_DIR or ./output)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Run the whole pipeline: music, merge, image and video."""
    from pydantic import ValidationError
    from .pipeline import Pipeline, PipelineError

    setup_logging(verbose)

    try:
        request = PipelineRequest(prompts=prompts, image_prompt=image_prompt)
    except ValidationError as e:
        typer.echo(f"❌ {describe_validation_error(e.errors())}")
        raise typer.Exit(1)

    try:
        config.validate_required()
    except ValueError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    cfg = config.model_copy(update={"output_dir": output}) if output else config
    pipeline = Pipeline(cfg)

    typer.echo(f"🚀 Running pipeline with {len(request.prompts)} prompts")
    try:
        result = pipeline.run(request)
    except PipelineError as e:
        typer.echo(f"❌ Pipeline failed at stage '{e.stage}': {e.cause}")
        raise typer.Exit(1)

    typer.echo(f"\n📋 Summary:")
    typer.echo(f"   Tracks: {len(result.tracks)}")
    for name in result.track_names:
        typer.echo(f"   • {name}")
    typer.echo(f"   Merged audio: {result.merged_audio}")
    typer.echo(f"   Image: {result.image}")
    typer.echo(f"✅ Video created: {result.video}")


@app.command()
def music(
    prompts: List[str] = typer.Option(
        ...,
        "--prompt",
        "-p",
        help="Music style prompt (repeatable)"
    ),
    tracks_per_prompt: int = typer.Option(
        2,
        "--tracks",
        "-t",
        help="Tracks to generate per prompt",
        min=1,
        max=10
    ),
    vocals: bool = typer.Option(
        False,
        "--vocals",
        help="Leave instrumental mode off"
    ),
    show_browser: bool = typer.Option(
        False,
        "--show-browser",
        help="Run the browser with a visible window"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (default: NYFC_OUTPUT_DIR or ./output)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Generate and download tracks from Suno."""
    from .services.suno import SunoClient, SunoOptions

    setup_logging(verbose)
    paths = _output_paths(output)

    options = SunoOptions(
        tracks_per_prompt=tracks_per_prompt,
        instrumental=not vocals,
        headless=config.headless and not show_browser,
    )

    try:
        client = SunoClient(options=options)
    except ValueError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    typer.echo(f"🎵 Generating {tracks_per_prompt} track(s) for {len(prompts)} prompt(s)")

    try:
        tracks = client.generate(
            prompts, paths.ensure_audio_dir(), metadata_path=paths.tracks_metadata
        )
    except Exception as e:
        typer.echo(f"❌ Suno automation failed: {e}")
        raise typer.Exit(1)

    expected = tracks_per_prompt * len(prompts)
    for track in tracks:
        typer.echo(f"   ✅ {track.track_name} → {track.local_path}")

    typer.echo(f"\n📊 Downloaded {len(tracks)}/{expected} tracks")
    if len(tracks) < expected:
        typer.echo(f"⚠️  {expected - len(tracks)} track(s) were skipped")


@app.command()
def merge(
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (default: NYFC_OUTPUT_DIR or ./output)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Merge the downloaded tracks into one MP3."""
    from .editor import get_audio_duration, list_tracks, merge_audio_files

    setup_logging(verbose)
    paths = _output_paths(output)

    typer.echo(f"🎧 Found {len(list_tracks(paths.audio_dir))} tracks in {paths.audio_dir}")

    try:
        merged = merge_audio_files(paths.audio_dir, paths.merged_audio)
    except Exception as e:
        typer.echo(f"❌ Error merging audio: {e}")
        raise typer.Exit(1)

    typer.echo(f"✅ Audio merged: {merged}")
    typer.echo(f"   Duration: {get_audio_duration(merged):.1f}s")


@app.command()
def image(
    prompt: str = typer.Argument(
        ...,
        help="Text description of the image to generate"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (default: NYFC_OUTPUT_DIR or ./output)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Generate the still image with Stability AI."""
    from .services.stability import StabilityClient

    setup_logging(verbose)
    paths = _output_paths(output)
    typer.echo(f"🖼️  Generating image with Stability")
    typer.echo(f"   Prompt: {prompt[:70]}")

    try:
        client = StabilityClient()
        typer.echo(f"   Engine: {client.engine}")
    except ValueError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    result = client.generate_image(prompt=prompt, output_path=paths.image)

    if result.error_message:
        typer.echo(f"❌ Generation failed: {result.error_message}")
        raise typer.Exit(1)

    typer.echo(f"✅ Image saved: {result.local_path}")


@app.command()
def video(
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (default: NYFC_OUTPUT_DIR or ./output)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Render the image and merged audio into the final video."""
    from .editor import create_video

    setup_logging(verbose)
    paths = _output_paths(output)

    typer.echo(f"🎞️  Creating video from {paths.image} and {paths.merged_audio}")

    try:
        rendered = create_video(paths.image, paths.merged_audio, paths.video)
    except FileNotFoundError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)
    except Exception as e:
        typer.echo(f"❌ Error creating video: {e}")
        raise typer.Exit(1)

    typer.echo(f"✅ Video created: {rendered}")


if __name__ == "__main__":
    app()
