"""Tests for the sequential pipeline."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from nyfc import pipeline as pipeline_module
from nyfc.models import PipelineRequest, TrackResult
from nyfc.pipeline import Pipeline, PipelineError
from nyfc.services.stability import ImageResult


@pytest.fixture
def request_body(prompts):
    return PipelineRequest(prompts=prompts, imagePrompt="rainy window at night")


@pytest.fixture
def stages(monkeypatch):
    """Record the order in which stages touch their collaborators."""
    order = []
    suno = MagicMock()
    images = MagicMock()

    def generate(prompts, audio_dir, metadata_path=None):
        order.append("music")
        return [TrackResult(prompt=p, track_name=f"{p}-Track1") for p in prompts]

    def merge(audio_dir, output_path):
        order.append("merge")
        return output_path

    def image(prompt, output_path):
        order.append("image")
        return ImageResult(prompt=prompt, local_path=output_path)

    def video(image_path, audio_path, output_path):
        order.append("video")
        return output_path

    suno.generate.side_effect = generate
    images.generate_image.side_effect = image
    monkeypatch.setattr(pipeline_module, "merge_audio_files", MagicMock(side_effect=merge))
    monkeypatch.setattr(pipeline_module, "create_video", MagicMock(side_effect=video))
    return order, suno, images


def test_runs_stages_in_order(cfg, request_body, stages):
    order, suno, images = stages
    pipeline = Pipeline(cfg, suno=suno, images=images)

    result = pipeline.run(request_body)

    assert order == ["music", "merge", "image", "video"]
    output_dir = cfg.output_dir
    assert result.merged_audio == output_dir / "merged_audio.mp3"
    assert result.image == output_dir / "image.png"
    assert result.video == output_dir / "final_video.mp4"
    assert len(result.track_names) == 5
    suno.generate.assert_called_once_with(
        request_body.prompts,
        output_dir / "audio",
        metadata_path=output_dir / "audio" / "tracks.json",
    )
    assert (output_dir / "audio").is_dir()
    images.generate_image.assert_called_once_with(
        "rainy window at night", output_dir / "image.png"
    )


def test_failed_stage_stops_pipeline(cfg, request_body, stages):
    order, suno, images = stages
    pipeline_module.merge_audio_files.side_effect = FileNotFoundError(
        "No audio tracks found to merge."
    )
    pipeline = Pipeline(cfg, suno=suno, images=images)

    with pytest.raises(PipelineError) as exc_info:
        pipeline.run(request_body)

    assert exc_info.value.stage == "merge"
    assert isinstance(exc_info.value.cause, FileNotFoundError)
    assert order == ["music"]
    images.generate_image.assert_not_called()


def test_image_api_error_fails_image_stage(cfg, request_body, stages):
    order, suno, images = stages
    images.generate_image.side_effect = None
    images.generate_image.return_value = ImageResult(prompt="x", error_message="401: invalid key")
    pipeline = Pipeline(cfg, suno=suno, images=images)

    with pytest.raises(PipelineError) as exc_info:
        pipeline.run(request_body)

    assert exc_info.value.stage == "image"
    assert "401: invalid key" in str(exc_info.value)
    assert "video" not in order


def test_clients_created_from_config(cfg, monkeypatch):
    suno_cls = MagicMock()
    stability_cls = MagicMock()
    monkeypatch.setattr(pipeline_module, "SunoClient", suno_cls)
    monkeypatch.setattr(pipeline_module, "StabilityClient", stability_cls)
    pipeline = Pipeline(cfg)

    pipeline.generate_music(["lofi"])
    pipeline.generate_music(["jazz"])

    suno_cls.assert_called_once()
    assert suno_cls.call_args.kwargs["cookie"] == "test-cookie"
    assert suno_cls.call_args.kwargs["options"].headless is True
    stability_cls.assert_not_called()


def test_suno_client_follows_headless_setting(cfg, monkeypatch):
    suno_cls = MagicMock()
    monkeypatch.setattr(pipeline_module, "SunoClient", suno_cls)

    Pipeline(cfg.model_copy(update={"headless": False})).generate_music(["lofi"])

    assert suno_cls.call_args.kwargs["options"].headless is False


def test_missing_credentials_fail_the_stage(tmp_path: Path, request_body, monkeypatch):
    from nyfc.config import Config

    cfg = Config(suno_cookie="", stability_api_key="", output_dir=tmp_path)
    monkeypatch.setattr("nyfc.services.suno.config.suno_cookie", "")

    with pytest.raises(PipelineError) as exc_info:
        Pipeline(cfg).run(request_body)

    assert exc_info.value.stage == "music"
    assert isinstance(exc_info.value.cause, ValueError)
