"""Tests for the HTTP endpoint."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from nyfc.models import PipelineResult, TrackResult
from nyfc.pipeline import PipelineError
from nyfc.server import FAILURE_MESSAGE, app, get_pipeline


@pytest.fixture
def pipeline():
    fake = MagicMock()
    fake.run.return_value = PipelineResult(
        tracks=[
            TrackResult(prompt="lofi rain", track_name="lofi_rain-Track1"),
            TrackResult(prompt="lofi rain", track_name="lofi_rain-Track2"),
        ],
        merged_audio=Path("output/merged_audio.mp3"),
        image=Path("output/image.png"),
        video=Path("output/final_video.mp4"),
    )
    return fake


@pytest.fixture
def client(pipeline):
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_success(client, pipeline, prompts):
    response = client.post("/", json={"prompts": prompts, "imagePrompt": "rainy window"})

    assert response.status_code == 200
    assert response.json() == {
        "status": "success",
        "message": "Video created!",
        "tracks": ["lofi_rain-Track1", "lofi_rain-Track2"],
        "video": str(Path("output/final_video.mp4")),
    }
    request = pipeline.run.call_args[0][0]
    assert request.prompts == prompts
    assert request.image_prompt == "rainy window"


def test_too_few_prompts(client, pipeline, prompts):
    response = client.post("/", json={"prompts": prompts[:2], "imagePrompt": "rainy window"})

    assert response.status_code == 400
    assert response.json() == {"error": "You must provide 5 audio prompts."}
    pipeline.run.assert_not_called()


def test_missing_image_prompt(client, pipeline, prompts):
    response = client.post("/", json={"prompts": prompts})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing or invalid imagePrompt."}
    pipeline.run.assert_not_called()


def test_blank_image_prompt(client, prompts):
    response = client.post("/", json={"prompts": prompts, "imagePrompt": "  "})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing or invalid imagePrompt."}


def test_malformed_json(client):
    response = client.post(
        "/", content="{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_pipeline_failure_is_generic_500(client, pipeline, prompts):
    pipeline.run.side_effect = PipelineError("music", RuntimeError("selector not found"))

    response = client.post("/", json={"prompts": prompts, "imagePrompt": "rainy window"})

    assert response.status_code == 500
    assert response.json() == {"error": FAILURE_MESSAGE}


def test_missing_body_reports_prompts(client, pipeline):
    response = client.post("/")

    assert response.status_code == 400
    assert response.json() == {"error": "You must provide 5 audio prompts."}
    pipeline.run.assert_not_called()


@pytest.mark.parametrize("body", [[], ["lofi"] * 5, "lofi"])
def test_non_object_body_reports_prompts(client, pipeline, body):
    response = client.post("/", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "You must provide 5 audio prompts."}
    pipeline.run.assert_not_called()


def test_empty_object_reports_prompts(client):
    response = client.post("/", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "You must provide 5 audio prompts."}
