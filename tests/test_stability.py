"""Tests for the Stability AI client."""

import base64
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from nyfc.services.stability import StabilityClient


def _response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.text = text
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return StabilityClient(api_key="secret", engine="stable-diffusion-v1-5", session=session)


def test_requires_api_key(monkeypatch):
    monkeypatch.setattr("nyfc.services.stability.config.stability_api_key", "")
    with pytest.raises(ValueError, match="STABILITY_API_KEY"):
        StabilityClient()


def test_generate_image_writes_decoded_artifact(client, session, tmp_path: Path):
    png = b"\x89PNG fake image"
    session.post.return_value = _response(payload={
        "artifacts": [{"base64": base64.b64encode(png).decode(), "seed": 1234}]
    })
    output = tmp_path / "out" / "image.png"

    result = client.generate_image("cozy rainy window", output)

    assert result.error_message is None
    assert result.local_path == output
    assert output.read_bytes() == png
    assert result.metadata["seed"] == 1234


def test_request_body_and_headers(client, session, tmp_path: Path):
    session.post.return_value = _response(payload={
        "artifacts": [{"base64": base64.b64encode(b"x").decode()}]
    })

    client.generate_image("sunset", tmp_path / "image.png")

    args, kwargs = session.post.call_args
    assert args[0] == (
        "https://api.stability.ai/v1/generation/stable-diffusion-v1-5/text-to-image"
    )
    assert kwargs["json"] == {
        "text_prompts": [{"text": "sunset"}],
        "cfg_scale": 8,
        "clip_guidance_preset": "FAST_BLUE",
        "height": 512,
        "width": 896,
        "samples": 1,
        "steps": 30,
    }
    assert kwargs["headers"]["Authorization"] == "Bearer secret"
    assert kwargs["headers"]["Accept"] == "application/json"


def test_http_error_is_reported(client, session, tmp_path: Path):
    session.post.return_value = _response(status_code=401, text="invalid key")
    output = tmp_path / "image.png"

    result = client.generate_image("sunset", output)

    assert result.error_message == "401: invalid key"
    assert result.local_path is None
    assert not output.exists()


def test_missing_artifacts_is_reported(client, session, tmp_path: Path):
    session.post.return_value = _response(payload={"artifacts": []})

    result = client.generate_image("sunset", tmp_path / "image.png")

    assert result.error_message == "No artifacts in response"


def test_transport_error_is_reported(client, session, tmp_path: Path):
    session.post.side_effect = requests.ConnectionError("connection refused")

    result = client.generate_image("sunset", tmp_path / "image.png")

    assert "connection refused" in result.error_message
