"""Shared fixtures."""

from pathlib import Path

import pytest

from nyfc.config import Config


@pytest.fixture
def cfg(tmp_path: Path) -> Config:
    """Config with fake credentials writing into a temp directory."""
    return Config(
        suno_cookie="test-cookie",
        stability_api_key="test-key",
        output_dir=tmp_path / "output",
        headless=True,
    )


@pytest.fixture
def prompts() -> list[str]:
    return [
        "Lofi Rain",
        "jazz hop, mellow",
        "ambient piano",
        "chill synthwave",
        "sunset guitar",
    ]
