"""Stability AI text-to-image client wrapper."""

import base64
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

import requests

from ..config import config

logger = logging.getLogger(__name__)


@dataclass
class ImageResult:
    """Result of a Stability generation request."""

    prompt: str
    local_path: Optional[Path] = None
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    metadata: dict = field(default_factory=dict)


class StabilityClient:
    """Client wrapper for Stability AI's v1 text-to-image endpoint."""

    API_HOST = "https://api.stability.ai"
    DEFAULT_ENGINE = "stable-diffusion-v1-5"
    DEFAULT_TIMEOUT = 120.0

    def __init__(
        self,
        api_key: Optional[str] = None,
        engine: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the Stability client.

        Args:
            api_key: Stability API key. Defaults to STABILITY_API_KEY env var.
            engine: Engine id. Defaults to config.stability_engine.
            timeout: Request timeout in seconds.
            session: Optional requests session to reuse.
        """
        self._api_key = api_key or config.stability_api_key
        if not self._api_key:
            raise ValueError(
                "Stability API key not provided. Set STABILITY_API_KEY env var."
            )

        self._engine = engine or config.stability_engine or self.DEFAULT_ENGINE
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def engine(self) -> str:
        return self._engine

    @property
    def url(self) -> str:
        return f"{self.API_HOST}/v1/generation/{self._engine}/text-to-image"

    def generate_image(
        self,
        prompt: str,
        output_path: Path,
        width: int = 896,
        height: int = 512,
        cfg_scale: float = 8,
        steps: int = 30,
        clip_guidance_preset: str = "FAST_BLUE",
    ) -> ImageResult:
        """Generate an image from a text prompt.

        Args:
            prompt: Text description of the image to generate.
            output_path: Local path to save the generated image.
            width: Image width in pixels.
            height: Image height in pixels.
            cfg_scale: How strictly the diffusion follows the prompt.
            steps: Number of diffusion steps.
            clip_guidance_preset: CLIP guidance preset name.

        Returns:
            ImageResult with generation details. Failures are reported in
            ``error_message`` instead of being raised.
        """
        result = ImageResult(
            prompt=prompt,
            created_at=datetime.now(),
            metadata={
                "engine": self._engine,
                "width": width,
                "height": height,
            },
        )

        request_body = {
            "text_prompts": [{"text": prompt}],
            "cfg_scale": cfg_scale,
            "clip_guidance_preset": clip_guidance_preset,
            "height": height,
            "width": width,
            "samples": 1,
            "steps": steps,
        }

        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            logger.info(f"Generating image with Stability: {prompt[:50]}...")
            response = self._session.post(
                self.url, json=request_body, headers=headers, timeout=self._timeout
            )

            if response.status_code != 200:
                error_msg = f"{response.status_code}: {response.text[:500]}"
                logger.error(f"Stability API error: {error_msg}")
                result.error_message = error_msg
                return result

            data = response.json()

            artifacts = data.get("artifacts", [])
            if not artifacts:
                result.error_message = "No artifacts in response"
                return result

            image_data = artifacts[0].get("base64")
            if not image_data:
                result.error_message = "No image data in response"
                return result

            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "wb") as f:
                f.write(base64.b64decode(image_data))

            result.local_path = output_path
            result.metadata["seed"] = artifacts[0].get("seed")
            logger.info(f"Saved image to {output_path}")

            return result

        except (requests.RequestException, ValueError, OSError) as e:
            logger.error(f"Image generation failed: {e}")
            result.error_message = str(e)
            return result
