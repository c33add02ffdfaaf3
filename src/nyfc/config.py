"""Configuration management."""

import os
from pathlib import Path
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config(BaseModel):
    """Application configuration."""

    # Credentials
    suno_cookie: str = Field(
        default_factory=lambda: os.getenv("SUNO_COOKIE", ""),
        description="Suno session cookie value"
    )
    stability_api_key: str = Field(
        default_factory=lambda: os.getenv("STABILITY_API_KEY", ""),
        description="Stability AI API key"
    )

    # Paths
    output_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("NYFC_OUTPUT_DIR", "output")),
        description="Directory for downloaded tracks, image and video"
    )

    # Server
    host: str = Field(
        default_factory=lambda: os.getenv("HOST", "0.0.0.0"),
        description="Interface the HTTP server binds to"
    )
    port: int = Field(
        default_factory=lambda: int(os.getenv("PORT", "8080")),
        description="Port the HTTP server listens on"
    )

    # Service settings
    headless: bool = Field(
        default_factory=lambda: _env_flag("NYFC_HEADLESS", True),
        description="Run the Suno browser without a window"
    )
    stability_engine: str = Field(
        default_factory=lambda: os.getenv("STABILITY_ENGINE", "stable-diffusion-v1-5"),
        description="Stability AI engine id"
    )

    class Config:
        """Pydantic config."""
        frozen = False

    def validate_required(self) -> None:
        """Validate that the credentials for the full pipeline are set.

        Raises:
            ValueError: If any required credential is missing.
        """
        missing: list[str] = []

        if not self.suno_cookie:
            missing.append("SUNO_COOKIE")
        if not self.stability_api_key:
            missing.append("STABILITY_API_KEY")

        if missing:
            raise ValueError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Set the corresponding environment variables."
            )


# Global config instance
config = Config()
