"""HTTP request and response models."""

from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator

MIN_PROMPTS = 5
PROMPTS_ERROR = f"You must provide {MIN_PROMPTS} audio prompts."
IMAGE_PROMPT_ERROR = "Missing or invalid imagePrompt."


class PipelineRequest(BaseModel):
    """Body of a pipeline run request."""

    prompts: List[str] = Field(
        None,
        validate_default=True,
        description=f"Music style prompts (at least {MIN_PROMPTS})"
    )
    image_prompt: str = Field(
        None,
        alias="imagePrompt",
        validate_default=True,
        description="Text prompt for the still image"
    )

    class Config:
        """Pydantic config."""
        populate_by_name = True

    @field_validator("prompts", mode="before")
    @classmethod
    def check_prompts(cls, value: Any) -> Any:
        if not isinstance(value, list) or len(value) < MIN_PROMPTS:
            raise ValueError(PROMPTS_ERROR)
        return value

    @field_validator("image_prompt", mode="before")
    @classmethod
    def check_image_prompt(cls, value: Any) -> Any:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(IMAGE_PROMPT_ERROR)
        return value


class PipelineResponse(BaseModel):
    """Body returned after a successful run."""

    status: str = "success"
    message: str = "Video created!"
    tracks: List[str] = Field(default_factory=list, description="Names of the generated tracks")
    video: Optional[str] = Field(None, description="Path of the final video")


class ErrorResponse(BaseModel):
    """Body returned for rejected or failed runs."""

    error: str


def describe_validation_error(errors: list) -> str:
    """Turn pydantic validation errors into a single client-facing message.

    A missing body or a body that is not an object carries no prompts, so
    it is reported the same way as missing prompts.
    """
    for error in errors:
        if tuple(error.get("loc", ())) in ((), ("body",)):
            return PROMPTS_ERROR

    for error in errors:
        ctx = error.get("ctx") or {}
        if "error" in ctx:
            return str(ctx["error"])

    if not errors:
        return "Invalid request body."

    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{loc}: {first.get('msg')}" if loc else str(first.get("msg"))
