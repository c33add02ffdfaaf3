"""Data models for the content pipeline."""

from .track import TrackResult
from .request import PipelineRequest, PipelineResponse, ErrorResponse, describe_validation_error
from .result import PipelineResult

__all__ = [
    "TrackResult",
    "PipelineRequest",
    "PipelineResponse",
    "ErrorResponse",
    "describe_validation_error",
    "PipelineResult",
]
