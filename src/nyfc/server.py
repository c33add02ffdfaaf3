"""HTTP endpoint that triggers the content pipeline."""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .models import ErrorResponse, PipelineRequest, PipelineResponse, describe_validation_error
from .pipeline import Pipeline

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Pipeline failed. See logs for details."

app = FastAPI(
    title="NowYouFoundChill",
    description="Generate music, an image and a video from prompts",
    version=__version__,
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = describe_validation_error(exc.errors())
    logger.warning(f"Rejected request: {message}")
    return JSONResponse(status_code=400, content=ErrorResponse(error=message).model_dump())


def get_pipeline() -> Pipeline:
    """Pipeline used by the endpoint."""
    return Pipeline()


@app.post(
    "/",
    response_model=PipelineResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def run_pipeline(
    body: PipelineRequest,
    pipeline: Pipeline = Depends(get_pipeline),
):
    # Plain def: the pipeline blocks, so FastAPI runs it in its threadpool
    try:
        result = pipeline.run(body)
    except Exception:
        logger.exception("Pipeline failed")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=FAILURE_MESSAGE).model_dump(),
        )

    return PipelineResponse(tracks=result.track_names, video=str(result.video))
