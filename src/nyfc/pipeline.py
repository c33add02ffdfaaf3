"""Sequential music, image and video pipeline."""

import logging
from typing import Optional

from .config import Config, config as default_config
from .editor import create_video, merge_audio_files
from .models import PipelineRequest, PipelineResult
from .services import StabilityClient, SunoClient, SunoOptions
from .utils import OutputPaths

logger = logging.getLogger(__name__)


class PipelineError(RuntimeError):
    """A pipeline stage failed."""

    def __init__(self, stage: str, cause: BaseException) -> None:
        super().__init__(f"{stage} failed: {cause}")
        self.stage = stage
        self.cause = cause


class Pipeline:
    """Runs music generation, audio merge, image generation and video render.

    Stages run strictly one after another against fixed paths under the
    configured output directory. Clients are created lazily so a stage only
    needs its own credentials.
    """

    def __init__(
        self,
        cfg: Optional[Config] = None,
        suno: Optional[SunoClient] = None,
        images: Optional[StabilityClient] = None,
    ) -> None:
        self._config = cfg or default_config
        self._suno = suno
        self._images = images
        self._paths = OutputPaths(self._config.output_dir)

    @property
    def paths(self) -> OutputPaths:
        return self._paths

    def _suno_client(self) -> SunoClient:
        if self._suno is None:
            self._suno = SunoClient(
                cookie=self._config.suno_cookie,
                options=SunoOptions(headless=self._config.headless),
            )
        return self._suno

    def _image_client(self) -> StabilityClient:
        if self._images is None:
            self._images = StabilityClient(
                api_key=self._config.stability_api_key,
                engine=self._config.stability_engine,
            )
        return self._images

    def run(self, request: PipelineRequest) -> PipelineResult:
        """Run every stage for one request.

        Raises:
            PipelineError: If any stage fails; later stages are not run.
        """
        logger.info("Starting NowYouFoundChill automation pipeline...")
        logger.info(f"Prompts: {request.prompts}")
        logger.info(f"Image prompt: {request.image_prompt}")

        tracks = self._stage("music", self.generate_music, request.prompts)
        merged = self._stage("merge", self.merge_audio)
        image = self._stage("image", self.generate_image, request.image_prompt)
        video = self._stage("video", self.create_video)

        logger.info(f"Pipeline finished: {video}")
        return PipelineResult(tracks=tracks, merged_audio=merged, image=image, video=video)

    def _stage(self, name: str, func, *args):
        logger.info(f"Stage '{name}' started")
        try:
            result = func(*args)
        except PipelineError:
            raise
        except Exception as e:
            logger.error(f"Stage '{name}' failed: {e}")
            raise PipelineError(name, e) from e
        logger.info(f"Stage '{name}' finished")
        return result

    def generate_music(self, prompts: list[str]):
        """Generate and download tracks into the audio folder."""
        audio_dir = self._paths.ensure_audio_dir()
        return self._suno_client().generate(
            prompts, audio_dir, metadata_path=self._paths.tracks_metadata
        )

    def merge_audio(self):
        """Merge every downloaded track into one MP3."""
        return merge_audio_files(self._paths.audio_dir, self._paths.merged_audio)

    def generate_image(self, prompt: str):
        """Generate the still image.

        Raises:
            PipelineError: If the image API reported an error.
        """
        logger.info(f"Generating image from prompt: {prompt}")
        result = self._image_client().generate_image(prompt, self._paths.image)
        if result.error_message:
            raise PipelineError("image", RuntimeError(result.error_message))
        return result.local_path

    def create_video(self):
        """Render the image and merged audio into the final video."""
        return create_video(self._paths.image, self._paths.merged_audio, self._paths.video)
