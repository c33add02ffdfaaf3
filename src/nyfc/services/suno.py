"""Suno music generation through browser automation.

Suno has no public API, so tracks are created by driving the web UI with
Playwright: the session cookie logs the browser in, each prompt is typed into
the create form, and the finished track is downloaded from the library page.
The selectors below match the UI as it was last seen and are best effort.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from playwright.sync_api import Browser, BrowserContext, Locator, Page, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from ..config import config
from ..models import TrackResult
from ..utils import slugify

logger = logging.getLogger(__name__)


class SunoAutomationError(RuntimeError):
    """Raised when an expected element is missing from the Suno UI."""


@dataclass
class SunoOptions:
    """Tunable waits and retries for a Suno session."""

    tracks_per_prompt: int = 2
    instrumental: bool = True
    headless: bool = True
    download_wait: float = 30.0  # seconds
    generation_wait: float = 120.0  # seconds
    retry_attempts: int = 3
    retry_delay: float = 2.0
    navigation_timeout: float = 30.0
    selector_timeout: float = 15.0
    viewport: dict = field(default_factory=lambda: {"width": 1280, "height": 800})


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)

# Hides the most common automation signals from the page
STEALTH_JS = r"""
Object.defineProperty(navigator, 'webdriver', { get: () => undefined });
Object.defineProperty(navigator, 'plugins', { get: () => [1, 2, 3, 4, 5] });
Object.defineProperty(navigator, 'languages', { get: () => ['en-US', 'en'] });
delete window.__playwright;
"""


def _text_xpath(text: str) -> str:
    return f"xpath=//div[contains(text(), '{text}')]"


def _card_menu_xpath(title: str) -> str:
    return (
        f"xpath=//div[contains(text(), '{title}')]"
        "//ancestor::div[contains(@class, 'chakra-card')]"
        "//button[contains(@class, 'chakra-menu__menu-button')]"
    )


class SunoClient:
    """Generates and downloads tracks from Suno with a logged-in browser."""

    BASE_URL = "https://suno.com"
    CREATE_URL = f"{BASE_URL}/create?wid=default"
    LIBRARY_URL = f"{BASE_URL}/library?liked=true"
    COOKIE_DOMAIN = ".suno.com"

    PROMPT_SELECTOR = 'textarea[placeholder="Enter style description"]'
    TITLE_SELECTOR = 'input[placeholder="Enter song title"]'
    GENERATE_BUTTON_SELECTOR = "#generate-button"
    ANY_MENU_BUTTON = "xpath=//button[contains(@class, 'chakra-menu__menu-button')]"

    LAUNCH_ARGS = [
        "--no-sandbox",
        "--disable-setuid-sandbox",
        "--disable-dev-shm-usage",
        "--disable-blink-features=AutomationControlled",
    ]

    def __init__(
        self,
        cookie: Optional[str] = None,
        options: Optional[SunoOptions] = None,
    ) -> None:
        """Initialize the Suno client.

        Args:
            cookie: Suno ``session`` cookie. Defaults to SUNO_COOKIE env var.
            options: Waits, retries and browser settings.
        """
        self._cookie = cookie or config.suno_cookie
        if not self._cookie:
            raise ValueError("SUNO_COOKIE environment variable is not set")

        self._options = options or SunoOptions(headless=config.headless)

    @property
    def options(self) -> SunoOptions:
        return self._options

    def generate(
        self,
        prompts: list[str],
        audio_dir: Path,
        metadata_path: Optional[Path] = None,
    ) -> list[TrackResult]:
        """Generate ``tracks_per_prompt`` tracks for every prompt.

        Tracks that still fail after all retry attempts are skipped.

        Args:
            prompts: Style descriptions to generate music from.
            audio_dir: Directory the MP3 downloads are saved into.
            metadata_path: Where the track summary JSON is written
                (default: ``tracks.json`` inside ``audio_dir``).

        Returns:
            The tracks that were generated and downloaded.
        """
        audio_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Audio folder ready at: {audio_dir}")

        results: list[TrackResult] = []

        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(
                headless=self._options.headless,
                args=self.LAUNCH_ARGS,
            )
            try:
                context = self._new_context(browser)
                page = context.new_page()
                page.set_default_navigation_timeout(self._options.navigation_timeout * 1000)

                for index, prompt in enumerate(prompts, start=1):
                    logger.info(f"Processing prompt {index}/{len(prompts)}: \"{prompt}\"")
                    slug = slugify(prompt)

                    for track_num in range(1, self._options.tracks_per_prompt + 1):
                        track = self.generate_with_retry(
                            page, prompt, f"{slug}-Track{track_num}", audio_dir
                        )
                        if track is not None:
                            results.append(track)

            except PlaywrightError as e:
                logger.error(f"Fatal error in Suno automation: {e}")
                raise
            finally:
                browser.close()
                logger.info("Suno automation complete")

        save_track_metadata(results, metadata_path or audio_dir / "tracks.json")
        return results

    def _new_context(self, browser: Browser) -> BrowserContext:
        """Create a browser context carrying the session cookie."""
        context = browser.new_context(
            user_agent=DEFAULT_USER_AGENT,
            viewport=self._options.viewport,
            locale="en-US",
            accept_downloads=True,
        )
        context.add_init_script(STEALTH_JS)
        context.add_cookies([
            {
                "name": "session",
                "value": self._cookie,
                "domain": self.COOKIE_DOMAIN,
                "path": "/",
                "httpOnly": True,
                "secure": True,
            }
        ])
        logger.info("Logged into Suno with session cookie")
        return context

    def generate_with_retry(
        self,
        page: Page,
        prompt: str,
        track_name: str,
        audio_dir: Path,
    ) -> Optional[TrackResult]:
        """Generate and download one track, retrying on any failure.

        Returns:
            The downloaded track, or None when every attempt failed.
        """
        attempts = self._options.retry_attempts

        for attempt in range(1, attempts + 1):
            try:
                logger.info(f"Generating: {track_name} (attempt {attempt}/{attempts})")
                self.generate_track(page, prompt, track_name)
                local_path = self.download_track(page, track_name, audio_dir)
                logger.info(f"Generated and downloaded: {track_name}")
                return TrackResult(
                    prompt=prompt,
                    track_name=track_name,
                    local_path=local_path,
                )

            except Exception as e:
                logger.error(
                    f"Error processing {track_name} (attempt {attempt}/{attempts}): {e}"
                )
                if attempt < attempts:
                    page.wait_for_timeout(self._options.retry_delay * 1000)

        logger.warning(
            f"Failed to process {track_name} after {attempts} attempts. Moving to next track."
        )
        return None

    def generate_track(self, page: Page, prompt: str, track_name: str) -> None:
        """Submit one generation from the create page and wait for it.

        Raises:
            SunoAutomationError: If the generate button is missing.
        """
        page.goto(
            self.CREATE_URL,
            wait_until="networkidle",
            timeout=self._options.navigation_timeout * 1000,
        )

        page.wait_for_selector(
            self.PROMPT_SELECTOR, timeout=self._options.selector_timeout * 1000
        )
        page.fill(self.PROMPT_SELECTOR, prompt)

        if self._options.instrumental:
            try:
                toggle = page.locator(_text_xpath("Instrumental"))
                if toggle.count():
                    toggle.first.click()
                    logger.info("Instrumental mode on")
                    page.wait_for_timeout(300)
            except PlaywrightError as e:
                logger.warning(f"Couldn't toggle instrumental mode: {e}")

        try:
            more_options = page.locator(_text_xpath("More Options"))
            if more_options.count():
                more_options.first.click()
                page.wait_for_timeout(500)

                title_input = page.locator(self.TITLE_SELECTOR)
                if title_input.count():
                    title_input.first.fill(track_name)
        except PlaywrightError as e:
            logger.warning(f"Couldn't set track title: {e}")

        generate_button = page.locator(self.GENERATE_BUTTON_SELECTOR)
        if not generate_button.count():
            raise SunoAutomationError("Generate button not found")

        generate_button.first.click()
        logger.info(f"Waiting for track generation: {track_name}")

        # Suno exposes no completion signal, so wait out the typical generation time
        page.wait_for_timeout(self._options.generation_wait * 1000)

    def download_track(self, page: Page, track_name: str, audio_dir: Path) -> Path:
        """Download a track as MP3 from the library page.

        Returns:
            Path of the saved MP3 file.

        Raises:
            SunoAutomationError: If the track menu or download options are missing.
        """
        page.goto(
            self.LIBRARY_URL,
            wait_until="networkidle",
            timeout=self._options.navigation_timeout * 1000,
        )
        page.wait_for_timeout(2000)

        menu_button = self._find_menu_button(page, track_name)
        menu_button.click()
        page.wait_for_timeout(500)

        download_option = page.locator(_text_xpath("Download"))
        if not download_option.count():
            raise SunoAutomationError("Download menu option not found")

        download_option.first.hover()
        page.wait_for_timeout(500)

        mp3_option = page.locator(_text_xpath("MP3 Audio"))
        if not mp3_option.count():
            raise SunoAutomationError("MP3 Audio option not found")

        with page.expect_download(timeout=self._options.download_wait * 1000) as download_info:
            mp3_option.first.click()
            logger.info(f"Download triggered: {track_name}")

        target = audio_dir / f"{track_name}.mp3"
        download_info.value.save_as(target)
        logger.info(f"Saved track to {target}")
        return target

    def _find_menu_button(self, page: Page, track_name: str) -> Locator:
        """Locate the card menu button of a track in the library.

        Tries the full title, then its first 20 characters, then falls back
        to the first track in the library.
        """
        candidates = [
            _card_menu_xpath(track_name),
            _card_menu_xpath(track_name[:20]),
        ]

        for xpath in candidates:
            buttons = page.locator(xpath)
            if buttons.count():
                return buttons.first

        buttons = page.locator(self.ANY_MENU_BUTTON)
        if buttons.count():
            logger.warning(
                f"Track \"{track_name}\" not found in library. Using the first available track instead."
            )
            return buttons.first

        raise SunoAutomationError("No tracks found in library")


def save_track_metadata(tracks: list[TrackResult], output_path: Path) -> None:
    """Save the generated track list to a JSON file.

    Args:
        tracks: Tracks produced by a Suno run.
        output_path: Path to save the metadata JSON.
    """
    metadata = {
        "generated_at": datetime.now().isoformat(),
        "total_tracks": len(tracks),
        "tracks": [track.model_dump(mode="json") for track in tracks],
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(metadata, f, indent=2)

    logger.info(f"Saved track metadata to {output_path}")
