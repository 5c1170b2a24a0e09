"""
Render Engine
=============

Playwright-based preview screenshots of homepage markup.
Owns one long-lived Chromium process with an explicit lifecycle
(uninitialized -> ready | disabled). Every capture runs in its own browser
context, which is closed before the capture returns or raises.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union
import asyncio
import base64
import io
import re
import time

from playwright.async_api import async_playwright, Browser, Playwright
from PIL import Image  # type: ignore

from homepage_builder.config.logging import get_logger
from homepage_builder.config.settings import Settings, get_settings
from homepage_builder.core.rendering.viewports import (
    DEFAULT_VIEWPORT,
    VIEWPORT_PRESETS,
    capture_options_for,
    resolve_viewport_name,
)
from homepage_builder.core.templating import render_template
from homepage_builder.models.schemas import (
    CaptureOptions,
    ImageFormat,
    RenderRequest,
    RenderResult,
    ResponsiveCaptures,
)

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

# Sandboxing is off so the browser can run as root inside containers
LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--disable-extensions",
    "--disable-default-apps",
    "--disable-sync",
    "--disable-features=VizDisplayCompositor",
]

_DOCTYPE = re.compile(r"<!doctype\s+html[^>]*>", re.IGNORECASE)
_HTML_MARKER = re.compile(r"<html", re.IGNORECASE)
_HTML_OPEN = re.compile(r"<html\b[^>]*>", re.IGNORECASE)
_HEAD_CLOSE = re.compile(r"</head>", re.IGNORECASE)


class RenderError(Exception):
    """Base exception for render engine errors."""

    pass


class RenderUnavailable(RenderError):
    """Exception raised when the render engine is not ready."""

    pass


class RenderFailed(RenderError):
    """Exception raised when loading or capturing a document fails."""

    pass


class RenderState(str, Enum):
    """Render engine lifecycle states."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    DISABLED = "disabled"


def is_complete_document(html: str) -> bool:
    """Check whether markup already is a full HTML document."""
    return bool(_DOCTYPE.search(html) or _HTML_MARKER.search(html))


def build_document(html: str, css: str = "", stylesheet_url: Optional[str] = None) -> str:
    """
    Combine markup and styles into a standalone HTML document.

    Complete documents get the styles injected into their head; a head is
    synthesized when missing. Fragments are wrapped into a boilerplate
    document that also links the utility stylesheet.

    Args:
        html: Complete document or body fragment
        css: Styles to inject
        stylesheet_url: Utility stylesheet for fragments, defaults to settings

    Returns:
        Complete HTML document
    """
    if is_complete_document(html):
        if not css:
            return html

        style_block = f"<style>{css}</style>"
        head_close = _HEAD_CLOSE.search(html)
        if head_close:
            return html[: head_close.start()] + style_block + html[head_close.start() :]

        head = f"<head>{style_block}</head>"
        anchor = _HTML_OPEN.search(html) or _DOCTYPE.search(html)
        if anchor:
            return html[: anchor.end()] + head + html[anchor.end() :]
        return head + html

    return render_template(
        TEMPLATE_DIR,
        "document.html.j2",
        title="Generated Homepage",
        css=css,
        stylesheet_url=stylesheet_url or get_settings().utility_stylesheet_url,
        body=html,
    )


def encode_data_url(image: bytes, format: Union[ImageFormat, str] = ImageFormat.PNG) -> str:
    """Encode image bytes as a base64 data URL."""
    fmt = ImageFormat(format).value
    return f"data:image/{fmt};base64,{base64.b64encode(image).decode('utf-8')}"


class RenderEngine:
    """Headless Chromium screenshot engine with graceful degradation."""

    def __init__(self, browser: Optional[Browser] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._browser = browser
        self._playwright: Optional[Playwright] = None
        self._state = RenderState.UNINITIALIZED
        self._semaphore = asyncio.Semaphore(self.settings.render_max_concurrency)
        self._lifecycle_lock = asyncio.Lock()
        self.logger: Any = logger.bind(component="render_engine")  # structlog.BoundLoggerBase

    @property
    def state(self) -> RenderState:
        """Current lifecycle state."""
        return self._state

    def is_ready(self) -> bool:
        """Check whether captures can be served."""
        return self._state is RenderState.READY

    async def initialize(self) -> None:
        """
        Launch the browser process.

        Never raises: a launch failure leaves the engine disabled so the rest
        of the service keeps working without previews. Serialized with
        cleanup(), so concurrent calls launch at most one browser.
        """
        async with self._lifecycle_lock:
            if self._state is not RenderState.UNINITIALIZED:
                self.logger.debug("Render engine already initialized", state=self._state.value)
                return

            if self._browser is not None:
                self._state = RenderState.READY
                self.logger.info("Render engine initialized with provided browser")
                return

            try:
                self._playwright = await async_playwright().start()
                self._browser = await self._playwright.chromium.launch(
                    headless=self.settings.playwright_headless,
                    args=LAUNCH_ARGS,
                    timeout=self.settings.browser_launch_timeout,
                )
                self._state = RenderState.READY
                self.logger.info(
                    "Render engine initialized",
                    default_width=DEFAULT_VIEWPORT.width,
                    default_height=DEFAULT_VIEWPORT.height,
                )
            except Exception as e:
                self._state = RenderState.DISABLED
                self.logger.error(
                    "Failed to launch browser, continuing without screenshots", error=str(e)
                )
                await self._stop_playwright()

    async def cleanup(self) -> None:
        """Close the browser process. Safe to call in any state."""
        async with self._lifecycle_lock:
            browser = self._browser
            self._browser = None
            self._state = RenderState.DISABLED

            if browser is not None:
                try:
                    await browser.close()
                except Exception as e:
                    self.logger.warning("Browser close failed", error=str(e))

            await self._stop_playwright()
            self.logger.info("Render engine cleaned up")

    async def _stop_playwright(self) -> None:
        """Stop the Playwright driver if this engine started one."""
        playwright = self._playwright
        self._playwright = None
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                self.logger.warning("Playwright stop failed", error=str(e))

    def _require_browser(self) -> Browser:
        """Get the browser, failing when the engine is not ready."""
        if self._state is not RenderState.READY or self._browser is None:
            raise RenderUnavailable("Screenshot service not initialized")
        return self._browser

    async def capture(
        self, html: str, css: str = "", options: Optional[CaptureOptions] = None
    ) -> bytes:
        """
        Capture a screenshot of markup.

        Args:
            html: Complete document or body fragment
            css: Styles to inject
            options: Viewport and image options

        Returns:
            Raster image bytes

        Raises:
            RenderUnavailable: If the engine is not ready
            RenderFailed: If loading or capturing fails
        """
        self._require_browser()
        options = options or CaptureOptions()
        document = build_document(html, css, self.settings.utility_stylesheet_url)
        timeout = self.settings.render_load_timeout

        async with self._semaphore:
            browser = self._require_browser()
            context = None
            captured = False
            try:
                context = await browser.new_context(
                    viewport={"width": options.width, "height": options.height},
                    device_scale_factor=options.device_scale_factor,
                )
                page = await context.new_page()

                await page.set_content(document, wait_until="domcontentloaded", timeout=timeout)
                await page.wait_for_load_state("networkidle", timeout=timeout)

                # Late-rendering content (web fonts, CDN stylesheets)
                await page.wait_for_timeout(self.settings.render_settle_delay)

                screenshot_options: dict[str, Any] = {
                    "type": options.format.value,
                    "full_page": options.full_page,
                }
                if options.format is ImageFormat.JPEG:
                    screenshot_options["quality"] = options.quality

                image = await page.screenshot(**screenshot_options)
                captured = True

            except Exception as e:
                self.logger.error(
                    "Screenshot capture failed",
                    width=options.width,
                    height=options.height,
                    error=str(e),
                )
                raise RenderFailed(f"Screenshot capture failed: {e}") from e

            finally:
                if context is not None:
                    try:
                        await context.close()
                    except Exception as e:
                        self.logger.warning("Browser context close failed", error=str(e))
                        # A failure already in flight takes precedence
                        if captured:
                            raise RenderFailed(f"Screenshot capture failed: {e}") from e

        if options.optimize_png and options.format is ImageFormat.PNG:
            image = await asyncio.to_thread(self._optimize_png, image)

        self.logger.debug(
            "Screenshot captured",
            width=options.width,
            height=options.height,
            format=options.format.value,
            file_size=len(image),
        )
        return image

    async def capture_data_url(
        self, html: str, css: str = "", options: Optional[CaptureOptions] = None
    ) -> str:
        """Capture a screenshot and return it as a base64 data URL."""
        options = options or CaptureOptions()
        image = await self.capture(html, css, options)
        return encode_data_url(image, options.format)

    async def capture_responsive(self, html: str, css: str = "") -> ResponsiveCaptures:
        """
        Capture viewport-sized screenshots for every device preset.

        A failing preset yields None without aborting the others.
        """
        captures: dict[str, Optional[str]] = {}

        for name in VIEWPORT_PRESETS:
            options = capture_options_for(name, full_page=False)
            try:
                captures[name.value] = await self.capture_data_url(html, css, options)
            except Exception as e:
                self.logger.error(
                    "Failed to generate responsive screenshot", viewport=name.value, error=str(e)
                )
                captures[name.value] = None

        return ResponsiveCaptures(**captures)

    async def render(self, request: RenderRequest) -> RenderResult:
        """Render a request at its named viewport preset."""
        started = time.perf_counter()
        viewport = resolve_viewport_name(request.viewport)
        options = capture_options_for(viewport, request.format, request.quality)

        image = await self.capture(request.html_code, request.css_code, options)

        return RenderResult(
            image_data=image,
            data_url=encode_data_url(image, request.format),
            viewport=viewport,
            format=request.format,
            file_size=len(image),
            generation_time_ms=int((time.perf_counter() - started) * 1000),
        )

    async def capture_to_file(
        self,
        html: str,
        css: str,
        output_path: Union[str, Path],
        options: Optional[CaptureOptions] = None,
    ) -> Path:
        """Capture a screenshot and write it to a file, creating parent directories."""
        image = await self.capture(html, css, options)
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(image)
        self.logger.info("Screenshot saved", path=str(path), file_size=len(image))
        return path

    def _optimize_png(self, png_bytes: bytes) -> bytes:
        """
        Recompress PNG bytes with Pillow.

        Returns the original bytes when optimization fails or does not help.
        """
        try:
            image = Image.open(io.BytesIO(png_bytes))
            output = io.BytesIO()
            image.save(output, format="PNG", optimize=True, compress_level=9)
            optimized = output.getvalue()
        except Exception as e:
            self.logger.warning("PNG optimization failed, using original", error=str(e))
            return png_bytes

        self.logger.debug(
            "PNG optimization completed",
            original_size=len(png_bytes),
            optimized_size=len(optimized),
        )
        return optimized if len(optimized) < len(png_bytes) else png_bytes
