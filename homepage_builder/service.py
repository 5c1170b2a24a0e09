"""
Builder Service
===============

Owns one generation pipeline and one render engine for the lifetime of the
process. A render engine that fails to launch degrades previews only;
generation keeps working.
"""

from typing import Any, Optional, Tuple
import asyncio
import signal
import time

from homepage_builder.config.logging import get_logger
from homepage_builder.config.settings import Settings, get_settings
from homepage_builder.core.generation.completion_client import CompletionClient
from homepage_builder.core.generation.pipeline import HomepageGenerationPipeline
from homepage_builder.core.rendering.render_engine import RenderEngine
from homepage_builder.models.schemas import (
    GenerationRequest,
    GenerationResult,
    HealthReport,
    ResponsiveCaptures,
)

logger = get_logger(__name__)


class BuilderService:
    """Homepage generation and preview rendering with a shared lifecycle."""

    def __init__(
        self,
        pipeline: Optional[HomepageGenerationPipeline] = None,
        render_engine: Optional[RenderEngine] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.pipeline = pipeline or HomepageGenerationPipeline(
            CompletionClient.from_settings(self.settings)
        )
        self.render_engine = render_engine or RenderEngine(settings=self.settings)
        self._started_at = time.monotonic()
        self.logger: Any = logger.bind(component="builder_service")  # structlog.BoundLoggerBase

    async def start(self) -> None:
        """Start the service; preview rendering may come up degraded."""
        self._started_at = time.monotonic()
        await self.render_engine.initialize()

        if self.render_engine.is_ready():
            self.logger.info("Builder service started")
        else:
            self.logger.warning("Builder service started without screenshot support")

        if not self.pipeline.is_ready():
            self.logger.warning("Completion provider API key is not configured")

    async def stop(self) -> None:
        """Stop the service, closing the browser process."""
        await self.render_engine.cleanup()
        self.logger.info("Builder service stopped")

    def health(self) -> HealthReport:
        """Report which capabilities are available."""
        checks = {
            "generator_ready": self.pipeline.is_ready(),
            "render_engine_ready": self.render_engine.is_ready(),
        }
        if all(checks.values()):
            status = "healthy"
        elif checks["generator_ready"]:
            status = "degraded"
        else:
            status = "unhealthy"

        return HealthReport(
            status=status,
            version=self.settings.app_version,
            checks=checks,
            uptime=time.monotonic() - self._started_at,
        )

    async def generate_with_previews(
        self, request: GenerationRequest
    ) -> Tuple[GenerationResult, Optional[ResponsiveCaptures]]:
        """
        Generate a homepage and, when rendering is available, its previews.

        Returns:
            The generation result and responsive captures, or None for the
            captures when the render engine is not ready
        """
        result = await self.pipeline.generate(request)
        if not self.render_engine.is_ready():
            return result, None

        previews = await self.render_engine.capture_responsive(result.html_code, result.css_code)
        return result, previews

    async def run_until_signalled(self) -> None:
        """
        Run until SIGINT or SIGTERM, then clean up.

        In-flight calls are not drained before the browser is closed.
        """
        await self.start()

        shutdown_event = asyncio.Event()
        loop = asyncio.get_running_loop()

        def signal_handler(sig: signal.Signals) -> None:
            self.logger.info("Received shutdown signal", signal=sig.name)
            shutdown_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, signal_handler, sig)

        try:
            self.logger.info("Builder service is ready")
            await shutdown_event.wait()
        finally:
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.remove_signal_handler(sig)
            await self.stop()
