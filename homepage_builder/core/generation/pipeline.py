"""
Generation Pipeline
===================

Orchestrates prompt construction, the completion call and post-processing
into one GenerationResult per request.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional
import time
import uuid

from homepage_builder.config.logging import get_logger
from homepage_builder.core.generation.completion_client import CompletionClient, GenerationFailed
from homepage_builder.core.generation.post_processor import (
    booking_script,
    color_variables,
    features_included,
    improvement_narrative,
)
from homepage_builder.core.generation.prompt_builder import build_prompt_for_request
from homepage_builder.models.schemas import (
    BusinessContext,
    GenerationRequest,
    GenerationResult,
    StylePreference,
)

logger = get_logger(__name__)


class HomepageGenerationPipeline:
    """Generates homepage markup and its derived metadata."""

    def __init__(
        self,
        completion_client: CompletionClient,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.completion_client = completion_client
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self.logger: Any = logger.bind(component="generation_pipeline")  # structlog.BoundLoggerBase

    def is_ready(self) -> bool:
        """Check whether generation requests can be served."""
        return self.completion_client.is_configured()

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Generate a homepage for a validated request.

        Args:
            request: Generation request

        Returns:
            GenerationResult with markup, styles and metadata

        Raises:
            GenerationFailed: If the completion call fails; no partial result is returned
        """
        generation_id = str(uuid.uuid4())
        started = time.perf_counter()
        business = request.business

        self.logger.info(
            "Generating homepage",
            generation_id=generation_id,
            business_name=business.name,
            style=request.style_preference.value,
        )

        prompt = build_prompt_for_request(request)

        try:
            html_code = await self.completion_client.complete(prompt)
        except GenerationFailed as e:
            self.logger.error(
                "Homepage generation failed", generation_id=generation_id, error=str(e)
            )
            raise GenerationFailed(
                f"Homepage generation failed: {e}", cause=e.cause or e
            ) from e

        css_code = color_variables(business, request.color_scheme)
        features = features_included(
            request.recommendations, request.include_booking, request.style_preference
        )
        narrative = improvement_narrative(request.recommendations, features)

        result = GenerationResult(
            id=generation_id,
            business_name=business.name,
            generated_at=self._clock(),
            html_code=html_code,
            css_code=css_code,
            js_code=booking_script() if request.include_booking else None,
            style_applied=request.style_preference,
            features_included=features,
            estimated_improvement=narrative,
            generation_time_ms=int((time.perf_counter() - started) * 1000),
        )

        self.logger.info(
            "Homepage generated",
            generation_id=generation_id,
            html_length=len(html_code),
            features=len(features),
            generation_time_ms=result.generation_time_ms,
        )
        return result

    def sample_result(self) -> GenerationResult:
        """Get a static demonstration result that needs no provider call."""
        business = BusinessContext(name="Sample Business", industry="professional_services")
        features = ["responsive_design", "modern_layout", "call_to_action"]
        return GenerationResult(
            id="sample_homepage_001",
            business_name=business.name,
            generated_at=self._clock(),
            html_code=SAMPLE_HTML,
            css_code=color_variables(business),
            js_code=None,
            style_applied=StylePreference.MODERN,
            features_included=features,
            estimated_improvement="Significant improvement in design and user experience",
            generation_time_ms=0,
        )


SAMPLE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Sample Business - Professional Services</title>
    <script src="https://cdn.tailwindcss.com"></script>
</head>
<body class="bg-gray-50">
    <header class="bg-white shadow-sm">
        <div class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8">
            <div class="flex justify-between items-center py-4">
                <h1 class="text-2xl font-bold text-gray-900">Sample Business</h1>
                <nav class="hidden md:flex space-x-8">
                    <a href="#services" class="text-gray-600 hover:text-gray-900">Services</a>
                    <a href="#about" class="text-gray-600 hover:text-gray-900">About</a>
                    <a href="#contact" class="text-gray-600 hover:text-gray-900">Contact</a>
                </nav>
            </div>
        </div>
    </header>
    <main>
        <section class="custom-hero-bg text-white py-20">
            <div class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8 text-center">
                <h2 class="custom-hero-text text-4xl font-bold mb-6">Professional Services You Can Trust</h2>
                <p class="text-xl mb-8">Quality solutions for your business needs</p>
                <button class="custom-btn-primary text-white px-8 py-3 rounded-lg font-semibold">
                    Get Started
                </button>
            </div>
        </section>
    </main>
</body>
</html>"""
