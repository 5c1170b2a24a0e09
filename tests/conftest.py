"""
Test Configuration
==================

Pytest configuration with fixtures for all test types.
Provides test settings, mock collaborators, and sample data.
"""

import os
import tempfile

# Settings are read when the package is first imported; pin the test environment first
os.environ.setdefault("HOMEPAGE_BUILDER_ENVIRONMENT", "testing")
os.environ.setdefault("HOMEPAGE_BUILDER_STORAGE_PATH", tempfile.mkdtemp(prefix="homepage_builder_"))

import pytest
import pytest_asyncio
from pathlib import Path
from typing import List
from unittest.mock import AsyncMock, patch

from pydantic_settings import SettingsConfigDict

from homepage_builder.config.settings import Settings
from homepage_builder.core.generation.completion_client import CompletionClient
from homepage_builder.core.generation.pipeline import HomepageGenerationPipeline
from homepage_builder.core.rendering.render_engine import RenderEngine
from homepage_builder.models.schemas import (
    BusinessContext,
    GenerationRequest,
    RecommendationItem,
    StylePreference,
)

from tests.utils.mocks import (
    SAMPLE_GENERATED_HTML,
    make_mock_browser,
    make_mock_openai_client,
)


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    log_level: str = "DEBUG"
    storage_path: Path = Path(os.environ["HOMEPAGE_BUILDER_STORAGE_PATH"])
    openai_api_key: str = "test-api-key"
    render_settle_delay: int = 0
    render_max_concurrency: int = 2
    completion_max_concurrency: int = 2

    model_config = SettingsConfigDict(env_file=None, env_prefix="HOMEPAGE_BUILDER_TEST_")


@pytest.fixture
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture
def sample_business() -> BusinessContext:
    """Sample healthcare business."""
    return BusinessContext(
        name="Bright Smile Dental",
        business_type="dental_clinic",
        industry="healthcare",
        description="Family dentistry with same-day appointments.",
        services=["Cleanings", "Whitening", "Implants"],
        location="Portland, OR",
        phone="(503) 555-0142",
        email="hello@brightsmile.example",
        confidence=0.92,
    )


@pytest.fixture
def sample_recommendations() -> List[RecommendationItem]:
    """Four recommendations of distinct known types."""
    return [
        RecommendationItem(
            type="design_improvement",
            title="Refresh the visual design",
            description="Adopt a clean layout with generous whitespace",
            priority=1,
            estimated_effort="medium",
        ),
        RecommendationItem(
            type="mobile_optimization",
            title="Fix mobile layout",
            description="Make navigation usable on small screens",
            priority=1,
            estimated_effort="low",
        ),
        RecommendationItem(
            type="seo_optimization",
            title="Add meta descriptions",
            description="Describe each page for search engines",
            priority=2,
            estimated_effort="low",
        ),
        RecommendationItem(
            type="performance_boost",
            title="Compress images",
            description="Serve modern image formats",
            priority=3,
            estimated_effort="high",
        ),
    ]


@pytest.fixture
def sample_request(sample_business, sample_recommendations) -> GenerationRequest:
    """Sample generation request."""
    return GenerationRequest(
        business=sample_business,
        recommendations=sample_recommendations,
        style_preference=StylePreference.MODERN,
        include_booking=True,
    )


@pytest.fixture
def mock_openai_client():
    """OpenAI-compatible client returning a fixed homepage."""
    return make_mock_openai_client(f"\n\n{SAMPLE_GENERATED_HTML}\n  ")


@pytest.fixture
def completion_client(mock_openai_client, test_settings) -> CompletionClient:
    """Completion client backed by the mock SDK client."""
    return CompletionClient(
        api_key=test_settings.openai_api_key,
        model=test_settings.openai_model,
        temperature=test_settings.openai_temperature,
        max_tokens=test_settings.openai_max_tokens,
        timeout=5.0,
        max_concurrency=test_settings.completion_max_concurrency,
        client=mock_openai_client,
    )


@pytest.fixture
def pipeline(completion_client) -> HomepageGenerationPipeline:
    """Generation pipeline with a mocked provider."""
    return HomepageGenerationPipeline(completion_client)


@pytest.fixture
def mock_browser():
    """Mock Playwright browser, context and page."""
    return make_mock_browser()


@pytest_asyncio.fixture
async def ready_engine(mock_browser, test_settings) -> RenderEngine:
    """Render engine initialized with the mock browser."""
    browser, _, _ = mock_browser
    engine = RenderEngine(browser=browser, settings=test_settings)
    await engine.initialize()
    return engine


@pytest.fixture
def failing_launch():
    """Patch Playwright so browser launch fails."""
    with patch("homepage_builder.core.rendering.render_engine.async_playwright") as mock_pw:
        driver = AsyncMock()
        driver.chromium.launch.side_effect = Exception("Executable doesn't exist")
        mock_pw.return_value.start = AsyncMock(return_value=driver)
        yield driver


# Pytest configuration
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on file paths."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
