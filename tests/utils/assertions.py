"""
Test Assertions
===============

Custom assertion helpers for generation and render results.
"""

import base64
from typing import Optional

from homepage_builder.models.schemas import GenerationResult

BASELINE_FEATURES = ("responsive_design", "modern_layout")


def assert_valid_generation_result(result: GenerationResult) -> None:
    """Assert that a generation result is complete."""
    assert isinstance(result, GenerationResult)
    assert result.id
    assert result.html_code
    assert result.html_code == result.html_code.strip()
    assert "--primary-color" in result.css_code
    assert "--secondary-color" in result.css_code
    assert "--accent-color" in result.css_code
    for feature in BASELINE_FEATURES:
        assert feature in result.features_included
    assert result.estimated_improvement.startswith("Implemented ")
    assert result.generation_time_ms >= 0


def assert_valid_data_url(data_url: Optional[str], format: str = "png") -> bytes:
    """Assert that a data URL carries base64 image data and return the bytes."""
    prefix = f"data:image/{format};base64,"
    assert data_url is not None
    assert data_url.startswith(prefix)
    decoded = base64.b64decode(data_url[len(prefix):])
    assert len(decoded) > 0
    return decoded
