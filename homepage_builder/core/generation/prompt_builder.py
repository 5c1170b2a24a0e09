"""
Prompt Builder
==============

Deterministic construction of the homepage generation prompt.
No I/O beyond reading the packaged template; the same inputs always yield
the same prompt text.
"""

from pathlib import Path
from typing import Optional, Sequence, Union

from homepage_builder.core.generation.catalog import template_for
from homepage_builder.core.templating import render_template
from homepage_builder.models.schemas import (
    BusinessContext,
    GenerationRequest,
    RecommendationItem,
    StylePreference,
)

TEMPLATE_DIR = Path(__file__).parent / "templates"
PROMPT_TEMPLATE = "homepage_prompt.j2"

# Number of recommendations summarized in the prompt
TOP_RECOMMENDATIONS = 3

SYSTEM_INSTRUCTION = (
    "You are an expert web developer specializing in creating modern, high-converting "
    "business websites. Generate clean, professional HTML code using Tailwind CSS."
)


def build_prompt(
    context: BusinessContext,
    recommendations: Sequence[RecommendationItem] = (),
    style_preference: Union[StylePreference, str] = StylePreference.MODERN,
    include_booking: bool = False,
    color_scheme: Optional[str] = None,
) -> str:
    """
    Build the homepage generation prompt.

    Args:
        context: Business being given a homepage
        recommendations: Analysis recommendations; only the first three are included
        style_preference: Requested visual style
        include_booking: Whether to ask for a booking call-to-action
        color_scheme: Requested color scheme, included only when not None

    Returns:
        Prompt text
    """
    style = (
        style_preference.value
        if isinstance(style_preference, StylePreference)
        else str(style_preference or "")
    )
    return render_template(
        TEMPLATE_DIR,
        PROMPT_TEMPLATE,
        business=context,
        style=style,
        color_scheme=color_scheme,
        include_booking=include_booking,
        recommendations=list(recommendations or [])[:TOP_RECOMMENDATIONS],
        guidance=template_for(context.industry),
    )


def build_prompt_for_request(request: GenerationRequest) -> str:
    """Build the prompt for a validated generation request."""
    return build_prompt(
        request.business,
        request.recommendations,
        request.style_preference,
        request.include_booking,
        request.color_scheme,
    )
