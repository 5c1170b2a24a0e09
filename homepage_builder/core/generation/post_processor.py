"""
Post Processor
==============

Pure derivations applied after the completion call: the custom stylesheet
with palette variables, the ordered feature list, the improvement narrative,
and the booking companion script.
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from homepage_builder.core.generation.catalog import CUSTOM_SCHEME_PALETTE, palette_for
from homepage_builder.core.templating import render_template
from homepage_builder.models.schemas import (
    BusinessContext,
    Palette,
    RecommendationItem,
    RecommendationType,
    StylePreference,
)

TEMPLATE_DIR = Path(__file__).parent / "templates"

BASELINE_FEATURES = ("responsive_design", "modern_layout")
MODERN_STYLE_FEATURES = ("modern_typography", "gradient_backgrounds")
STANDARD_FEATURES = ("call_to_action", "contact_section", "services_showcase")
BOOKING_FEATURE = "booking_integration"

# Recommendation types that contribute a feature token, in append order
RECOMMENDATION_FEATURES = (
    (RecommendationType.MOBILE_OPTIMIZATION, "mobile_optimized"),
    (RecommendationType.SEO_OPTIMIZATION, "seo_optimized"),
    (RecommendationType.CONVERSION_OPTIMIZATION, "conversion_optimized"),
)

IMPROVEMENT_PHRASES: Dict[RecommendationType, str] = {
    RecommendationType.DESIGN_IMPROVEMENT: "modern design",
    RecommendationType.MOBILE_OPTIMIZATION: "mobile optimization",
    RecommendationType.SEO_OPTIMIZATION: "SEO optimization",
    RecommendationType.CONVERSION_OPTIMIZATION: "conversion optimization",
    RecommendationType.PERFORMANCE_BOOST: "performance improvements",
}
GENERIC_IMPROVEMENT_PHRASE = "website enhancement"

# Number of improvement phrases named before summarizing the rest
NAMED_IMPROVEMENTS = 3


def resolve_palette(context: BusinessContext, color_scheme: Optional[str]) -> Palette:
    """
    Resolve the palette used for the custom stylesheet.

    An explicit color scheme currently selects a fixed palette; the supplied
    value itself is not parsed.
    """
    if color_scheme:
        return CUSTOM_SCHEME_PALETTE
    return palette_for(context.industry)


def color_variables(context: BusinessContext, color_scheme: Optional[str] = None) -> str:
    """Render the custom stylesheet exposing the palette as CSS variables."""
    return render_template(
        TEMPLATE_DIR,
        "custom_styles.css.j2",
        palette=resolve_palette(context, color_scheme),
    ).strip()


def features_included(
    recommendations: Sequence[RecommendationItem],
    include_booking: bool,
    style_preference: Union[StylePreference, str],
) -> List[str]:
    """
    Determine which features the generated homepage includes.

    Args:
        recommendations: Analysis recommendations
        include_booking: Whether booking integration was requested
        style_preference: Requested visual style

    Returns:
        Ordered feature tokens
    """
    features = list(BASELINE_FEATURES)

    if style_preference == StylePreference.MODERN:
        features.extend(MODERN_STYLE_FEATURES)

    present_types = {rec.type for rec in recommendations}
    for rec_type, feature in RECOMMENDATION_FEATURES:
        if rec_type.value in present_types:
            features.append(feature)

    if include_booking:
        features.append(BOOKING_FEATURE)

    features.extend(STANDARD_FEATURES)
    return features


def improvement_phrase(rec_type: str) -> str:
    """Describe a recommendation type; unknown types get a generic phrase."""
    try:
        return IMPROVEMENT_PHRASES[RecommendationType(rec_type)]
    except ValueError:
        return GENERIC_IMPROVEMENT_PHRASE


def improvement_narrative(
    recommendations: Sequence[RecommendationItem], features: Sequence[str]
) -> str:
    """Summarize the implemented improvements in one human-readable paragraph."""
    phrases: List[str] = []
    for rec in recommendations:
        phrase = improvement_phrase(rec.type)
        if phrase not in phrases:
            phrases.append(phrase)

    narrative = f"Implemented {len(recommendations)} key improvements including "
    narrative += ", ".join(phrases[:NAMED_IMPROVEMENTS])

    if len(phrases) > NAMED_IMPROVEMENTS:
        narrative += f", and {len(phrases) - NAMED_IMPROVEMENTS} other improvements"

    narrative += (
        f". Features {len(features)} modern web components for enhanced user experience "
        "and business growth."
    )
    return narrative


def booking_script() -> str:
    """Get the static booking companion script."""
    return (TEMPLATE_DIR / "booking.js").read_text(encoding="utf-8").strip()
