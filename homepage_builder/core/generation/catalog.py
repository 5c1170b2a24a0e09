"""
Industry Catalog
================

Static design guidance and color palettes per industry.
Both lookups are total: any label outside the closed industry set resolves
to the default entry.
"""

from typing import Dict, Union

from homepage_builder.models.schemas import Industry, Palette


INDUSTRY_TEMPLATES: Dict[Industry, str] = {
    Industry.HOME_SERVICES: (
        "- Emphasize trust and reliability with reviews/testimonials\n"
        "- Include service area coverage map\n"
        "- Feature emergency contact prominently\n"
        "- Add before/after photos or service galleries\n"
        "- Include licensing/insurance information"
    ),
    Industry.HEALTHCARE: (
        "- Emphasize professionalism and trust\n"
        "- Include practitioner credentials and certifications\n"
        "- Feature patient testimonials (anonymized)\n"
        "- Add online appointment booking\n"
        "- Include office hours and location prominently"
    ),
    Industry.FOOD_AND_BEVERAGE: (
        "- Showcase menu highlights with appetizing descriptions\n"
        "- Include high-quality food photography placeholders\n"
        "- Feature customer reviews and ratings\n"
        "- Add online ordering or reservation system\n"
        "- Include location, hours, and delivery info"
    ),
    Industry.AUTOMOTIVE: (
        "- Emphasize expertise and certifications\n"
        "- Include service guarantees and warranties\n"
        "- Feature customer testimonials\n"
        "- Add service appointment booking\n"
        "- Include accepted insurance and payment methods"
    ),
    Industry.BEAUTY_AND_WELLNESS: (
        "- Showcase services with before/after examples\n"
        "- Include practitioner credentials and specialties\n"
        "- Feature client transformations and testimonials\n"
        "- Add online booking system\n"
        "- Include pricing and package information"
    ),
    Industry.PROFESSIONAL_SERVICES: (
        "- Emphasize expertise and credentials\n"
        "- Include case studies or success stories\n"
        "- Feature client testimonials\n"
        "- Add consultation booking\n"
        "- Include clear service descriptions and pricing"
    ),
    Industry.RETAIL: (
        "- Showcase product highlights with images\n"
        "- Include customer reviews and ratings\n"
        "- Feature special offers and promotions\n"
        "- Add online shopping or catalog\n"
        "- Include store location and hours"
    ),
    Industry.DEFAULT: (
        "- Focus on clear value proposition\n"
        "- Include customer testimonials\n"
        "- Feature key services prominently\n"
        "- Add clear contact methods\n"
        "- Include business credentials and trust signals"
    ),
}

DEFAULT_PALETTE = Palette(primary="#3B82F6", secondary="#1E40AF", accent="#10B981")

INDUSTRY_PALETTES: Dict[Industry, Palette] = {
    Industry.HOME_SERVICES: Palette(primary="#3B82F6", secondary="#1E40AF", accent="#F59E0B"),
    Industry.HEALTHCARE: Palette(primary="#10B981", secondary="#059669", accent="#3B82F6"),
    Industry.FOOD_AND_BEVERAGE: Palette(primary="#F59E0B", secondary="#D97706", accent="#EF4444"),
    Industry.AUTOMOTIVE: Palette(primary="#DC2626", secondary="#B91C1C", accent="#374151"),
    Industry.BEAUTY_AND_WELLNESS: Palette(
        primary="#EC4899", secondary="#DB2777", accent="#8B5CF6"
    ),
    Industry.PROFESSIONAL_SERVICES: Palette(
        primary="#1F2937", secondary="#111827", accent="#3B82F6"
    ),
    # Retail has guidance of its own but shares the default colors
    Industry.RETAIL: DEFAULT_PALETTE,
    Industry.DEFAULT: DEFAULT_PALETTE,
}

# Substituted whenever a caller supplies an explicit color scheme
CUSTOM_SCHEME_PALETTE = Palette(primary="#3B82F6", secondary="#1E40AF", accent="#EF4444")

for _industry in Industry:
    assert _industry in INDUSTRY_TEMPLATES, f"missing template for {_industry}"
    assert _industry in INDUSTRY_PALETTES, f"missing palette for {_industry}"


def palette_for(industry: Union[Industry, str, None]) -> Palette:
    """Get the color palette for an industry label."""
    return INDUSTRY_PALETTES[Industry.from_label(industry)]


def template_for(industry: Union[Industry, str, None]) -> str:
    """Get the design guidance text for an industry label."""
    return INDUSTRY_TEMPLATES[Industry.from_label(industry)]
