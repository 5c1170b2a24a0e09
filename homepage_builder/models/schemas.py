"""
Pydantic Models and Schemas
===========================

Core data models for generation requests/results, render requests/results,
and service health. Inputs are validated once at construction and are
read-only afterwards.
"""

from typing import Optional, List, Dict, Any, Literal, Mapping
from datetime import datetime, timezone
from enum import Enum
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


# Enums
class Industry(str, Enum):
    """Industry keys with dedicated design guidance and palettes."""

    HOME_SERVICES = "home_services"
    HEALTHCARE = "healthcare"
    FOOD_AND_BEVERAGE = "food_and_beverage"
    AUTOMOTIVE = "automotive"
    BEAUTY_AND_WELLNESS = "beauty_and_wellness"
    PROFESSIONAL_SERVICES = "professional_services"
    RETAIL = "retail"
    DEFAULT = "default"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "Industry":
        """Map any industry label onto the closed set, falling back to DEFAULT."""
        try:
            return cls(label)
        except ValueError:
            return cls.DEFAULT


class StylePreference(str, Enum):
    """Visual style requested for the generated homepage."""

    MODERN = "modern"
    CLASSIC = "classic"
    MINIMAL = "minimal"
    BOLD = "bold"
    PROFESSIONAL = "professional"


class RecommendationType(str, Enum):
    """Recommendation types that drive features and the improvement narrative."""

    DESIGN_IMPROVEMENT = "design_improvement"
    MOBILE_OPTIMIZATION = "mobile_optimization"
    SEO_OPTIMIZATION = "seo_optimization"
    CONVERSION_OPTIMIZATION = "conversion_optimization"
    PERFORMANCE_BOOST = "performance_boost"


class ImageFormat(str, Enum):
    """Raster formats supported by the render engine."""

    PNG = "png"
    JPEG = "jpeg"


class ViewportName(str, Enum):
    """Named device viewport presets."""

    DESKTOP = "desktop"
    TABLET = "tablet"
    MOBILE = "mobile"


NAMED_COLOR_SCHEMES = ("blue", "green", "red", "purple", "orange", "teal", "indigo")

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")
_RGB_COLOR = re.compile(r"^rgb\(\s*\d+\s*,\s*\d+\s*,\s*\d+\s*\)$")
_UNSAFE_NAME_CHARS = re.compile(r"[<>'\"&]")
_WHITESPACE = re.compile(r"\s+")

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_SERVICES = 10


def sanitize_business_name(name: Optional[str]) -> str:
    """Strip markup-significant characters and normalize whitespace."""
    if not name or not isinstance(name, str):
        return "Business"
    cleaned = _WHITESPACE.sub(" ", _UNSAFE_NAME_CHARS.sub("", name)).strip()
    return cleaned[:MAX_NAME_LENGTH] or "Business"


def normalize_color_scheme(value: Optional[str]) -> Optional[str]:
    """
    Validate a color scheme value.

    Accepts ``#RRGGBB`` hex, ``rgb(r, g, b)`` or one of the named schemes
    (returned lower-cased).

    Raises:
        ValueError: If the value matches none of the accepted forms
    """
    if value is None:
        return None
    value = value.strip()
    if _HEX_COLOR.match(value) or _RGB_COLOR.match(value):
        return value
    if value.lower() in NAMED_COLOR_SCHEMES:
        return value.lower()
    raise ValueError(
        f"Color scheme must be a #RRGGBB hex, rgb() value or one of {NAMED_COLOR_SCHEMES}"
    )


# Generation Models
class BusinessContext(BaseModel):
    """Sanitized description of the business the homepage is generated for."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name")
    business_type: str = Field("other", description="Business type")
    industry: str = Field("other", description="Industry key into the catalog")
    description: str = Field("", description="Short business description")
    services: List[str] = Field(default_factory=list, description="Offered services")
    location: str = Field("", description="Business location")
    phone: str = Field("", description="Contact phone")
    email: str = Field("", description="Contact email")
    confidence: float = Field(0.5, ge=0.0, le=1.0, description="Analysis confidence score")

    @field_validator("name", mode="before")
    @classmethod
    def clean_name(cls, v: Any) -> str:
        """Sanitize the display name."""
        return sanitize_business_name(v)

    @field_validator("description", mode="before")
    @classmethod
    def bound_description(cls, v: Any) -> str:
        """Bound the description length."""
        return (v or "")[:MAX_DESCRIPTION_LENGTH]

    @field_validator("services", mode="before")
    @classmethod
    def bound_services(cls, v: Any) -> List[str]:
        """Keep the first services only."""
        return list(v or [])[:MAX_SERVICES]

    @field_validator("business_type", "industry", "location", "phone", "email", mode="before")
    @classmethod
    def none_to_default(cls, v: Any, info: ValidationInfo) -> str:
        """Replace missing values with the field default."""
        if v is None:
            return "other" if info.field_name in ("business_type", "industry") else ""
        return v

    @classmethod
    def from_analysis(
        cls, analysis: Mapping[str, Any], business_name: Optional[str] = None
    ) -> "BusinessContext":
        """
        Build a context from a raw website analysis result.

        Args:
            analysis: Analysis mapping with a ``business_info`` section
            business_name: Optional name overriding the analysed one

        Returns:
            Sanitized BusinessContext
        """
        info = analysis.get("business_info") or {}
        return cls(
            name=business_name or info.get("name"),
            business_type=info.get("business_type") or "other",
            industry=info.get("industry") or "other",
            description=info.get("description"),
            services=info.get("services"),
            location=info.get("location"),
            phone=info.get("phone"),
            email=info.get("email"),
            confidence=info.get("confidence", 0.5),
        )


class RecommendationItem(BaseModel):
    """A single improvement recommendation from the website analysis."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(None, description="Recommendation identifier")
    type: str = Field(..., description="Recommendation type")
    title: str = Field("", description="Short title")
    description: str = Field("", description="Recommendation details")
    priority: int = Field(3, ge=1, le=5, description="Priority (1-5)")
    estimated_effort: Literal["low", "medium", "high"] = Field(
        "medium", description="Estimated effort"
    )


class GenerationRequest(BaseModel):
    """Validated request for one homepage generation."""

    business: BusinessContext = Field(..., description="Business being given a homepage")
    recommendations: List[RecommendationItem] = Field(
        default_factory=list, description="Analysis recommendations"
    )
    style_preference: StylePreference = Field(
        StylePreference.MODERN, description="Requested visual style"
    )
    include_booking: bool = Field(False, description="Include booking call-to-action")
    color_scheme: Optional[str] = Field(None, description="Requested color scheme")

    @field_validator("color_scheme")
    @classmethod
    def validate_color_scheme(cls, v: Optional[str]) -> Optional[str]:
        """Validate color scheme format."""
        return normalize_color_scheme(v)


class Palette(BaseModel):
    """Primary, secondary and accent colors."""

    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    accent: str


class GenerationResult(BaseModel):
    """Result of one homepage generation. Never mutated after return."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Generation identifier")
    business_name: str = Field(..., description="Business display name")
    generated_at: datetime = Field(..., description="Generation timestamp (UTC)")
    html_code: str = Field(..., description="Generated homepage markup")
    css_code: str = Field(..., description="Custom stylesheet")
    js_code: Optional[str] = Field(None, description="Booking companion script")
    style_applied: StylePreference = Field(..., description="Applied style")
    features_included: List[str] = Field(..., description="Ordered feature tokens")
    estimated_improvement: str = Field(..., description="Improvement narrative")
    generation_time_ms: int = Field(..., ge=0, description="Wall-clock generation time")


# Rendering Models
class ViewportProfile(BaseModel):
    """Width/height/scale/full-page configuration for one capture."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., gt=0, le=4000)
    height: int = Field(..., gt=0, le=4000)
    device_scale_factor: float = Field(1.0, gt=0, le=3.0)
    full_page: bool = True


class CaptureOptions(BaseModel):
    """Options for a single screenshot capture."""

    width: int = Field(1200, gt=0, le=4000, description="Viewport width")
    height: int = Field(800, gt=0, le=4000, description="Viewport height")
    device_scale_factor: float = Field(1.0, gt=0, le=3.0, description="Device pixel ratio")
    full_page: bool = Field(True, description="Capture full page instead of viewport")
    format: ImageFormat = Field(ImageFormat.PNG, description="Image format")
    quality: int = Field(90, ge=0, le=100, description="JPEG quality (0-100)")
    optimize_png: bool = Field(False, description="Recompress PNG output")


class RenderRequest(BaseModel):
    """Request for rendering markup at a named viewport."""

    html_code: str = Field(..., min_length=1, description="Markup to render")
    css_code: str = Field("", description="Styles to inject")
    viewport: ViewportName = Field(ViewportName.DESKTOP, description="Viewport preset")
    format: ImageFormat = Field(ImageFormat.PNG, description="Image format")
    quality: int = Field(90, ge=0, le=100, description="JPEG quality (0-100)")

    @field_validator("css_code", mode="before")
    @classmethod
    def none_to_empty(cls, v: Optional[str]) -> str:
        return v or ""


class RenderResult(BaseModel):
    """Result of one capture at one viewport."""

    image_data: bytes = Field(..., description="Raster image bytes", exclude=True)
    data_url: str = Field(..., description="Base64 data URL")
    viewport: ViewportName = Field(..., description="Viewport used")
    format: ImageFormat = Field(..., description="Image format")
    file_size: int = Field(..., description="Image size in bytes")
    generation_time_ms: int = Field(..., ge=0, description="Capture time")


class ResponsiveCaptures(BaseModel):
    """Data URLs per viewport preset; a failed preset is None."""

    desktop: Optional[str] = None
    tablet: Optional[str] = None
    mobile: Optional[str] = None


# Health Check Models
class HealthReport(BaseModel):
    """Service health status."""

    status: Literal["healthy", "degraded", "unhealthy"] = Field(..., description="Overall status")
    version: str = Field(..., description="Application version")
    checks: Dict[str, bool] = Field(default_factory=dict, description="Capability checks")
    uptime: float = Field(0.0, ge=0, description="Uptime in seconds")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Check timestamp"
    )
