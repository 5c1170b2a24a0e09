"""
Viewport Presets
================

Named device viewports used for preview captures.
"""

from typing import Dict, Optional, Union

from homepage_builder.models.schemas import CaptureOptions, ImageFormat, ViewportName, ViewportProfile


VIEWPORT_PRESETS: Dict[ViewportName, ViewportProfile] = {
    ViewportName.DESKTOP: ViewportProfile(width=1200, height=800, device_scale_factor=1.0),
    ViewportName.TABLET: ViewportProfile(width=768, height=1024, device_scale_factor=2.0),
    ViewportName.MOBILE: ViewportProfile(width=375, height=667, device_scale_factor=2.0),
}

DEFAULT_VIEWPORT = VIEWPORT_PRESETS[ViewportName.DESKTOP]


def resolve_viewport_name(name: Union[ViewportName, str, None]) -> ViewportName:
    """Map a viewport label onto a preset name, falling back to desktop."""
    try:
        return ViewportName(name)
    except ValueError:
        return ViewportName.DESKTOP


def viewport_profile(name: Union[ViewportName, str, None]) -> ViewportProfile:
    """Get the viewport profile for a preset name."""
    return VIEWPORT_PRESETS[resolve_viewport_name(name)]


def capture_options_for(
    name: Union[ViewportName, str, None],
    format: ImageFormat = ImageFormat.PNG,
    quality: int = 90,
    full_page: Optional[bool] = None,
) -> CaptureOptions:
    """
    Build capture options for a viewport preset.

    Args:
        name: Preset name; unknown names resolve to desktop
        format: Image format
        quality: JPEG quality
        full_page: Override of the preset's full-page setting

    Returns:
        CaptureOptions for the preset
    """
    profile = viewport_profile(name)
    return CaptureOptions(
        width=profile.width,
        height=profile.height,
        device_scale_factor=profile.device_scale_factor,
        full_page=profile.full_page if full_page is None else full_page,
        format=format,
        quality=quality,
    )
