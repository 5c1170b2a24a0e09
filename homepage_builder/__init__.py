"""
Homepage Builder
================

Generates marketing homepage markup for a business from a structured website
analysis, and renders preview images of that markup at several device widths.

This package provides:
- Prompt construction and a single-shot AI completion call per request
- Post-processing of the completion into a structured generation result
- A lifecycle-managed headless Chromium engine for preview screenshots
"""

__version__ = "1.0.0"
__author__ = "Homepage Builder Team"
