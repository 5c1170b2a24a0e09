"""
Rendering Module
===============

Preview screenshots with browser automation.

Components:
- viewports: Named device viewport presets
- render_engine: Playwright-backed capture with explicit lifecycle
"""
