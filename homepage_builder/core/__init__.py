"""
Core Business Logic
==================

Core business logic modules for homepage generation and preview rendering.

Modules:
- generation: prompt construction, completion calls and post-processing
- rendering: headless browser lifecycle and screenshot capture
"""
