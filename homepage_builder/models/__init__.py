"""
Data Models
===========

Pydantic models for generation requests/results and render requests/results.
"""
