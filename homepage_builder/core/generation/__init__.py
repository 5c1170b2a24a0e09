"""
Generation Module
=================

AI-assisted homepage generation.

Components:
- catalog: Industry palettes and design guidance
- prompt_builder: Deterministic prompt construction
- completion_client: Completion provider invocation
- post_processor: CSS variables, feature list and improvement narrative
- pipeline: Orchestration into a GenerationResult
"""
