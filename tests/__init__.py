"""
Test Suite
==========

Test suite matching the homepage_builder/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: Integration tests for component interactions
"""
