"""
Test Utilities
==============

Common mocks and assertion helpers for testing.
"""
