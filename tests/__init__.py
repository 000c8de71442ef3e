"""
Test suite for priceguard

Contains:
- tests/unit/        : Unit tests for individual modules
- tests/properties/  : Property-based tests (Hypothesis)
"""
