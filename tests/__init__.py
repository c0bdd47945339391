"""
Test suite

Contains:
- tests/unit/          : Unit tests for individual modules
"""
