"""
Test suite for fibcore

Contains:
- tests/unit/          : Unit tests for individual modules
"""
