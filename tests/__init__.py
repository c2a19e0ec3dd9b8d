"""
Test suite for the decimal expression calculator

Contains:
- tests/unit/          : Unit tests for individual modules and the CLI
"""
