"""
Test suite for the bonding curve issuance engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
