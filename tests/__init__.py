"""
Test suite for supplier_registration

Contains:
- tests/unit/          : Unit tests for individual modules
"""
