"""
Core domain models, unit conversions, and input contracts.

This module contains the building blocks that are independent of external
systems (wallets, key stores, Stacks nodes).
"""
