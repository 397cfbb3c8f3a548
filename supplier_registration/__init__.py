"""
Bridge liquidity supplier registration.

Validates operator fee terms, converts amounts to on-chain units, previews the
register-supplier call and hands it to a transport after confirmation.
"""

__version__ = "0.1.0"
