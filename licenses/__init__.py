"""
Licenses module - license keys and their lifecycle.

This module handles:
- License key generation and format rules
- License entity, tiers and expiry
- License lifecycle (create, redeem, revoke)
- License validation, single and batch
"""
