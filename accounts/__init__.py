"""
Accounts module - user store.

This module handles:
- Account entity, bound to exactly one license at creation
- Registration (atomic with redemption of that license)
- Download gating with a per-account cooldown
- Download and command logs
"""
