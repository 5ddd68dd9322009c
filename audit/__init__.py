"""
Audit module - administrative store.

This module handles:
- Admin action and license generation batch logs
- HTTP API access log
- Cached statistics snapshots
- Best-effort recording with an in-memory fallback buffer
"""
