"""
Credentials module - API credentials for the HTTP validation surface.

Tokens are shown once when issued; only their SHA-256 hash and a short
prefix are stored. Revocation is permanent.
"""
