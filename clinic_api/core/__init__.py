"""
Core utilities shared across the clinic API.

This package hosts configuration, logging setup and the credential helpers.
Routers and services should depend on these primitives instead of reading
os.environ or touching the hashing library directly.
"""
