"""Core utilities and configuration for World Builder.

This module contains:
- Configuration and settings management
- Security utilities (password hashing, JWT access tokens)
"""
from .config import Settings, get_settings
from .security import (
    create_access_token,
    decode_access_token,
    hash_password,
    is_strong_password,
    verify_password,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Security - Password
    "hash_password",
    "verify_password",
    "is_strong_password",
    # Security - JWT
    "create_access_token",
    "decode_access_token",
]
