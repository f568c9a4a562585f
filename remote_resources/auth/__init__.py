"""
Authentication support for the remote_resources transport.
"""

from .api_key import APIKeyAuth, APIKeyConfig
from .base import AuthLocation, AuthMethod, AuthResult

__all__ = [
    "APIKeyAuth",
    "APIKeyConfig",
    "AuthLocation",
    "AuthMethod",
    "AuthResult",
]
