"""Authentication providers for the embed service."""

from .base import AuthProvider
from .factory import get_auth_provider

__all__ = ["AuthProvider", "get_auth_provider"]
