"""Authentication against the pollution provider."""

from .session import Session
from .token_manager import TokenManager

__all__ = [
    "Session",
    "TokenManager",
]
