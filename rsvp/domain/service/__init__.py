"""Domain services."""

from .base import Service
from .invite_service import InviteService

__all__ = [
    "InviteService",
    "Service",
]
