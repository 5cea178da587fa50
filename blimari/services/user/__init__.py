"""
User services.
"""

from blimari.services.user.user_service import UserService

__all__ = ["UserService"]
