"""
PATH: users/models/__init__.py

Users models export surface.
"""

from .user import Role, User, UserManager

__all__ = [
    "Role",
    "User",
    "UserManager",
]
