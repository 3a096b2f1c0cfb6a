"""
Enumerations for the IAM models.
"""

from enum import Enum


class UserType(str, Enum):
    """Enumeration of user account types"""

    USER = "user"
    ADMIN = "admin"
    SERVICE = "service"
