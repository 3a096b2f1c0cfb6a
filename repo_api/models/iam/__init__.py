"""
IAM models: users, their emails, projects, and the membership table.
"""

from .enums import UserType
from .relationships import user_project_association
from .users import User, Email
from .projects import Project

__all__ = [
    "UserType",
    "user_project_association",
    "User",
    "Email",
    "Project",
]
