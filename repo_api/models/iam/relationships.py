"""
Association table for the user ↔ project membership.

The composite primary key is the uniqueness invariant: a (user_id, project_id)
pair can appear at most once.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Table
from sqlalchemy.sql import func
from repo_api.db.base import Base


user_project_association = Table(
    "user_projects",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True),
    Column(
        "project_id",
        Integer,
        ForeignKey("projects.project_id"),
        primary_key=True,
    ),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
)
