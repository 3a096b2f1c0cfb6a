"""
Project model.

``project_name`` is the business key used by every route; ``project_id`` is
store-assigned.
"""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from repo_api.db.base import Base
from .relationships import user_project_association


class Project(Base):
    __tablename__ = "projects"

    project_id = Column(Integer, primary_key=True, autoincrement=True)
    author = Column(String, nullable=False, index=True)
    project_name = Column(String, nullable=False, unique=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    users = relationship(
        "User", secondary=user_project_association, back_populates="projects"
    )
    components = relationship(
        "Component", back_populates="project", cascade="all, delete-orphan"
    )
