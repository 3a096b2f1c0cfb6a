"""
User and Email models.

Users are soft-deleted: a non-null ``deleted_at`` hides the row from every
lookup (see ``User.active_filter``).
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from repo_api.db.base import Base
from .enums import UserType
from .relationships import user_project_association


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_name = Column(String, unique=True, index=True, nullable=False)
    type = Column(String, nullable=False, default=UserType.USER.value)
    name = Column(String(255), nullable=True)
    active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    emails = relationship(
        "Email", back_populates="user", cascade="all, delete-orphan"
    )
    projects = relationship(
        "Project", secondary=user_project_association, back_populates="users"
    )

    @classmethod
    def active_filter(cls):
        return cls.deleted_at.is_(None)


class Email(Base):
    __tablename__ = "emails"

    email_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    subscribed = Column(Boolean, default=False, nullable=False)

    user = relationship("User", back_populates="emails")
