"""
IAM – user management.

Lookups by username, user creation with nested emails, membership listing
and soft deletion. Soft-deleted users are excluded from every query here.
"""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from repo_api.api.v1.helpers.responses import (
    bad_request_response,
    conflict_response,
    not_found_response,
    success_response,
)
from repo_api.db.session import get_db
from repo_api.models.iam.projects import Project
from repo_api.models.iam.relationships import user_project_association
from repo_api.models.iam.users import Email, User
from repo_api.models.pydantic_models.core_models import ProjectModel, UserModel
from repo_api.models.pydantic_models.requests import CreateUserRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


# ── helpers ───────────────────────────────────────────────────────────────


async def _get_user_or_404(username: str, db: AsyncSession) -> User:
    result = await db.execute(
        select(User)
        .where(and_(User.user_name == username, User.active_filter()))
        .options(selectinload(User.emails))
        .execution_options(populate_existing=True)
    )
    user = result.scalar_one_or_none()
    if not user:
        raise not_found_response(f"User with username {username} not found")
    return user


# ── endpoints ─────────────────────────────────────────────────────────────


@router.get("/users", response_model=List[UserModel])
async def list_users(db: AsyncSession = Depends(get_db)):
    """List all users with their emails."""
    result = await db.execute(
        select(User)
        .where(User.active_filter())
        .options(selectinload(User.emails))
        .order_by(User.id)
    )
    return [UserModel.model_validate(u) for u in result.scalars().all()]


@router.get("/user/{username}/projects", response_model=List[ProjectModel])
async def get_user_projects(username: str, db: AsyncSession = Depends(get_db)):
    """List the projects a user is a member of."""
    user = await _get_user_or_404(username, db)

    result = await db.execute(
        select(Project)
        .join(
            user_project_association,
            user_project_association.c.project_id == Project.project_id,
        )
        .where(user_project_association.c.user_id == user.id)
        .order_by(Project.project_id)
    )
    projects = result.scalars().all()
    if not projects:
        raise bad_request_response("User has no projects")

    return [ProjectModel.model_validate(p) for p in projects]


@router.get("/user/{username}", response_model=UserModel)
async def get_user(username: str, db: AsyncSession = Depends(get_db)):
    """Get a single user by username."""
    user = await _get_user_or_404(username, db)
    return UserModel.model_validate(user)


@router.post("/user", response_model=UserModel)
async def create_user(
    request: CreateUserRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create a user together with its emails."""
    if not request.user_name:
        raise bad_request_response("invalid user_name")

    existing = await db.execute(
        select(User.id).where(User.user_name == request.user_name)
    )
    if existing.scalar_one_or_none() is not None:
        raise conflict_response(
            f"User with username {request.user_name} already exists"
        )

    user = User(
        user_name=request.user_name,
        name=request.name,
        type=request.type,
        active=request.active,
        emails=[Email(email=e.email, subscribed=e.subscribed) for e in request.emails],
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise conflict_response("A user or email supplied already exists")

    logger.info(f"Created user {user.user_name} (id: {user.id})")
    return UserModel.model_validate(await _get_user_or_404(user.user_name, db))


@router.delete("/users/{user_id}")
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db)):
    """Soft-delete a user."""
    result = await db.execute(
        select(User).where(and_(User.id == user_id, User.active_filter()))
    )
    user = result.scalar_one_or_none()
    if not user:
        raise not_found_response(f"User with id {user_id} not found")

    user.deleted_at = datetime.now(timezone.utc)
    await db.commit()

    return success_response(message="User deleted successfully")
