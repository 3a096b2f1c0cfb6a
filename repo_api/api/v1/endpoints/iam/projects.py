"""
IAM – project CRUD and membership.

Projects are addressed by name. ``PUT /project/{name}/members/create`` adds
existing users to a project; the batch is rejected as a whole when any
username is unknown or already a member.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
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
from repo_api.core.membership import MembershipOutcome, add_project_members
from repo_api.db.session import get_db
from repo_api.models.components import Component
from repo_api.models.iam.projects import Project
from repo_api.models.pydantic_models.core_models import ProjectDetailModel
from repo_api.models.pydantic_models.requests import (
    CreateProjectRequest,
    MembersRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Projects"])

INVALID_MEMBERS_MESSAGE = (
    "Request body invalid, a user supplied is already a member of that project "
    "or a user supplied does not exist"
)


def _with_components(stmt):
    return stmt.options(
        selectinload(Project.components).selectinload(Component.releases)
    )


async def _get_project_or_404(name: str, db: AsyncSession) -> Project:
    result = await db.execute(
        _with_components(select(Project).where(Project.project_name == name))
        .execution_options(populate_existing=True)
    )
    project = result.scalar_one_or_none()
    if not project:
        raise not_found_response(f"Project with project name {name} not found")
    return project


@router.get("/projects", response_model=List[ProjectDetailModel])
async def list_projects(db: AsyncSession = Depends(get_db)):
    """List all projects with their components."""
    result = await db.execute(
        _with_components(select(Project)).order_by(Project.project_id)
    )
    return [ProjectDetailModel.model_validate(p) for p in result.scalars().all()]


@router.get("/project/{name}", response_model=ProjectDetailModel)
async def get_project(name: str, db: AsyncSession = Depends(get_db)):
    """Get a project with its components and releases."""
    project = await _get_project_or_404(name, db)
    return ProjectDetailModel.model_validate(project)


@router.put("/project/{project_name}/members/create")
async def add_members(
    project_name: str,
    request: MembersRequest,
    db: AsyncSession = Depends(get_db),
):
    """Add existing users to a project."""
    change = await add_project_members(db, project_name, request.usernames())

    if change.outcome is MembershipOutcome.PROJECT_MISSING:
        raise not_found_response("Project does not exist")
    if change.outcome is not MembershipOutcome.ADDED:
        raise bad_request_response(INVALID_MEMBERS_MESSAGE, details=change.rejected)

    return success_response(message="Added to project")


@router.post("/project", response_model=ProjectDetailModel)
async def create_project(
    request: CreateProjectRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create a new project."""
    if not request.author:
        raise bad_request_response("invalid user_name")

    existing = await db.execute(
        select(Project.project_id).where(
            Project.project_name == request.project_name
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise conflict_response(
            f"Project with project name {request.project_name} already exists"
        )

    project = Project(project_name=request.project_name, author=request.author)
    db.add(project)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise conflict_response(
            f"Project with project name {request.project_name} already exists"
        )

    logger.info(f"Created project {project.project_name} (id: {project.project_id})")
    return ProjectDetailModel.model_validate(
        await _get_project_or_404(project.project_name, db)
    )
