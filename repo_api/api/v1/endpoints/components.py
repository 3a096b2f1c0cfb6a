"""
Components and their releases.

A component always belongs to a project, which is resolved from the
``project_name`` supplied on creation.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from repo_api.api.v1.helpers.responses import not_found_response
from repo_api.core.membership import EntityResolver
from repo_api.db.session import get_db
from repo_api.models.components import Component, Release
from repo_api.models.pydantic_models.core_models import ComponentModel
from repo_api.models.pydantic_models.requests import CreateComponentRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Components"])


@router.get("/components", response_model=List[ComponentModel])
async def list_components(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Component)
        .options(selectinload(Component.releases))
        .order_by(Component.component_id)
    )
    return [ComponentModel.model_validate(c) for c in result.scalars().all()]


@router.get("/component/{name}", response_model=ComponentModel)
async def get_component(name: str, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Component)
        .where(Component.component_name == name)
        .options(selectinload(Component.releases))
        .order_by(Component.component_id)
        .limit(1)
        .execution_options(populate_existing=True)
    )
    component = result.scalar_one_or_none()
    if not component:
        raise not_found_response(f"Component with name {name} not found")
    return ComponentModel.model_validate(component)


@router.post("/component/create", response_model=ComponentModel)
async def create_component(
    request: CreateComponentRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create a component under an existing project."""
    project = await EntityResolver(db).resolve_project(request.project_name)
    if not project.exists:
        raise not_found_response("Project does not exist")

    component = Component(
        component_name=request.component_name,
        project_name=request.project_name,
        project_id=project.project_id,
        releases=[
            Release(version=r.version, url=r.url, created_at=r.created_at)
            for r in request.releases
        ],
    )
    db.add(component)
    await db.commit()

    logger.info(
        f"Created component {component.component_name} in project {request.project_name}"
    )

    result = await db.execute(
        select(Component)
        .where(Component.component_id == component.component_id)
        .options(selectinload(Component.releases))
        .execution_options(populate_existing=True)
    )
    return ComponentModel.model_validate(result.scalar_one())
