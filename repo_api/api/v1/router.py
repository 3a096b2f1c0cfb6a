"""
v1 router assembly.

There is no authentication layer; every route is public.
"""

from fastapi import APIRouter

from repo_api.api.v1.endpoints import components
from repo_api.api.v1.endpoints.iam import (
    users as iam_users,
    projects as iam_projects,
)

api_router = APIRouter()
api_router.include_router(iam_users.router)
api_router.include_router(iam_projects.router)
api_router.include_router(components.router)
