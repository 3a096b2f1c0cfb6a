"""
Pydantic response models for users, projects, components and releases.

Field names follow the public JSON contract, which predates this service.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmailModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email_id: int
    user_id: int
    email: str
    subscribed: bool


class UserModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_name: str
    type: str
    name: Optional[str] = None
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    emails: List[EmailModel] = Field(default_factory=list)


class ReleaseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    created_at: Optional[str] = None
    url: Optional[str] = None
    version: str


class ComponentModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    component_id: int
    project_id: int
    component_name: str
    project_name: str
    releases: List[ReleaseModel] = Field(default_factory=list)


class ProjectModel(BaseModel):
    """Project without its components, used for membership listings."""

    model_config = ConfigDict(from_attributes=True)

    project_id: int
    author: str
    project_name: str
    created_at: Optional[datetime] = None


class ProjectDetailModel(ProjectModel):
    components: List[ComponentModel] = Field(default_factory=list)
