"""
Request bodies accepted by the write endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class MemberKey(BaseModel):
    key: str = Field(..., min_length=1)


class MembersRequest(BaseModel):
    """Body of ``PUT /project/{name}/members/create``."""

    members: List[MemberKey]

    def usernames(self) -> list[str]:
        return [m.key for m in self.members]


class EmailCreate(BaseModel):
    email: str = Field(..., min_length=1, max_length=100)
    subscribed: bool = False


class CreateUserRequest(BaseModel):
    user_name: str
    name: Optional[str] = Field(None, max_length=255)
    type: str = "user"
    active: bool = False
    emails: List[EmailCreate] = Field(default_factory=list)


class CreateProjectRequest(BaseModel):
    project_name: str = Field(..., min_length=1)
    author: str = ""


class ReleaseCreate(BaseModel):
    version: str = Field(..., min_length=1)
    url: Optional[str] = None
    created_at: Optional[str] = None


class CreateComponentRequest(BaseModel):
    component_name: str = Field(..., min_length=1)
    project_name: str = Field(..., min_length=1)
    releases: List[ReleaseCreate] = Field(default_factory=list)
