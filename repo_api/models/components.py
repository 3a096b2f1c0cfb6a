from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from repo_api.db.base import Base


class Component(Base):
    __tablename__ = "components"

    component_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        Integer, ForeignKey("projects.project_id"), index=True, nullable=False
    )
    component_name = Column(String, nullable=False, index=True)
    project_name = Column(String, nullable=False)

    project = relationship("Project", back_populates="components")
    releases = relationship(
        "Release", back_populates="component", cascade="all, delete-orphan"
    )


class Release(Base):
    __tablename__ = "releases"

    release_id = Column(Integer, primary_key=True, autoincrement=True)
    component_id = Column(
        Integer, ForeignKey("components.component_id"), index=True, nullable=False
    )
    # Release timestamps are whatever the build system reported
    created_at = Column(String, nullable=True)
    url = Column(String, nullable=True)
    version = Column(String, nullable=False)

    component = relationship("Component", back_populates="releases")
